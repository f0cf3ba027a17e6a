#!/usr/bin/env python3
"""
hello

    (defn foo
      ([] (foo "World"))
      ([x] (println "Hello " x)))

Run with: python -m multiarity.hello
"""

from typing import Any

from .arity import MultiArityFn
from .printing import println


def foo_arity0() -> Any:
    # goes back through the dispatcher, not straight to foo_arity1
    return foo("World")


def foo_arity1(x: Any) -> Any:
    return println("Hello ", x)


foo = MultiArityFn("foo", {
    0: foo_arity0,
    1: foo_arity1,
})


def main() -> None:
    foo()
    foo("Space")
    foo.arity0()
    foo.arity1("Space")
    foo("Space", "Hyper")


if __name__ == "__main__":
    main()
