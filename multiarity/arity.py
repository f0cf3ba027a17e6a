"""
Multi-arity functions

One callable name, several bodies selected by argument count.

    foo = MultiArityFn("foo", {0: foo_0, 1: foo_1})
    foo("x")          # dispatches to foo_1
    foo.arity1("x")   # calls foo_1 directly
    foo.arity(0)()    # calls foo_0 directly
    foo.arities       # (0, 1)

The table is frozen at construction. `extend` builds a new function
with one more arity instead of changing the existing one.
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Tuple
import inspect
import re

from .errors import ArityError


ArityFn = Callable[..., Any]

_ARITY_ATTR = re.compile(r"arity(0|[1-9]\d*)")


class MultiArityFn:
    """A named function dispatching on the number of arguments"""

    __slots__ = ("name", "methods")

    def __init__(self, name: str, methods: Mapping[int, ArityFn]):
        if not methods:
            raise ValueError(f"{name}: at least one arity is required")
        for n, fn in methods.items():
            if not isinstance(n, int) or isinstance(n, bool) or n < 0:
                raise ValueError(f"{name}: arity must be a non-negative int, got {n!r}")
            if not callable(fn):
                raise TypeError(f"{name}: arity {n} is not callable")

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "methods", MappingProxyType(dict(methods)))

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is read-only")

    # --- Dispatch ---

    def apply(self, *args: Any) -> Any:
        """Select the entry for len(args) and call it"""
        method = self.methods.get(len(args))
        if method is None:
            raise ArityError(len(args))
        return method(*args)

    def __call__(self, *args: Any) -> Any:
        return self.apply(*args)

    # --- Direct entries ---

    def arity(self, n: int) -> ArityFn:
        """Entry for exactly n arguments"""
        if isinstance(n, bool) or not isinstance(n, int):
            raise ArityError(n)
        try:
            return self.methods[n]
        except KeyError:
            raise ArityError(n) from None

    def __getattr__(self, attr: str) -> ArityFn:
        match = _ARITY_ATTR.fullmatch(attr)
        if match:
            n = int(match.group(1))
            if n in self.methods:
                return self.methods[n]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {attr!r}")

    # --- Introspection ---

    @property
    def arities(self) -> Tuple[int, ...]:
        """Supported argument counts, ascending"""
        return tuple(sorted(self.methods))

    def extend(self, n: int, fn: ArityFn) -> "MultiArityFn":
        """New function with an added (or replaced) arity n"""
        methods: Dict[int, ArityFn] = dict(self.methods)
        methods[n] = fn
        return MultiArityFn(self.name, methods)

    def __repr__(self):
        arities = ", ".join(str(n) for n in self.arities)
        return f"MultiArityFn({self.name}, arities=[{arities}])"


def defn(name: str, *fns: ArityFn) -> MultiArityFn:
    """
    Build a MultiArityFn from plain functions, keyed by their
    positional parameter count.

        greet = defn("greet", lambda: "hi", lambda who: f"hi {who}")
    """
    methods: Dict[int, ArityFn] = {}
    for fn in fns:
        params = inspect.signature(fn).parameters.values()
        positional = [p for p in params
                      if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)]
        n = len(positional)
        if n in methods:
            raise ValueError(f"{name}: duplicate arity {n}")
        methods[n] = fn
    return MultiArityFn(name, methods)
