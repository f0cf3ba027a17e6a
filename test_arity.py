#!/usr/bin/env python3
"""
Tests for multi-arity dispatch and the hello driver.

Every call is observed through a recording sink on a mock adapter.
Run with pytest, or directly: python test_arity.py
"""

import pytest

from multiarity import (
    ArityError,
    JSError,
    MultiArityFn,
    RecordingSink,
    defn,
    get_print_fn,
    install_default_print_fn,
    set_print_fn,
    use_mock,
    use_real,
)
from multiarity import hello
from multiarity.printing import default_print_fn
from multiarity.hello import foo


def recording():
    """Mock adapter plus a recording sink installed as the print port"""
    mock = use_mock()
    sink = RecordingSink()
    set_print_fn(sink)
    return mock, sink


def teardown_function(function):
    install_default_print_fn()
    use_real()


# =============================================================================
# foo: the scenarios
# =============================================================================

def test_no_args_greets_world():
    mock, sink = recording()
    foo()
    assert sink.calls == [("Hello ", "World")]


def test_one_arg_greets_it():
    mock, sink = recording()
    foo("Space")
    assert sink.calls == [("Hello ", "Space")]


def test_arity0_entry_direct():
    mock, sink = recording()
    foo.arity0()
    assert sink.calls == [("Hello ", "World")]


def test_arity1_entry_direct():
    mock, sink = recording()
    foo.arity1("Space")
    assert sink.calls == [("Hello ", "Space")]


def test_two_args_raise_before_output():
    mock, sink = recording()
    with pytest.raises(ArityError) as info:
        foo("Space", "Hyper")
    assert str(info.value) == "Invalid arity: 2"
    assert info.value.message == "Invalid arity: 2"
    assert info.value.count == 2
    assert sink.calls == []
    assert mock.stdout_buffer == ""


def test_replaced_sink_leaves_original_untouched():
    mock, original = recording()
    replacement = RecordingSink()
    set_print_fn(replacement)

    foo()

    assert replacement.calls == [("Hello ", "World")]
    assert original.calls == []


# =============================================================================
# Properties
# =============================================================================

def test_apply_and_entries_agree():
    for args in [(), ("Space",), (42,), (None,)]:
        mock, via_apply = recording()
        r1 = foo.apply(*args)

        direct = RecordingSink()
        set_print_fn(direct)
        r2 = foo.arity(len(args))(*args)

        assert via_apply.calls == direct.calls
        assert r1 == r2


def test_call_is_apply():
    mock, sink = recording()
    foo("x")
    foo.apply("x")
    assert sink.calls == [("Hello ", "x"), ("Hello ", "x")]


def test_argument_not_coerced():
    mock, sink = recording()
    marker = object()
    foo(marker)
    assert sink.calls[0][1] is marker


def test_returns_sink_result():
    mock = use_mock()
    set_print_fn(lambda *values: ("seen",) + values)
    assert foo("Space") == ("seen", "Hello ", "Space")
    assert foo.arity0() == ("seen", "Hello ", "World")


def test_unsupported_arities_raise():
    mock, sink = recording()
    for n in [2, 3, 5, 10]:
        with pytest.raises(ArityError) as info:
            foo(*range(n))
        message = str(info.value)
        assert message.startswith("Invalid arity: ")
        assert message == f"Invalid arity: {n}"
    assert sink.calls == []


def test_arity_error_is_js_error():
    with pytest.raises(JSError):
        foo(1, 2)


def test_arity0_reenters_dispatcher():
    seen = []

    def arity0():
        return traced("World")

    def arity1(x):
        return x

    plain = MultiArityFn("traced", {0: arity0, 1: arity1})

    class Traced:
        def __call__(self, *args):
            seen.append(len(args))
            return plain.apply(*args)

    traced = Traced()

    assert traced() == "World"
    assert seen == [0, 1]


def test_foo_introspection():
    assert foo.arities == (0, 1)
    assert foo.name == "foo"
    assert repr(foo) == "MultiArityFn(foo, arities=[0, 1])"


# =============================================================================
# MultiArityFn
# =============================================================================

def test_table_is_read_only():
    fn = MultiArityFn("f", {1: lambda x: x})
    with pytest.raises(TypeError):
        fn.methods[2] = lambda x, y: x
    with pytest.raises(AttributeError):
        fn.name = "g"
    assert fn.arities == (1,)


def test_table_copied_at_construction():
    methods = {0: lambda: "zero"}
    fn = MultiArityFn("f", methods)
    methods[1] = lambda x: x
    assert fn.arities == (0,)


def test_extend_returns_new_fn():
    one = MultiArityFn("f", {1: lambda x: x})
    two = one.extend(2, lambda x, y: x + y)

    assert one.arities == (1,)
    assert two.arities == (1, 2)
    assert two(3, 4) == 7
    with pytest.raises(ArityError):
        one(3, 4)


def test_arity_lookup_by_number():
    fn = MultiArityFn("f", {0: lambda: "zero", 2: lambda a, b: "two"})
    assert fn.arity(0)() == "zero"
    assert fn.arity2(1, 2) == "two"
    with pytest.raises(ArityError) as info:
        fn.arity(1)
    assert str(info.value) == "Invalid arity: 1"


def test_missing_arity_attribute():
    with pytest.raises(AttributeError):
        foo.arity7
    with pytest.raises(AttributeError):
        foo.something_else


def test_arity_names_are_canonical():
    assert foo.arity1 is foo.arity(1)
    with pytest.raises(AttributeError):
        foo.arity01
    with pytest.raises(AttributeError):
        foo.arity00
    assert not hasattr(foo, "arity01")
    assert not hasattr(foo, "arity1\n")


def test_arity_rejects_bool():
    with pytest.raises(ArityError):
        foo.arity(True)
    with pytest.raises(ArityError):
        foo.arity(False)


def test_errors_are_hashable():
    errors = {ArityError(2), ArityError(2), JSError("Invalid arity: 2")}
    assert len(errors) == 2
    assert hash(ArityError(3)) == hash(ArityError(3))
    assert ArityError(2) == ArityError(2)


def test_construction_validates_table():
    with pytest.raises(ValueError):
        MultiArityFn("empty", {})
    with pytest.raises(ValueError):
        MultiArityFn("negative", {-1: lambda: None})
    with pytest.raises(ValueError):
        MultiArityFn("named", {"one": lambda x: x})
    with pytest.raises(TypeError):
        MultiArityFn("not_callable", {0: "nope"})


def test_defn_keys_by_parameter_count():
    greet = defn("greet", lambda: "hi", lambda who: f"hi {who}", lambda a, b: f"hi {a} and {b}")
    assert greet.arities == (0, 1, 2)
    assert greet() == "hi"
    assert greet("you") == "hi you"
    assert greet("you", "me") == "hi you and me"


def test_defn_rejects_duplicate_arity():
    with pytest.raises(ValueError):
        defn("dup", lambda x: x, lambda y: y)


# =============================================================================
# Driver
# =============================================================================

def test_main_prints_four_lines_then_fails():
    mock = use_mock()
    install_default_print_fn()

    with pytest.raises(ArityError) as info:
        hello.main()

    assert str(info.value) == "Invalid arity: 2"
    assert mock.stdout_buffer == (
        "Hello  World\n"
        "Hello  Space\n"
        "Hello  World\n"
        "Hello  Space\n"
    )


def test_reinstalling_default_sink_is_idempotent():
    mock = use_mock()
    set_print_fn(RecordingSink())
    install_default_print_fn()
    install_default_print_fn()
    assert get_print_fn() is default_print_fn
    foo()
    assert mock.stdout_buffer == "Hello  World\n"


if __name__ == "__main__":
    import sys
    sys.exit(pytest.main([__file__, "-v"]))
