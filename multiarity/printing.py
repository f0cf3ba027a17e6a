"""
Print port

A process-wide, replaceable sink for line-oriented output.
Everything printed by callables goes through `println`, which looks the
sink up at call time.
"""

from typing import Any, Callable, List, Optional, Tuple

from .io_adapter import get_adapter


PrintFn = Callable[..., Any]


def render(*values: Any) -> str:
    """Space-separated rendering of values, no trailing newline"""
    return " ".join(str(v) for v in values)


def default_print_fn(*values: Any) -> None:
    """Write values space-separated plus newline to the adapter's stdout"""
    get_adapter().stdout(render(*values))
    return None


class RecordingSink:
    """
    Sink that keeps every call's argument tuple in order.

    With `forward`, each call is also passed on and its result returned.
    """

    def __init__(self, forward: Optional[PrintFn] = None):
        self.calls: List[Tuple[Any, ...]] = []
        self.forward = forward

    def __call__(self, *values: Any) -> Any:
        self.calls.append(values)
        if self.forward is not None:
            return self.forward(*values)
        return None

    def clear(self) -> None:
        self.calls = []

    def __repr__(self):
        return f"RecordingSink({len(self.calls)} calls)"


# =============================================================================
# GLOBAL SINK (can be swapped)
# =============================================================================

_print_fn: PrintFn = default_print_fn


def set_print_fn(fn: PrintFn) -> None:
    """Replace the current sink"""
    global _print_fn
    _print_fn = fn


def get_print_fn() -> PrintFn:
    """Get the current sink"""
    return _print_fn


def install_default_print_fn() -> None:
    """Reinstall the default sink"""
    set_print_fn(default_print_fn)


def println(*values: Any) -> Any:
    """Forward values unchanged to the current sink"""
    return _print_fn(*values)
