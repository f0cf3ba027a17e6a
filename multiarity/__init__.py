"""
multiarity

Multi-arity functions dispatched on argument count, a replaceable print
port, and a thin JS-style runtime shim.
"""

from .arity import MultiArityFn, defn
from .errors import ArityError, JSError, JSTypeError
from .io_adapter import MockAdapter, RealAdapter, get_adapter, set_adapter, use_mock, use_real
from .printing import (
    RecordingSink,
    get_print_fn,
    install_default_print_fn,
    println,
    set_print_fn,
)
from .registry import Registry, get_registry

__version__ = "0.1.0"
