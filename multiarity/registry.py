"""
Function Registry

Central storage for multi-arity functions, looked up by
"namespace/name". Used by the scenario runner and for introspection.
"""

from typing import Any, Dict, List, Optional, Tuple

from .arity import MultiArityFn
from .io_adapter import get_adapter


# =============================================================================
# REGISTRY
# =============================================================================

class Registry:
    """Central function registry"""

    def __init__(self):
        self.fns: Dict[str, MultiArityFn] = {}  # full_name → fn
        self.by_arity: Dict[int, List[str]] = {}  # arity → [full_names]

    def register(self, namespace: str, fn: MultiArityFn) -> str:
        """Register a function under namespace/fn.name, return its full name"""
        full_name = f"{namespace}/{fn.name}"

        if full_name in self.fns:
            self._unindex(full_name)
        self.fns[full_name] = fn

        # Index by arity
        for n in fn.arities:
            self.by_arity.setdefault(n, []).append(full_name)

        get_adapter().log("debug", "registered", {"fn": full_name, "arities": list(fn.arities)})
        return full_name

    def _unindex(self, full_name: str) -> None:
        for names in self.by_arity.values():
            if full_name in names:
                names.remove(full_name)

    def get(self, full_name: str) -> Optional[MultiArityFn]:
        """Get function by namespace/name"""
        return self.fns.get(full_name)

    def resolve(self, full_name: str) -> MultiArityFn:
        """Like get, but raises KeyError for unknown names"""
        fn = self.get(full_name)
        if fn is None:
            raise KeyError(f"Unknown function: {full_name}")
        return fn

    def accepting(self, arity: int) -> List[str]:
        """Names of functions that accept exactly `arity` arguments"""
        return sorted(self.by_arity.get(arity, []))

    def arities(self) -> List[Tuple[str, Tuple[int, ...]]]:
        """Every registered function with its supported arities"""
        return [(name, self.fns[name].arities) for name in sorted(self.fns)]

    def stats(self) -> Dict[str, Any]:
        """Registry statistics"""
        return {
            "total_fns": len(self.fns),
            "namespaces": len(set(name.split("/")[0] for name in self.fns)),
            "max_arity": max((n for n, names in self.by_arity.items() if names), default=None),
        }


# =============================================================================
# GLOBAL REGISTRY
# =============================================================================

_registry: Optional[Registry] = None


def create_stdlib() -> Registry:
    """Registry holding the runtime's own multi-arity functions"""
    from . import hello, js

    registry = Registry()
    registry.register("hello", hello.foo)
    registry.register("js", js.parse_int)
    return registry


def get_registry() -> Registry:
    """Get global registry instance"""
    global _registry
    if _registry is None:
        _registry = create_stdlib()
    return _registry
