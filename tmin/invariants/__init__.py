from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Type

from .base import Invariant, InvariantOperations
from .dummy import DummyInvariant
from .predicate import PredicateInvariant
from .process import ExitCodeInvariant, MessageInvariant, ProcessInvariant
from ..errors import UnknownComponentError

# Invariants that can be built from configuration alone
_INVARIANTS: Dict[str, Type[Invariant]] = {
    cls.name: cls for cls in (DummyInvariant, ExitCodeInvariant, MessageInvariant)
}


def create_invariant(name: str, options: Optional[Mapping[str, Any]] = None) -> Invariant:
    cls = _INVARIANTS.get(name)
    if cls is None:
        raise UnknownComponentError("invariant", name, list_invariants())
    return cls(options)


def list_invariants() -> List[str]:
    return sorted(_INVARIANTS)


__all__ = [
    "Invariant", "InvariantOperations",
    "DummyInvariant", "PredicateInvariant", "ProcessInvariant", "ExitCodeInvariant", "MessageInvariant",
    "create_invariant", "list_invariants",
]
