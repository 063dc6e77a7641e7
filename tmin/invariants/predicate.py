from __future__ import annotations

from typing import Callable, Sequence

from .base import Invariant


class PredicateInvariant(Invariant):
    """Invariant given as a Python callable over the trial texts (one per unit, in order)."""

    name = "predicate"

    def __init__(self, predicate: Callable[[Sequence[str]], bool], options=None):
        super().__init__(options)
        self._predicate = predicate

    def check(self) -> bool:
        return bool(self._predicate(self.ops.scratch_texts()))
