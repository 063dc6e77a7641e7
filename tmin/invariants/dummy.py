from __future__ import annotations

from .base import Invariant


class DummyInvariant(Invariant):
    """Satisfied whenever every trial text parses."""

    name = "dummy"

    def check(self) -> bool:
        return self.ops.all_inputs_are_parseable()
