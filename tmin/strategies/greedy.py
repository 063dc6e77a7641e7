from __future__ import annotations

from typing import FrozenSet

from .base import MinimizationStrategy
from ..control import PassControl, failed
from ..tree import Forest


class GreedyStrategy(MinimizationStrategy):
    """
    Tries to remove single named nodes, outermost first.

    Options:
        skip_kinds: node kinds never proposed for removal
    """

    name = "greedy"

    def __init__(self, options=None):
        super().__init__(options)
        self.skip_kinds: FrozenSet[str] = self.kinds_option("skip_kinds")

    def run_pass(self, forest: Forest) -> PassControl:
        for ref in forest.refs(named_only=True, include_roots=False):
            if forest.kind(ref) in self.skip_kinds:
                continue
            result = self.try_remove([ref])
            if not result.failed:
                return result
        return failed("no single node can be removed")
