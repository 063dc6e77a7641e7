from __future__ import annotations

from typing import FrozenSet, List

from .base import MinimizationStrategy
from ..control import PassControl, failed
from ..errors import ConfigError
from ..tree import Forest, NodeRef


class KindsStrategy(MinimizationStrategy):
    """
    Removes nodes of the given kinds: all of them at once, then one by one.

    Options:
        kinds: node kinds to remove (required)
        force: remove all matches unchecked and end the run; use only when
               the result is known to keep the invariant and to parse
    """

    name = "kinds"

    def __init__(self, options=None):
        super().__init__(options)
        if not self.kinds:
            raise ConfigError("Strategy 'kinds' requires a non-empty 'kinds' option")

    @property
    def kinds(self) -> FrozenSet[str]:
        return self.kinds_option("kinds")

    @property
    def force(self) -> bool:
        return bool(self.options.get("force", False))

    def _matches(self, forest: Forest) -> List[NodeRef]:
        return [ref for ref in forest.refs(include_roots=False) if forest.kind(ref) in self.kinds]

    def run_pass(self, forest: Forest) -> PassControl:
        matches = self._matches(forest)
        if not matches:
            return failed("no matching nodes")

        if self.force:
            self.attempts += 1
            self.removals += 1
            return self.ops.force_remove_nodes_and_exit(matches)

        if len(matches) > 1:
            result = self.try_remove(matches)
            if not result.failed:
                return result
        for ref in matches:
            result = self.try_remove([ref])
            if not result.failed:
                return result
        return failed("no matching node can be removed")
