from __future__ import annotations

from typing import List

from .base import MinimizationStrategy
from ..control import PassControl, failed
from ..tree import Forest, NodeRef


class DDMinStrategy(MinimizationStrategy):
    """
    Delta debugging over all named nodes of the forest.

    Candidates are split into chunks, starting at half of them; each chunk
    is tried as one removal. The chunk size halves down to a single node
    before the pass gives up. After a success the next pass resumes with
    the chunk size that worked.
    """

    name = "ddmin"

    def __init__(self, options=None):
        super().__init__(options)
        self._chunk_size = 0

    def run_pass(self, forest: Forest) -> PassControl:
        candidates: List[NodeRef] = forest.refs(named_only=True, include_roots=False)
        if not candidates:
            return failed("no candidates")

        initial = max(1, len(candidates) // 2)
        chunk = min(self._chunk_size, initial) if self._chunk_size else initial
        while True:
            for start in range(0, len(candidates), chunk):
                result = self.try_remove(candidates[start:start + chunk])
                if not result.failed:
                    self._chunk_size = chunk
                    return result
            if chunk == 1:
                break
            chunk = max(1, chunk // 2)

        self._chunk_size = 0
        return failed("no chunk can be removed")
