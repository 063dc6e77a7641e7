"""
Minimization engine.

Owns the cutters and the current forest, runs the pass loop and routes
every removal or cleanup through one commit protocol that treats all
cutters as a single transaction.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Collection, Dict, List, Optional, Sequence, Set, TextIO, Tuple

from .control import CONTINUE, STOP, PassControl, failed
from .cutter import Cutter, CutterState, SourceUnit, establish_baseline, parse_all
from .errors import ParseFailure
from .invariants.base import Invariant, InvariantOperations
from .lang.base import Language, NodeInformationProvider
from .report import Snapshot
from .strategies.base import MinimizationStrategy, MinimizerOperations
from .tree import Forest, NodeRef

logger = logging.getLogger(__name__)

CLEANUP_PERIOD = 10
STALE_TREE_NOTE = " (node count is approximate: some files do not parse)"


class Minimizer(InvariantOperations, MinimizerOperations):

    def __init__(
            self,
            units: Sequence[SourceUnit],
            language: Language,
            invariant: Invariant,
            strategy: MinimizationStrategy,
            out: Optional[TextIO] = None,
    ):
        if not units:
            raise ValueError("Nothing to minimize: no source units")
        self.language = language
        self.invariant = invariant
        self.strategy = strategy
        self._out = out if out is not None else sys.stdout

        parser = language.create_parser()
        self._cutters: List[Cutter] = []
        for unit in units:
            unit.prepare()
            self._cutters.append(Cutter(unit, parser, language.rules))
        self._forest = Forest(0, establish_baseline(self._cutters))

        self._exit_requested = False
        self._original: Tuple[int, int] = self._measure()
        self.pass_number = 0
        self.commits = 0
        self.failed_attempts = 0
        self.history: List[Snapshot] = []

    # ---------------- state views ----------------

    @property
    def forest(self) -> Forest:
        return self._forest

    @property
    def cutters(self) -> Tuple[Cutter, ...]:
        return tuple(self._cutters)

    @property
    def exit_requested(self) -> bool:
        return self._exit_requested

    @property
    def original_size(self) -> int:
        return self._original[0]

    @property
    def original_node_count(self) -> int:
        return self._original[1]

    # ---------------- InvariantOperations ----------------

    def all_inputs_are_parseable(self) -> bool:
        try:
            parse_all(self._cutters)
        except ParseFailure:
            return False
        return True

    @property
    def node_information(self) -> NodeInformationProvider:
        return self.language.node_information

    def scratch_texts(self) -> List[str]:
        return [cutter.scratch_text for cutter in self._cutters]

    def materialize_scratch(self) -> List[Path]:
        return [cutter.materialize_scratch() for cutter in self._cutters]

    # ---------------- commit protocol ----------------

    def _begin_trial(self) -> None:
        # At most one trial at a time: leftovers of a failed attempt are discarded.
        for cutter in self._cutters:
            cutter.rollback()

    def _unchanged(self) -> bool:
        return all(cutter.state is CutterState.CLEAN for cutter in self._cutters)

    def _attempt_commit(self) -> PassControl:
        """
        Check the invariant on the trial, then parse and commit all cutters or none.

        On failure the cutters stay in trial state; the next trial discards it.
        """
        try:
            satisfied = self.invariant.check_is_satisfied()
        finally:
            for cutter in self._cutters:
                cutter.restore_disk()
        if not satisfied:
            self.failed_attempts += 1
            return failed("invariant is not satisfied")

        try:
            trees = parse_all(self._cutters)
        except ParseFailure as e:
            self.failed_attempts += 1
            return failed(f"does not parse: {e}")

        for cutter, tree in zip(self._cutters, trees):
            cutter.commit(tree)
        self._forest = Forest(self._forest.generation + 1, trees)
        self.commits += 1
        return CONTINUE

    def _partition(self, nodes: Collection[NodeRef]) -> Dict[int, Set[int]]:
        """Split refs by unit against the current forest; unknown refs are dropped."""
        partition: Dict[int, Set[int]] = {}
        unknown = 0
        for ref in nodes:
            if self._forest.contains(ref):
                partition.setdefault(ref.unit, set()).add(ref.index)
            else:
                unknown += 1
        if unknown:
            logger.warning(
                "Strategy tries to remove %d unknown node(s) (not in forest generation %d); ignored",
                unknown, self._forest.generation,
            )
        return partition

    # ---------------- MinimizerOperations ----------------

    def try_remove_nodes(self, nodes: Collection[NodeRef]) -> PassControl:
        if self._exit_requested:
            return STOP
        partition = self._partition(nodes)
        self._begin_trial()
        for unit, indices in partition.items():
            self._cutters[unit].excise(indices)
        if self._unchanged():
            return failed("removal does not change any file")
        return self._attempt_commit()

    def try_cleanup(self) -> PassControl:
        if self._exit_requested:
            return STOP
        self._begin_trial()
        for cutter in self._cutters:
            cutter.reformat()
        if self._unchanged():
            return failed("nothing to clean up")
        return self._attempt_commit()

    def force_remove_nodes_and_exit(self, nodes: Collection[NodeRef]) -> PassControl:
        """
        Remove and commit without checking the invariant or parseability,
        then end the run. The caller vouches for the result.
        """
        partition = self._partition(nodes)
        self._begin_trial()
        for unit, cutter in enumerate(self._cutters):
            cutter.excise(partition.get(unit, ()))
            cutter.commit()
        self._forest = Forest(self._forest.generation + 1, [cutter.tree for cutter in self._cutters])
        self.commits += 1
        self._exit_requested = True
        return STOP

    # ---------------- pass loop ----------------

    def _cleanup(self) -> PassControl:
        self._begin_trial()
        for cutter in self._cutters:
            cutter.reformat()
        return self._attempt_commit()

    def _measure(self) -> Tuple[int, int]:
        size = sum(cutter.committed_size for cutter in self._cutters)
        return size, self._forest.node_count()

    def _report(self, label: str) -> Snapshot:
        size, nodes = self._measure()
        if any(cutter.tree_is_stale for cutter in self._cutters):
            # node counts of unparseable files come from their last parseable text
            label += STALE_TREE_NOTE
        snapshot = Snapshot.capture(label, size, nodes, *self._original)
        self.history.append(snapshot)
        self._out.write(snapshot.format() + "\n")
        self._out.flush()
        return snapshot

    def _run_passes(self) -> None:
        while not self._exit_requested:
            self.pass_number += 1
            cleanup_pass = self.pass_number % CLEANUP_PERIOD == 0
            commits_before = self.commits

            if cleanup_pass:
                self._cleanup()
                keep_going = True
            else:
                result = self.strategy.perform_single_pass(self._forest)
                keep_going = result.committed
                if result.failed:
                    logger.debug("Pass #%d: strategy exhausted (%s)", self.pass_number, result.reason)
                elif result.committed and self.commits == commits_before:
                    logger.warning("Strategy reported progress without a commit; stopping")
                    keep_going = False

            label = f"After pass #{self.pass_number}"
            if cleanup_pass:
                label += " (white-space cleanup)"
            self._report(label)

            if not keep_going:
                break

    def run(self) -> None:
        self.strategy.initialize(self)
        self.invariant.initialize(self)

        size, nodes = self._original
        self._out.write(f"Original file(s): {size} bytes, {nodes} nodes.\n")
        self._out.flush()

        try:
            self._cleanup()
            self._report("After initial white-space cleanup")

            self._run_passes()

            self._cleanup()
            self._report("After final white-space cleanup")
            for cutter in self._cutters:
                self._begin_trial()
                cutter.strip_blank_lines()
                self._attempt_commit()
            self._report("After blank line clean up")
        finally:
            for cutter in self._cutters:
                cutter.rollback()
                cutter.close()

        self.invariant.print_statistics(self._out)
        self.strategy.print_statistics(self._out)
        self._out.flush()


__all__ = ["Minimizer", "CLEANUP_PERIOD", "STALE_TREE_NOTE"]
