"""
Per-file transactional state.

A Cutter keeps two texts for one source unit:

- committed: last known-good text; always parseable and persisted to the working file;
- scratch: the text of the current trial.

Every rewriting operation (excise, reformat, strip_blank_lines) builds the
scratch text from the committed text, so starting a new trial implicitly
discards the previous one. Only the minimizer's commit protocol calls
commit() and rollback().
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set

from .errors import InputParseError, ParseFailure
from .lang.base import Parser, TextRules
from .tree import SyntaxTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceUnit:
    """One input file and the working copy that gets minimized."""
    input_path: Path
    working_path: Path
    charset: str = "utf-8"

    def prepare(self) -> None:
        """Copy input → working (replacing an existing working file)."""
        self.working_path.parent.mkdir(parents=True, exist_ok=True)
        if self.input_path.resolve() != self.working_path.resolve():
            shutil.copyfile(self.input_path, self.working_path)

    def read(self) -> str:
        return self.working_path.read_bytes().decode(self.charset)

    def write(self, text: str, path: Optional[Path] = None) -> Path:
        target = path or self.working_path
        target.write_bytes(text.encode(self.charset))
        return target

    def size_of(self, text: str) -> int:
        return len(text.encode(self.charset))


class CutterState(str, Enum):
    CLEAN = "clean"
    TRIAL = "trial"


class Cutter:
    def __init__(self, unit: SourceUnit, parser: Parser, rules: TextRules):
        self.unit = unit
        self._parser = parser
        self._rules = rules
        self._committed = unit.read()
        self._scratch = self._committed
        self._tree: Optional[SyntaxTree] = None
        self._tree_stale = False
        self._disk_dirty = False
        self._closed = False

    # ---------------- state ----------------

    @property
    def committed_text(self) -> str:
        return self._committed

    @property
    def scratch_text(self) -> str:
        return self._scratch

    @property
    def tree(self) -> SyntaxTree:
        if self._tree is None:
            raise RuntimeError(f"{self.unit.working_path} has no committed tree yet")
        return self._tree

    @property
    def tree_is_stale(self) -> bool:
        """True when the committed text did not parse and `tree` belongs to an older text."""
        return self._tree_stale

    @property
    def state(self) -> CutterState:
        return CutterState.TRIAL if self._scratch != self._committed else CutterState.CLEAN

    @property
    def committed_size(self) -> int:
        return self.unit.size_of(self._committed)

    def all_nodes(self) -> Set[int]:
        """Indices of all nodes of the last committed tree."""
        return set(range(len(self.tree)))

    # ---------------- trial rewriting ----------------

    def excise(self, indices: Iterable[int]) -> None:
        self._scratch = self._rules.excise(self._committed, self.tree, indices)

    def reformat(self) -> None:
        self._scratch = self._rules.reformat(self._committed)

    def strip_blank_lines(self) -> None:
        self._scratch = self._rules.strip_blank_lines(self._committed)

    def try_parse(self) -> SyntaxTree:
        """Parse the scratch text; raises ParseFailure. Does not change any state."""
        return self._parser.parse(self._scratch)

    # ---------------- transaction ----------------

    def commit(self, tree: Optional[SyntaxTree] = None) -> None:
        """
        Promote scratch → committed and persist it.

        `tree` is the parse of the scratch text. Without it the cutter
        reparses on a best-effort basis and keeps its previous tree when
        the text does not parse (unchecked commits).
        """
        stale = False
        if tree is None:
            try:
                tree = self._parser.parse(self._scratch)
            except ParseFailure as e:
                logger.warning("Committed text of %s does not parse: %s", self.unit.working_path, e)
                tree = self._tree
                stale = True
        self._committed = self._scratch
        self._tree = tree
        self._tree_stale = stale
        self.unit.write(self._committed)
        self._disk_dirty = False

    def rollback(self) -> None:
        self._scratch = self._committed

    # ---------------- disk views ----------------

    def materialize_scratch(self, path: Optional[Path] = None) -> Path:
        """
        Write the scratch text to `path` (default: the working file) so
        external tools can see the trial. The working file is put back by
        restore_disk().
        """
        target = self.unit.write(self._scratch, path)
        if path is None or path.resolve() == self.unit.working_path.resolve():
            self._disk_dirty = True
        return target

    def restore_disk(self) -> None:
        if self._disk_dirty:
            self.unit.write(self._committed)
            self._disk_dirty = False

    def close(self) -> None:
        if self._closed:
            return
        self.restore_disk()
        self._closed = True


def parse_all(cutters: Sequence[Cutter]) -> List[SyntaxTree]:
    """
    Parse every scratch text; all or nothing.

    Raises:
        ParseFailure: naming the first unit whose scratch text does not parse
    """
    trees: List[SyntaxTree] = []
    for cutter in cutters:
        try:
            trees.append(cutter.try_parse())
        except ParseFailure as e:
            raise ParseFailure(f"{cutter.unit.working_path}: {e}") from e
    return trees


def establish_baseline(cutters: Sequence[Cutter]) -> List[SyntaxTree]:
    """Initial commit of the unmodified inputs (no invariant check)."""
    try:
        trees = parse_all(cutters)
    except ParseFailure as e:
        raise InputParseError(f"Input does not parse: {e}") from e
    for cutter, tree in zip(cutters, trees):
        cutter.commit(tree)
    return trees


__all__ = ["SourceUnit", "CutterState", "Cutter", "parse_all", "establish_baseline"]
