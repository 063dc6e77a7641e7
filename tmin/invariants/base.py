"""
Invariant interface.

An invariant is the property the minimized sources must keep. It is
queried against the current trial (scratch) state of all units.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Mapping, Optional, TextIO

from ..lang.base import NodeInformationProvider


class InvariantOperations(ABC):
    """What the minimizer offers to invariants."""

    @abstractmethod
    def all_inputs_are_parseable(self) -> bool:
        pass

    @property
    @abstractmethod
    def node_information(self) -> NodeInformationProvider:
        pass

    @abstractmethod
    def scratch_texts(self) -> List[str]:
        pass

    @abstractmethod
    def materialize_scratch(self) -> List[Path]:
        """
        Write the trial texts to the working files and return their paths.
        The minimizer restores the committed texts after the check.
        """
        pass


class Invariant(ABC):

    name: str = ""

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        self.options: Mapping[str, Any] = dict(options or {})
        self._ops: Optional[InvariantOperations] = None
        self.checks = 0
        self.satisfied = 0

    def initialize(self, ops: InvariantOperations) -> None:
        self._ops = ops

    @property
    def ops(self) -> InvariantOperations:
        if self._ops is None:
            raise RuntimeError(f"Invariant '{self.name}' is not initialized")
        return self._ops

    def check_is_satisfied(self) -> bool:
        self.checks += 1
        result = self.check()
        if result:
            self.satisfied += 1
        return result

    @abstractmethod
    def check(self) -> bool:
        pass

    def print_statistics(self, out: TextIO) -> None:
        out.write(f"Invariant '{self.name}': {self.checks} checks, {self.satisfied} satisfied\n")
