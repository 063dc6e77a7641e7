"""
Strategy interface.

A strategy proposes node removals for one pass over the current forest.
Contract for perform_single_pass():

- return any non-failed signal from MinimizerOperations unchanged and at once;
- return failed(...) only after exhausting every granularity it knows:
  the minimizer treats it as "minimization is complete".
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Collection, FrozenSet, Mapping, Optional, TextIO

from ..control import PassControl
from ..errors import ConfigError
from ..tree import Forest, NodeRef


class MinimizerOperations(ABC):
    """What the minimizer offers to strategies."""

    @abstractmethod
    def try_remove_nodes(self, nodes: Collection[NodeRef]) -> PassControl:
        pass

    @abstractmethod
    def try_cleanup(self) -> PassControl:
        pass

    @abstractmethod
    def force_remove_nodes_and_exit(self, nodes: Collection[NodeRef]) -> PassControl:
        pass


class MinimizationStrategy(ABC):

    name: str = ""

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        self.options: Mapping[str, Any] = dict(options or {})
        self._ops: Optional[MinimizerOperations] = None
        self.passes = 0
        self.attempts = 0
        self.removals = 0

    def initialize(self, ops: MinimizerOperations) -> None:
        self._ops = ops

    @property
    def ops(self) -> MinimizerOperations:
        if self._ops is None:
            raise RuntimeError(f"Strategy '{self.name}' is not initialized")
        return self._ops

    def perform_single_pass(self, forest: Forest) -> PassControl:
        self.passes += 1
        return self.run_pass(forest)

    @abstractmethod
    def run_pass(self, forest: Forest) -> PassControl:
        pass

    def try_remove(self, nodes: Collection[NodeRef]) -> PassControl:
        """try_remove_nodes with bookkeeping."""
        self.attempts += 1
        result = self.ops.try_remove_nodes(nodes)
        if result.committed:
            self.removals += 1
        return result

    def kinds_option(self, key: str) -> FrozenSet[str]:
        """
        Node kinds listed under `key`. A single string is one kind.

        Raises:
            ConfigError: if the value is neither a string nor a list of strings
        """
        value = self.options.get(key)
        if value is None:
            return frozenset()
        if isinstance(value, str):
            return frozenset([value])
        if not isinstance(value, (list, tuple, set, frozenset)) or not all(isinstance(k, str) for k in value):
            raise ConfigError(f"Strategy '{self.name}': '{key}' must be a node kind or a list of node kinds")
        return frozenset(value)

    def print_statistics(self, out: TextIO) -> None:
        out.write(
            f"Strategy '{self.name}': {self.passes} passes, "
            f"{self.attempts} removal attempts, {self.removals} successful\n"
        )
