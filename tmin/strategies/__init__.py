from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Type

from .base import MinimizationStrategy, MinimizerOperations
from .ddmin import DDMinStrategy
from .greedy import GreedyStrategy
from .kinds import KindsStrategy
from ..errors import UnknownComponentError

_STRATEGIES: Dict[str, Type[MinimizationStrategy]] = {
    cls.name: cls for cls in (GreedyStrategy, DDMinStrategy, KindsStrategy)
}


def create_strategy(name: str, options: Optional[Mapping[str, Any]] = None) -> MinimizationStrategy:
    cls = _STRATEGIES.get(name)
    if cls is None:
        raise UnknownComponentError("strategy", name, list_strategies())
    return cls(options)


def list_strategies() -> List[str]:
    return sorted(_STRATEGIES)


__all__ = [
    "MinimizationStrategy", "MinimizerOperations",
    "GreedyStrategy", "DDMinStrategy", "KindsStrategy",
    "create_strategy", "list_strategies",
]
