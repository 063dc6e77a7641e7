"""
Pass control signals.

Every operation that can end the current pass returns a PassControl:

- CONTINUE: a change was committed; abandon the rest of this pass and start the next one.
- STOP: the run must end now (force-removal was used).
- failed(reason): nothing was committed; the caller decides what to try next.

Strategies must return any non-failed signal to the minimizer unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Control(str, Enum):
    CONTINUE = "continue"
    STOP = "stop"
    FAILED = "failed"


@dataclass(frozen=True)
class PassControl:
    kind: Control
    reason: str = ""

    @property
    def committed(self) -> bool:
        return self.kind is Control.CONTINUE

    @property
    def stopped(self) -> bool:
        return self.kind is Control.STOP

    @property
    def failed(self) -> bool:
        return self.kind is Control.FAILED

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.reason}" if self.reason else self.kind.value


CONTINUE = PassControl(Control.CONTINUE)
STOP = PassControl(Control.STOP)


def failed(reason: str) -> PassControl:
    return PassControl(Control.FAILED, reason)


__all__ = ["Control", "PassControl", "CONTINUE", "STOP", "failed"]
