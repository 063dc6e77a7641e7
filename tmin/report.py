"""
Progress metrics and the final run report.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


def _percent(value: int, original: int) -> int:
    return value * 100 // original if original else 100


class Snapshot(BaseModel):
    """Total committed size and node count at one point of the run."""
    label: str
    size_bytes: int
    node_count: int
    size_percent: int = 100
    node_percent: int = 100

    @classmethod
    def capture(cls, label: str, size_bytes: int, node_count: int,
                original_size: int, original_nodes: int) -> Snapshot:
        return cls(
            label=label,
            size_bytes=size_bytes,
            node_count=node_count,
            size_percent=_percent(size_bytes, original_size),
            node_percent=_percent(node_count, original_nodes),
        )

    def format(self) -> str:
        return (
            f"{self.label}: size {self.size_bytes} bytes ({self.size_percent}%), "
            f"{self.node_count} nodes ({self.node_percent}%)"
        )


class FileReport(BaseModel):
    input: str
    output: str
    size_bytes: int


class RunReport(BaseModel):
    tool_version: str
    language: str
    strategy: str
    invariant: str
    original_size_bytes: int
    original_node_count: int
    passes: int
    commits: int
    failed_attempts: int
    forced_exit: bool = False
    history: List[Snapshot] = Field(default_factory=list)
    files: List[FileReport] = Field(default_factory=list)


__all__ = ["Snapshot", "FileReport", "RunReport"]
