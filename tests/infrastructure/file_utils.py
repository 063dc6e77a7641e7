"""
Utilities for creating files in tests.
"""

from __future__ import annotations

from pathlib import Path


def write(p: Path, text: str) -> Path:
    """
    Write text to a file, creating parent directories when needed.

    Args:
        p: Path to the file
        text: Content to write

    Returns:
        Path to the created file
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def read(p: Path) -> str:
    return p.read_text(encoding="utf-8")
