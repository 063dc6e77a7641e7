"""
Range-based text deletion used to excise nodes from source text.
Works with character positions, so multi-byte text is safe.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class TextRange:
    """Represents a range in text by character positions."""
    start_char: int
    end_char: int

    def __post_init__(self):
        if self.start_char > self.end_char:
            raise ValueError(f"Invalid range: start_char ({self.start_char}) > end_char ({self.end_char})")

    @property
    def length(self) -> int:
        return self.end_char - self.start_char

    def overlaps(self, other: TextRange) -> bool:
        """Check if this range overlaps with another."""
        return not (self.end_char <= other.start_char or other.end_char <= self.start_char)


@dataclass
class Deletion:
    """A single planned deletion."""
    range: TextRange
    kind: Optional[str]  # node kind, for statistics


class RangeEditor:
    """
    Collects deletions over one text and applies them in a single sweep.

    Overlap policy: wider deletions absorb narrower ones; for equal widths
    the first one wins. Syntax tree spans are either nested or disjoint,
    so in practice this just drops deletions of descendants whose ancestor
    is deleted too.
    """

    def __init__(self, original_text: str):
        self.original_text = original_text
        self.deletions: List[Deletion] = []

    def add_deletion(self, start_char: int, end_char: int, kind: Optional[str] = None) -> None:
        char_range = TextRange(start_char, end_char)
        if char_range.length == 0:
            return

        new_width = char_range.length
        absorbed = []
        for i, existing in enumerate(self.deletions):
            if char_range.overlaps(existing.range):
                if new_width > existing.range.length:
                    absorbed.append(i)
                else:
                    return

        for i in reversed(absorbed):
            del self.deletions[i]

        self.deletions.append(Deletion(char_range, kind))

    def validate(self) -> List[str]:
        errors = []
        for i, deletion in enumerate(self.deletions):
            if deletion.range.start_char < 0:
                errors.append(f"Deletion {i}: start_char ({deletion.range.start_char}) is negative")
            if deletion.range.end_char > len(self.original_text):
                errors.append(
                    f"Deletion {i}: end_char ({deletion.range.end_char}) exceeds text length ({len(self.original_text)})"
                )
        return errors

    def apply(self) -> Tuple[str, Dict[str, Any]]:
        """
        Apply all deletions.

        Returns:
            Tuple of (resulting_text, statistics)
        """
        errors = self.validate()
        if errors:
            raise ValueError(f"Deletion validation failed: {'; '.join(errors)}")

        stats: Dict[str, Any] = {"deletions_applied": 0, "chars_removed": 0, "lines_removed": 0}
        if not self.deletions:
            return self.original_text, stats

        parts: List[str] = []
        cursor = 0
        for deletion in sorted(self.deletions, key=lambda d: d.range.start_char):
            chunk = self.original_text[deletion.range.start_char:deletion.range.end_char]
            parts.append(self.original_text[cursor:deletion.range.start_char])
            cursor = deletion.range.end_char
            stats["deletions_applied"] += 1
            stats["chars_removed"] += len(chunk)
            stats["lines_removed"] += chunk.count("\n")
        parts.append(self.original_text[cursor:])

        return "".join(parts), stats


__all__ = ["TextRange", "Deletion", "RangeEditor"]
