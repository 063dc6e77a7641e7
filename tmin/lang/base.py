"""
Language abstraction: parser, text rewriting rules and node introspection.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..range_edits import RangeEditor
from ..tree import SyntaxNode, SyntaxTree

logger = logging.getLogger(__name__)


class Parser(ABC):
    """
    Turns text into a SyntaxTree.

    Must be deterministic and raise ParseFailure (without side effects)
    when the text does not parse.
    """

    @abstractmethod
    def parse(self, text: str) -> SyntaxTree:
        pass


class TextRules:
    """
    How removing nodes and cleaning up layout rewrites text.

    All operations are pure functions of their input text.
    """

    def excise(self, text: str, tree: SyntaxTree, indices: Iterable[int]) -> str:
        """Remove the spans of the given nodes from text (the text `tree` was parsed from)."""
        editor = RangeEditor(text)
        for index in sorted(set(indices)):
            node = tree.node(index)
            start, end = self.removal_range(text, node.start, node.end)
            editor.add_deletion(start, end, node.kind)
        result, stats = editor.apply()
        logger.debug(
            "Excised %d span(s): %d chars, %d line(s)",
            stats["deletions_applied"], stats["chars_removed"], stats["lines_removed"],
        )
        return result

    @staticmethod
    def removal_range(text: str, start: int, end: int) -> Tuple[int, int]:
        """
        Widen a node span so that removing it leaves tidy text.

        Horizontal whitespace after the span goes with it when the span
        itself follows whitespace (so no two tokens get glued together).
        A span that is the only content of its line(s) takes the whole
        line(s) including indentation and line break.
        """
        line_start = text.rfind("\n", 0, start) + 1
        if start == line_start or text[start - 1] in " \t":
            while end < len(text) and text[end] in " \t":
                end += 1

        if text[line_start:start].strip():
            return start, end
        if end == len(text):
            return line_start, end
        if text[end] == "\n":
            return line_start, end + 1
        if text.startswith("\r\n", end):
            return line_start, end + 2
        return start, end

    @staticmethod
    def reformat(text: str) -> str:
        """
        Normalize layout: strip trailing whitespace, collapse blank line runs,
        drop leading/trailing blank lines, end with exactly one newline.
        """
        lines: List[str] = []
        for line in text.split("\n"):
            line = line.rstrip()
            if not line and (not lines or not lines[-1]):
                continue
            lines.append(line)
        while lines and not lines[-1]:
            lines.pop()
        return "\n".join(lines) + "\n" if lines else ""

    @staticmethod
    def strip_blank_lines(text: str) -> str:
        lines = [line for line in text.split("\n") if line.strip()]
        return "\n".join(lines) + "\n" if lines else ""


class NodeInformationProvider:
    """Language-specific facts about nodes, for invariants that need them."""

    def __init__(self, declaration_kinds: Iterable[str] = ()):
        self.declaration_kinds: FrozenSet[str] = frozenset(declaration_kinds)

    @staticmethod
    def kind(node: SyntaxNode) -> str:
        return node.kind

    @staticmethod
    def is_named(node: SyntaxNode) -> bool:
        return node.named

    @staticmethod
    def text(tree: SyntaxTree, node: SyntaxNode) -> str:
        return tree.text_of(node)

    def is_declaration(self, node: SyntaxNode) -> bool:
        return node.kind in self.declaration_kinds

    @staticmethod
    def declared_name(tree: SyntaxTree, node: SyntaxNode) -> Optional[str]:
        """Text of the child playing the `name` role, if any."""
        for child_index in node.children:
            child = tree.node(child_index)
            if child.field_name == "name":
                return tree.text_of(child)
        return None

    def declarations(self, tree: SyntaxTree) -> Dict[str, List[SyntaxNode]]:
        """Declared name → declaring nodes, in source order."""
        result: Dict[str, List[SyntaxNode]] = {}
        for node in tree.walk():
            if not self.is_declaration(node):
                continue
            name = self.declared_name(tree, node)
            if name is not None:
                result.setdefault(name, []).append(node)
        return result


class Language(ABC):
    """A minimizable language: parser factory plus rewriting rules."""

    name: str = ""
    extensions: Tuple[str, ...] = ()
    declaration_kinds: FrozenSet[str] = frozenset()

    def __init__(self):
        self.rules = self.create_text_rules()
        self.node_information = NodeInformationProvider(self.declaration_kinds)

    @abstractmethod
    def create_parser(self) -> Parser:
        pass

    def create_text_rules(self) -> TextRules:
        return TextRules()


__all__ = ["Parser", "TextRules", "NodeInformationProvider", "Language"]
