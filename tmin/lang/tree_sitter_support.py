"""
Tree-sitter infrastructure for minimizer languages.
Parses text with a grammar and converts the result into the tmin node arena.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Iterator, List, Optional, Tuple

from tree_sitter import Language as TSLanguage, Node, Parser as TSParser, Tree

from .base import Language, Parser
from ..errors import ParseFailure
from ..tree import SyntaxTree, TreeBuilder


class TreeSitterDocument:
    """
    Wrapper for a Tree-sitter parsed document.
    """

    def __init__(self, text: str, parser: TSParser):
        self.text = text
        self._text_bytes = text.encode("utf-8")
        self._char_by_byte: Optional[List[int]] = None
        self.tree: Tree = parser.parse(self._text_bytes)

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    def has_error(self) -> bool:
        """Check if the tree has any syntax errors (ERROR or MISSING nodes)."""
        return self.root_node.has_error

    def first_error(self) -> Optional[Node]:
        for node in self.walk_tree():
            if node.is_error or node.is_missing:
                return node
        return None

    def walk_tree(self, start_node: Optional[Node] = None) -> Iterator[Node]:
        """
        Walk the tree using TreeCursor for efficient traversal.

        Yields:
            Node objects in depth-first order
        """
        if start_node is None:
            start_node = self.root_node

        cursor = start_node.walk()
        visited_children = False

        while True:
            if not visited_children:
                yield cursor.node

                if not cursor.goto_first_child():
                    visited_children = True
            elif cursor.goto_next_sibling():
                visited_children = False
            elif not cursor.goto_parent():
                break
            else:
                visited_children = True

    def byte_to_char_position(self, byte_pos: int) -> int:
        """Convert a byte offset (always on a char boundary for node edges) to a char offset."""
        if len(self._text_bytes) == len(self.text):
            return byte_pos
        if self._char_by_byte is None:
            mapping: List[int] = []
            for i, ch in enumerate(self.text):
                mapping.extend([i] * len(ch.encode("utf-8")))
            mapping.append(len(self.text))
            self._char_by_byte = mapping
        byte_pos = max(0, min(byte_pos, len(self._text_bytes)))
        return self._char_by_byte[byte_pos]

    def get_node_range(self, node: Node) -> Tuple[int, int]:
        """Get char range for a node."""
        return self.byte_to_char_position(node.start_byte), self.byte_to_char_position(node.end_byte)

    def to_syntax_tree(self) -> SyntaxTree:
        """Convert to the arena representation (pre-order, parent links, field names)."""
        builder = TreeBuilder(self.text)
        cursor = self.root_node.walk()
        parents: List[int] = []
        visited_children = False

        while True:
            if not visited_children:
                node = cursor.node
                start, end = self.get_node_range(node)
                index = builder.add(
                    node.type,
                    start,
                    end,
                    parents[-1] if parents else None,
                    named=node.is_named,
                    field_name=cursor.field_name,
                )
                if cursor.goto_first_child():
                    parents.append(index)
                else:
                    visited_children = True
            elif cursor.goto_next_sibling():
                visited_children = False
            elif cursor.goto_parent():
                parents.pop()
                visited_children = True
            else:
                break

        return builder.build()


class TreeSitterParser(Parser):
    """Parser over a Tree-sitter grammar; any ERROR/MISSING node is a parse failure."""

    def __init__(self, language: TSLanguage):
        self._parser = TSParser(language)

    def parse(self, text: str) -> SyntaxTree:
        doc = TreeSitterDocument(text, self._parser)
        if doc.has_error():
            raise ParseFailure(_describe_error(doc))
        return doc.to_syntax_tree()


def _describe_error(doc: TreeSitterDocument) -> str:
    node = doc.first_error()
    if node is None:
        return "syntax error"
    row, column = node.start_point
    what = f"missing {node.type}" if node.is_missing else "syntax error"
    return f"{what} at line {row + 1}, column {column + 1}"


class TreeSitterLanguage(Language):
    """Base for languages backed by a Tree-sitter grammar package."""

    @abstractmethod
    def get_language(self) -> TSLanguage:
        """
        Get Language instance of the grammar.

        Returns:
            Tree-sitter Language instance
        """
        pass

    def create_parser(self) -> Parser:
        return TreeSitterParser(self.get_language())


__all__ = ["TreeSitterDocument", "TreeSitterParser", "TreeSitterLanguage"]
