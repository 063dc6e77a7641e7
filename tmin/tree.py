"""
Syntax tree arena.

A parsed unit is stored as a flat, pre-ordered list of nodes. Nodes are
addressed by index within their tree, and across the whole forest by
NodeRef(generation, unit, index). A NodeRef is only meaningful for the
forest generation that produced it: every successful commit creates a new
generation and all older refs become stale.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class NodeRef:
    """Address of a node inside one forest generation."""
    generation: int
    unit: int
    index: int


@dataclass
class SyntaxNode:
    """One node of a parsed tree. Spans are char offsets into the parsed text."""
    index: int
    kind: str
    start: int
    end: int
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    named: bool = True
    field_name: Optional[str] = None  # role of this node in its parent (e.g. "name", "body")

    @property
    def is_root(self) -> bool:
        return self.parent is None


class TreeBuilder:
    """
    Incremental builder used by parsers.

    Nodes must be added in pre-order (parent before its children).
    """

    def __init__(self, text: str):
        self.text = text
        self._nodes: List[SyntaxNode] = []

    def add(
            self,
            kind: str,
            start: int,
            end: int,
            parent: Optional[int] = None,
            *,
            named: bool = True,
            field_name: Optional[str] = None,
    ) -> int:
        index = len(self._nodes)
        if parent is None and index != 0:
            raise ValueError("Only the first node may be the root")
        if parent is not None and not (0 <= parent < index):
            raise ValueError(f"Invalid parent index {parent} for node {index}")
        self._nodes.append(SyntaxNode(index, kind, start, end, parent, [], named, field_name))
        if parent is not None:
            self._nodes[parent].children.append(index)
        return index

    def build(self) -> SyntaxTree:
        if not self._nodes:
            raise ValueError("Tree has no root")
        return SyntaxTree(self.text, self._nodes)


class SyntaxTree:
    """Immutable parse result of one source unit."""

    def __init__(self, text: str, nodes: Sequence[SyntaxNode]):
        self.text = text
        self._nodes: Tuple[SyntaxNode, ...] = tuple(nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[SyntaxNode]:
        return iter(self._nodes)

    @property
    def root(self) -> SyntaxNode:
        return self._nodes[0]

    def node(self, index: int) -> SyntaxNode:
        return self._nodes[index]

    def has_index(self, index: int) -> bool:
        return 0 <= index < len(self._nodes)

    def text_of(self, node: SyntaxNode) -> str:
        return self.text[node.start:node.end]

    def walk(self, start: int = 0) -> Iterator[SyntaxNode]:
        """Depth-first pre-order traversal of the subtree rooted at `start`."""
        stack = [start]
        while stack:
            node = self._nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))


class Forest:
    """
    Ordered trees of all source units, produced together by one commit.

    The forest is never mutated; the minimizer replaces it on every
    successful commit and bumps the generation.
    """

    def __init__(self, generation: int, trees: Sequence[SyntaxTree]):
        self.generation = generation
        self.trees: Tuple[SyntaxTree, ...] = tuple(trees)

    def __len__(self) -> int:
        return len(self.trees)

    def __iter__(self) -> Iterator[SyntaxTree]:
        return iter(self.trees)

    def ref(self, unit: int, index: int) -> NodeRef:
        return NodeRef(self.generation, unit, index)

    def root(self, unit: int) -> NodeRef:
        return self.ref(unit, 0)

    def roots(self) -> List[NodeRef]:
        return [self.root(unit) for unit in range(len(self.trees))]

    def refs(self, unit: Optional[int] = None, *, named_only: bool = False, include_roots: bool = True) -> List[NodeRef]:
        """All node refs in pre-order, unit by unit."""
        units = range(len(self.trees)) if unit is None else [unit]
        result: List[NodeRef] = []
        for u in units:
            for node in self.trees[u].walk():
                if named_only and not node.named:
                    continue
                if not include_roots and node.is_root:
                    continue
                result.append(self.ref(u, node.index))
        return result

    def contains(self, ref: NodeRef) -> bool:
        return (
            ref.generation == self.generation
            and 0 <= ref.unit < len(self.trees)
            and self.trees[ref.unit].has_index(ref.index)
        )

    def node(self, ref: NodeRef) -> SyntaxNode:
        if not self.contains(ref):
            raise KeyError(f"{ref} does not belong to forest generation {self.generation}")
        return self.trees[ref.unit].node(ref.index)

    def kind(self, ref: NodeRef) -> str:
        return self.node(ref).kind

    def text(self, ref: NodeRef) -> str:
        return self.trees[ref.unit].text_of(self.node(ref))

    def parent(self, ref: NodeRef) -> Optional[NodeRef]:
        parent = self.node(ref).parent
        return None if parent is None else self.ref(ref.unit, parent)

    def children(self, ref: NodeRef) -> List[NodeRef]:
        return [self.ref(ref.unit, i) for i in self.node(ref).children]

    def node_count(self) -> int:
        return sum(len(tree) for tree in self.trees)


__all__ = ["NodeRef", "SyntaxNode", "TreeBuilder", "SyntaxTree", "Forest"]
