import pytest

from tmin.tree import Forest, NodeRef, TreeBuilder

from tests.infrastructure import StatementParser


def _forest(*texts: str, generation: int = 0) -> Forest:
    parser = StatementParser()
    return Forest(generation, [parser.parse(t) for t in texts])


def test_builder_links_parents_and_children():
    builder = TreeBuilder("ab")
    root = builder.add("root", 0, 2)
    a = builder.add("a", 0, 1, root, field_name="left")
    b = builder.add("b", 1, 2, root)
    tree = builder.build()

    assert tree.root.children == [a, b]
    assert tree.node(a).parent == root
    assert tree.node(a).field_name == "left"
    assert tree.text_of(tree.node(b)) == "b"


def test_builder_rejects_second_root_and_forward_parent():
    builder = TreeBuilder("x")
    builder.add("root", 0, 1)
    with pytest.raises(ValueError):
        builder.add("other", 0, 1)
    with pytest.raises(ValueError):
        builder.add("child", 0, 1, parent=5)


def test_walk_is_preorder():
    tree = StatementParser().parse("a; b;")
    kinds = [n.kind for n in tree.walk()]
    assert kinds == ["program", "statement", "identifier", ";", "statement", "identifier", ";"]


def test_refs_filters_and_order():
    forest = _forest("a; b;", "c;")

    named = forest.refs(named_only=True, include_roots=False)
    assert [forest.text(r) for r in named] == ["a;", "a", "b;", "b", "c;", "c"]
    assert {r.unit for r in named} == {0, 1}
    assert forest.roots() == [NodeRef(0, 0, 0), NodeRef(0, 1, 0)]
    assert forest.node_count() == 7 + 4


def test_stale_generation_is_not_contained():
    old = _forest("a;", generation=3)
    new = _forest("a;", generation=4)
    ref = old.refs()[1]

    assert old.contains(ref)
    assert not new.contains(ref)
    with pytest.raises(KeyError):
        new.node(ref)


def test_navigation():
    forest = _forest("a; b;")
    stmt = forest.children(forest.root(0))[1]
    assert forest.kind(stmt) == "statement"
    assert forest.parent(stmt) == forest.root(0)
    assert forest.parent(forest.root(0)) is None
    assert [forest.kind(c) for c in forest.children(stmt)] == ["identifier", ";"]
