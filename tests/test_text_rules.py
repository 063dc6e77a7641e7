import logging

import pytest

from tmin.lang.base import NodeInformationProvider, TextRules

from tests.infrastructure import StatementParser


@pytest.mark.parametrize(
    "text, span, expected",
    [
        # first token on a line takes the following blanks
        ("x; y;", (0, 2), (0, 3)),
        # token after whitespace takes following blanks too
        ("a b c", (2, 3), (2, 4)),
        # glued token keeps its neighbours apart
        ("f(x)", (2, 3), (2, 3)),
        # sole content of a line takes the whole line
        ("a;\n    b;\nc;\n", (7, 9), (3, 10)),
        # last line without newline
        ("a;\n  b;", (5, 7), (3, 7)),
        # CRLF line endings
        ("a;\r\nb;\r\n", (4, 6), (4, 8)),
    ],
)
def test_removal_range(text, span, expected):
    assert TextRules.removal_range(text, *span) == expected


def test_excise_statements():
    text = "x; y; z;\n"
    tree = StatementParser().parse(text)
    rules = TextRules()
    statements = [n.index for n in tree if n.kind == "statement"]

    assert rules.excise(text, tree, [statements[0]]) == "y; z;\n"
    assert rules.excise(text, tree, [statements[2]]) == "x; y; \n"
    assert rules.excise(text, tree, statements) == "\n"


def test_excise_nested_nodes_removes_outer_span():
    text = "a;\nb;\n"
    tree = StatementParser().parse(text)
    stmt = tree.root.children[1]
    ident = tree.node(stmt).children[0]
    assert TextRules().excise(text, tree, [ident, stmt]) == "a;\n"


def test_reformat():
    text = "\n\nx;   \n\n\n\ny;\t\n\n"
    assert TextRules.reformat(text) == "x;\n\ny;\n"
    assert TextRules.reformat("") == ""
    assert TextRules.reformat("\n \n") == ""


@pytest.mark.parametrize("text", ["a;  \n\n\n b;", "\n\n", "a;\r\n\r\nb;", "x;"])
def test_reformat_is_idempotent(text):
    once = TextRules.reformat(text)
    assert TextRules.reformat(once) == once


def test_strip_blank_lines():
    assert TextRules.strip_blank_lines("a;\n\n  \nb;\n\n") == "a;\nb;\n"
    assert TextRules.strip_blank_lines("\n\n") == ""


def test_node_information_declarations():
    text = "alpha; beta; alpha;"
    tree = StatementParser().parse(text)
    info = NodeInformationProvider({"statement"})

    stmt = tree.node(tree.root.children[0])
    assert info.is_declaration(stmt)
    assert info.declared_name(tree, stmt) == "alpha"
    assert info.declared_name(tree, tree.root) is None
    assert info.text(tree, stmt) == "alpha;"

    decls = info.declarations(tree)
    assert sorted(decls) == ["alpha", "beta"]
    assert len(decls["alpha"]) == 2


def test_excise_logs_removed_spans(caplog):
    caplog.set_level(logging.DEBUG, logger="tmin.lang.base")
    text = "a;\nb;\n"
    tree = StatementParser().parse(text)

    assert TextRules().excise(text, tree, [1]) == "b;\n"
    assert "Excised 1 span(s): 3 chars, 1 line(s)" in caplog.text
