import pytest

from tmin.cutter import Cutter, CutterState, SourceUnit, establish_baseline, parse_all
from tmin.errors import InputParseError, ParseFailure
from tmin.lang.base import TextRules

from tests.infrastructure import StatementParser, read, write


@pytest.fixture
def cutter(make_units):
    (unit,) = make_units({"a.stmt": "x; y; z;\n"})
    unit.prepare()
    c = Cutter(unit, StatementParser(), TextRules())
    establish_baseline([c])
    return c


def _statement(cutter: Cutter, name: str) -> int:
    tree = cutter.tree
    for node in tree:
        if node.kind == "statement" and tree.text_of(node).startswith(name):
            return node.index
    raise AssertionError(name)


# ============= Source units =============

def test_prepare_copies_input_to_working_path(tmp_path):
    src = write(tmp_path / "src.stmt", "a;\n")
    unit = SourceUnit(src, tmp_path / "deep" / "dir" / "out.stmt")
    unit.prepare()
    assert read(unit.working_path) == "a;\n"
    assert read(src) == "a;\n"


def test_prepare_in_place_keeps_file(tmp_path):
    src = write(tmp_path / "same.stmt", "a;\n")
    SourceUnit(src, src).prepare()
    assert read(src) == "a;\n"


def test_charset_is_used_for_io_and_size(tmp_path):
    src = tmp_path / "latin.stmt"
    src.write_bytes("é;\n".encode("latin-1"))
    unit = SourceUnit(src, tmp_path / "out.stmt", charset="latin-1")
    unit.prepare()
    assert unit.read() == "é;\n"
    assert unit.size_of("é;\n") == 3


# ============= Trial / commit / rollback =============

def test_baseline_commit(cutter):
    assert cutter.state is CutterState.CLEAN
    assert cutter.committed_text == "x; y; z;\n"
    assert cutter.all_nodes() == set(range(len(cutter.tree)))


def test_excise_starts_trial_without_touching_committed(cutter):
    cutter.excise([_statement(cutter, "y")])

    assert cutter.state is CutterState.TRIAL
    assert cutter.scratch_text == "x; z;\n"
    assert cutter.committed_text == "x; y; z;\n"
    assert read(cutter.unit.working_path) == "x; y; z;\n"


def test_excise_always_starts_from_committed_text(cutter):
    cutter.excise([_statement(cutter, "x")])
    cutter.excise([_statement(cutter, "z")])
    assert cutter.scratch_text == "x; y; \n"


def test_commit_persists_and_replaces_tree(cutter):
    cutter.excise([_statement(cutter, "y")])
    tree = cutter.try_parse()
    cutter.commit(tree)

    assert cutter.state is CutterState.CLEAN
    assert cutter.committed_text == "x; z;\n"
    assert cutter.tree is tree
    assert read(cutter.unit.working_path) == "x; z;\n"


def test_rollback_restores_scratch_exactly(cutter):
    before = cutter.committed_text
    cutter.excise([_statement(cutter, "x"), _statement(cutter, "z")])
    cutter.rollback()
    assert cutter.scratch_text == before
    assert cutter.state is CutterState.CLEAN


def test_try_parse_does_not_change_state(cutter):
    ident = cutter.tree.node(_statement(cutter, "y")).children[0]
    cutter.excise([ident])
    with pytest.raises(ParseFailure):
        cutter.try_parse()
    assert cutter.state is CutterState.TRIAL
    assert cutter.committed_text == "x; y; z;\n"


def test_reformat_twice_gives_same_text(make_units):
    (unit,) = make_units({"a.stmt": "\nx;   \n\n\n y;\n\n"})
    unit.prepare()
    c = Cutter(unit, StatementParser(), TextRules())
    establish_baseline([c])

    c.reformat()
    first = c.scratch_text
    c.commit(c.try_parse())
    c.reformat()
    assert c.scratch_text == first == "x;\n\n y;\n"
    assert c.state is CutterState.CLEAN


def test_strip_blank_lines(make_units):
    (unit,) = make_units({"a.stmt": "x;\n\n\ny;\n"})
    unit.prepare()
    c = Cutter(unit, StatementParser(), TextRules())
    establish_baseline([c])
    c.strip_blank_lines()
    assert c.scratch_text == "x;\ny;\n"


def test_unchecked_commit_keeps_previous_tree(cutter, caplog):
    old_tree = cutter.tree
    ident = old_tree.node(_statement(cutter, "x")).children[0]
    cutter.excise([ident])
    cutter.commit()

    assert cutter.committed_text == "; y; z;\n"
    assert cutter.tree is old_tree
    assert "does not parse" in caplog.text


# ============= Disk views =============

def test_materialize_scratch_and_restore(cutter):
    cutter.excise([_statement(cutter, "x")])
    path = cutter.materialize_scratch()

    assert path == cutter.unit.working_path
    assert read(path) == "y; z;\n"

    cutter.restore_disk()
    assert read(path) == "x; y; z;\n"


def test_materialize_to_other_path_leaves_working_file(cutter, tmp_path):
    cutter.excise([_statement(cutter, "x")])
    other = cutter.materialize_scratch(tmp_path / "trial.stmt")
    assert read(other) == "y; z;\n"
    assert read(cutter.unit.working_path) == "x; y; z;\n"


def test_close_restores_committed_text(cutter):
    cutter.excise([_statement(cutter, "x")])
    cutter.materialize_scratch()
    cutter.close()
    assert read(cutter.unit.working_path) == "x; y; z;\n"


# ============= Group helpers =============

def test_parse_all_names_failing_unit(make_units):
    units = make_units({"a.stmt": "a;\n", "b.stmt": "b;\n"})
    cutters = []
    for unit in units:
        unit.prepare()
        cutters.append(Cutter(unit, StatementParser(), TextRules()))
    establish_baseline(cutters)

    cutters[1].excise([cutters[1].tree.node(1).children[0]])
    with pytest.raises(ParseFailure, match="b.stmt"):
        parse_all(cutters)


def test_baseline_rejects_unparseable_input(make_units):
    (unit,) = make_units({"bad.stmt": "x; 42;\n"})
    unit.prepare()
    with pytest.raises(InputParseError, match="does not parse"):
        establish_baseline([Cutter(unit, StatementParser(), TextRules())])
