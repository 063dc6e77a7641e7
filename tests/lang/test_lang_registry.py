from pathlib import Path

import pytest

from tmin.errors import UnknownComponentError
from tmin.lang import get_language, language_for_path, list_languages
from tmin.lang.python import PythonLanguage


def test_builtin_languages_are_registered():
    assert list_languages() == ["java", "javascript", "python"]


def test_get_language_instantiates_class():
    lang = get_language("python")
    assert isinstance(lang, PythonLanguage)
    assert lang.node_information.declaration_kinds == PythonLanguage.declaration_kinds


def test_unknown_language():
    with pytest.raises(UnknownComponentError, match="Available: java, javascript, python"):
        get_language("cobol")


@pytest.mark.parametrize(
    "path, expected",
    [
        ("a.py", "python"),
        ("stubs/a.pyi", "python"),
        ("Main.JAVA", "java"),
        ("app.mjs", "javascript"),
        ("view.jsx", "javascript"),
        ("notes.txt", None),
        ("Makefile", None),
    ],
)
def test_language_for_path(path, expected):
    assert language_for_path(Path(path)) == expected
