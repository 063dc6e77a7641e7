from __future__ import annotations

from tree_sitter import Language as TSLanguage

from .tree_sitter_support import TreeSitterLanguage


class PythonLanguage(TreeSitterLanguage):

    name = "python"
    extensions = (".py", ".pyi")
    declaration_kinds = frozenset({
        "function_definition",
        "class_definition",
    })

    def get_language(self) -> TSLanguage:
        import tree_sitter_python as tspython
        return TSLanguage(tspython.language())
