from __future__ import annotations

from tree_sitter import Language as TSLanguage

from .tree_sitter_support import TreeSitterLanguage


class JavaScriptLanguage(TreeSitterLanguage):

    name = "javascript"
    extensions = (".js", ".mjs", ".cjs", ".jsx")
    declaration_kinds = frozenset({
        "function_declaration",
        "generator_function_declaration",
        "class_declaration",
        "method_definition",
        "variable_declarator",
    })

    def get_language(self) -> TSLanguage:
        import tree_sitter_javascript as tsjs
        return TSLanguage(tsjs.language())
