from __future__ import annotations

from tree_sitter import Language as TSLanguage

from .tree_sitter_support import TreeSitterLanguage


class JavaLanguage(TreeSitterLanguage):

    name = "java"
    extensions = (".java",)
    declaration_kinds = frozenset({
        "class_declaration",
        "interface_declaration",
        "enum_declaration",
        "record_declaration",
        "method_declaration",
        "constructor_declaration",
        "variable_declarator",
    })

    def get_language(self) -> TSLanguage:
        import tree_sitter_java as tsjava
        return TSLanguage(tsjava.language())
