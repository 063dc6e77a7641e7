from __future__ import annotations

# Public API of the languages package:
#  • get_language: lazy instantiation of a language by name
#  • language_for_path: language name by file extension
from .base import Language, NodeInformationProvider, Parser, TextRules
from .registry import get_language, language_for_path, list_languages, register_lazy

__all__ = [
    "Language", "NodeInformationProvider", "Parser", "TextRules",
    "get_language", "language_for_path", "list_languages", "register_lazy",
]

# ---- Lazy registration of built-in languages ---------------------------------
# Only module:class strings here. The grammar package is imported
# the first time the language is requested.
register_lazy(module=".python", class_name="PythonLanguage", name="python", extensions=[".py", ".pyi"])
register_lazy(module=".java", class_name="JavaLanguage", name="java", extensions=[".java"])
register_lazy(module=".javascript", class_name="JavaScriptLanguage", name="javascript",
              extensions=[".js", ".mjs", ".cjs", ".jsx"])
