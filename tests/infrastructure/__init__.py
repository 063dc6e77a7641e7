"""
Shared test infrastructure.

Modules:
- file_utils: creating and reading files
- cli_utils: running the CLI as a subprocess
- statement_lang: a tiny statement-list language used as a parser test double
- collaborators: invariant and strategy test doubles
"""

from .file_utils import write, read
from .cli_utils import run_cli, jload
from .statement_lang import StatementLanguage, StatementParser, names
from .collaborators import (
    RecordingInvariant, DiskReadingInvariant, ScriptedStrategy, StaticOperations, exhausted,
)

__all__ = [
    "write", "read",
    "run_cli", "jload",
    "StatementLanguage", "StatementParser", "names",
    "RecordingInvariant", "DiskReadingInvariant", "ScriptedStrategy", "StaticOperations", "exhausted",
]
