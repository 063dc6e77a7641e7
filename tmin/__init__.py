from __future__ import annotations

# Public API:
#  • Minimizer: the engine over prepared source units
#  • run_job / load_job: configuration-driven runs
from .control import CONTINUE, STOP, Control, PassControl, failed
from .cutter import Cutter, SourceUnit
from .engine import build_minimizer, run_job
from .config import JobConfig, load_job
from .errors import ConfigError, InputParseError, ParseFailure, TminUserError, UnknownComponentError
from .minimizer import Minimizer
from .tree import Forest, NodeRef, SyntaxNode, SyntaxTree

__all__ = [
    "CONTINUE", "STOP", "Control", "PassControl", "failed",
    "Cutter", "SourceUnit",
    "build_minimizer", "run_job", "JobConfig", "load_job",
    "ConfigError", "InputParseError", "ParseFailure", "TminUserError", "UnknownComponentError",
    "Minimizer",
    "Forest", "NodeRef", "SyntaxNode", "SyntaxTree",
]
