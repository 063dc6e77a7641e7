"""
Exceptions used across the minimizer.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from TminUserError.

Programming errors and bugs should NOT inherit from TminUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations


class TminUserError(Exception):
    """
    Base class for all user-facing errors.

    These errors indicate problems that the user can fix:
    configuration issues, unknown component names, unparseable inputs, etc.
    """
    pass


class ConfigError(TminUserError):
    """Invalid or incomplete job configuration."""
    pass


class UnknownComponentError(TminUserError):
    """A language, strategy or invariant name is not registered."""

    def __init__(self, kind: str, name: str, known: list[str]):
        self.kind = kind
        self.name = name
        self.known = known
        super().__init__(f"Unknown {kind} '{name}'. Available: {', '.join(known) or '(none)'}")


class InputParseError(TminUserError):
    """One of the input files does not parse, so there is no baseline to minimize."""
    pass


class ParseFailure(Exception):
    """
    Scratch text does not parse.

    Not a user error: the commit protocol recovers from it locally
    by refusing the commit.
    """
    pass


__all__ = ["TminUserError", "ConfigError", "UnknownComponentError", "InputParseError", "ParseFailure"]
