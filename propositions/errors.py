"""
Fatal error kinds raised while loading and checking propositions.

Every error here aborts the run. The command line is the only place that
turns them into messages and exit codes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class PropcheckError(Exception):
    """Base class for all propcheck failures."""
    pass


class UsageError(PropcheckError):
    """Raised when no proposition file was given."""

    def __init__(self, program: str = "propcheck") -> None:
        super().__init__(f"Usage: {program} <filename>")
        self.program = program


class FileOpenError(PropcheckError):
    """Raised when the proposition file cannot be opened or decoded."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None) -> None:
        super().__init__(f"Error: Cannot open {path}")
        self.path = str(path)
        self.reason = reason


class PropositionSyntaxError(PropcheckError):
    """
    Raised when a line fails both the direct and the parenthesized parse.

    Attributes:
        line_number: 1-based line number in the source file (None for a
            single line parsed outside of a file).
        source: Path of the file, when known.
        text: The offending line.
    """

    def __init__(
        self,
        text: str,
        line_number: Optional[int] = None,
        source: Optional[str] = None,
    ) -> None:
        if line_number is not None and source is not None:
            message = f"Error: Syntax Error line {line_number} in {source}"
        elif line_number is not None:
            message = f"Error: Syntax Error line {line_number}"
        else:
            message = f"Error: Syntax Error in {text.strip()!r}"
        super().__init__(message)
        self.text = text
        self.line_number = line_number
        self.source = source


class NestingTooDeepError(PropcheckError):
    """
    Raised when a proposition is nested deeper than the interpreter stack
    allows while parsing or evaluating it.

    Negation chains of any length are fine; only nested parentheses count.
    """

    def __init__(
        self,
        line_number: Optional[int] = None,
        source: Optional[str] = None,
    ) -> None:
        message = "Error: Nesting too deep"
        if line_number is not None:
            message += f" line {line_number}"
        if source is not None:
            message += f" in {source}"
        super().__init__(message)
        self.line_number = line_number
        self.source = source


class VariableLimitExceeded(PropcheckError):
    """
    Raised when a proposition introduces one variable too many.

    The assignment word has one bit per variable, so the registry cannot grow
    past its capacity.
    """

    def __init__(self, name: str, limit: int) -> None:
        super().__init__(f"error: over {limit} propositional variables, Exiting.")
        self.name = name
        self.limit = limit


class EmptyInputError(PropcheckError):
    """Raised when a source holds no proposition lines at all."""

    def __init__(self, source: Optional[str] = None) -> None:
        where = f" in {source}" if source else ""
        super().__init__(f"Error: No theorem to check{where}")
        self.source = source


class ConfigError(PropcheckError):
    """Raised when the checker configuration cannot be read or is invalid."""
    pass


__all__ = [
    "PropcheckError",
    "UsageError",
    "FileOpenError",
    "PropositionSyntaxError",
    "NestingTooDeepError",
    "VariableLimitExceeded",
    "EmptyInputError",
    "ConfigError",
]
