"""Errors raised by the linter. Rule predicates never raise these."""

from typing import Optional


class LinterError(Exception):
    """Base class for linter errors."""


class ParseError(LinterError):
    """Source text could not be structurally decomposed."""

    def __init__(self, message: str, line: int = 0, path: Optional[str] = None) -> None:
        self.message = message
        self.line = line
        self.path = path
        location = f"{path}:{line}: " if path else (f"line {line}: " if line else "")
        super().__init__(f"{location}{message}")


class ConfigurationError(LinterError):
    """Unknown rule id, malformed pattern or invalid option. Fatal before extraction."""
