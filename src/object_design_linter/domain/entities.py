"""Structural model of analysed source: declarations, violations and check results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class DeclarationKind(Enum):
    """Kinds of declarations produced by the extractors."""
    CLASS = "class"
    FUNCTION = "function"
    METHOD = "method"


class CallKind(Enum):
    """How a symbol is reached from a body."""
    NEW = "new"
    STATIC = "static"
    FUNCTION = "function"
    METHOD = "method"


CONSTRUCTOR_NAMES: frozenset[str] = frozenset({"__construct", "__init__"})


@dataclass(frozen=True)
class SourceLocation:
    """File and 1-based line of a declaration."""
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class Parameter:
    """A declared parameter. has_default and is_nullable are independent flags."""
    name: str
    declared_type: Optional[str] = None
    has_default: bool = False
    is_nullable: bool = False


@dataclass(frozen=True)
class CallSite:
    """A symbol invoked or instantiated inside a body."""
    symbol: str
    kind: CallKind
    line: int = 0


@dataclass(frozen=True)
class BodySummary:
    """
    Coarse lexical summary of a body.

    field_sources maps an instance field to the parameter assigned into it
    (``$this->logger = $logger`` / ``self.logger = logger``).
    """
    call_sites: tuple[CallSite, ...] = ()
    assigned_fields: frozenset[str] = frozenset()
    field_sources: tuple[tuple[str, str], ...] = ()

    def call_symbols(self) -> tuple[str, ...]:
        """Return invoked symbols in body order."""
        return tuple(site.symbol for site in self.call_sites)

    def source_of(self, field_name: str) -> Optional[str]:
        """Return the parameter assigned into field_name, if any."""
        for name, source in self.field_sources:
            if name == field_name:
                return source
        return None


@dataclass(frozen=True)
class Declaration:
    """A class, function or method extracted from one file."""
    name: str
    kind: DeclarationKind
    location: SourceLocation
    parameters: tuple[Parameter, ...] = ()
    return_type: Optional[str] = None
    body: BodySummary = field(default_factory=BodySummary)
    owner: Optional[str] = None
    owner_constructor_parameters: tuple[str, ...] = ()

    @property
    def is_constructor(self) -> bool:
        """True for __construct / __init__ methods."""
        return self.kind is DeclarationKind.METHOD and self.name in CONSTRUCTOR_NAMES

    @property
    def qualified_name(self) -> str:
        """Owner-qualified name used in messages (e.g. Mailer::__construct)."""
        if self.owner:
            return f"{self.owner}::{self.name}"
        return self.name

    def parameter(self, name: str) -> Optional[Parameter]:
        """Look up a parameter by name."""
        for param in self.parameters:
            if param.name == name:
                return param
        return None


@dataclass(frozen=True)
class Violation:
    """A single rule failure tied to one declaration."""
    rule_id: str
    declaration: str
    location: SourceLocation
    message: str

    def sort_key(self) -> tuple[str, int, str]:
        """Deterministic report order: file, line, rule id."""
        return (self.location.file, self.location.line, self.rule_id)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for the JSON reporter."""
        return {
            "rule": self.rule_id,
            "declaration": self.declaration,
            "file": self.location.file,
            "line": self.location.line,
            "message": self.message,
        }


@dataclass(frozen=True)
class ParseFailure:
    """A file that could not be structurally decomposed."""
    file: str
    line: int
    message: str

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for the JSON reporter."""
        return {"file": self.file, "line": self.line, "message": self.message}


@dataclass(frozen=True)
class CheckResult:
    """Result of a complete check run across all files."""
    violations: tuple[Violation, ...] = ()
    parse_failures: tuple[ParseFailure, ...] = ()
    files_checked: int = 0

    def has_violations(self) -> bool:
        """Check if any rule reported a violation."""
        return bool(self.violations)

    def has_failures(self) -> bool:
        """Check if any file failed to parse."""
        return bool(self.parse_failures)

    def is_clean(self) -> bool:
        """True when there is nothing to report."""
        return not self.violations and not self.parse_failures
