"""Domain models for rules: plain records holding a pure predicate."""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from object_design_linter.domain.entities import Declaration

if TYPE_CHECKING:
    from object_design_linter.domain.config import ConfigurationLoader

__all__ = [
    "Predicate",
    "Rule",
    "RuleContext",
]


@dataclass(frozen=True)
class RuleContext:
    """Configuration values predicates read. Shared read-only across workers."""

    service_type_pattern: re.Pattern[str]
    system_boundary_pattern: re.Pattern[str]
    banned_system_call_symbols: frozenset[str]
    sanctioned_return_unions: frozenset[str] = frozenset()

    @classmethod
    def from_config(cls, config_loader: "ConfigurationLoader") -> "RuleContext":
        """Build the context from validated configuration."""
        return cls(
            service_type_pattern=config_loader.service_type_pattern,
            system_boundary_pattern=config_loader.system_boundary_pattern,
            banned_system_call_symbols=config_loader.banned_system_call_symbols,
            sanctioned_return_unions=config_loader.sanctioned_return_unions,
        )


# A predicate returns None when the declaration passes, else the failure message.
Predicate = Callable[[Declaration, RuleContext], Optional[str]]


@dataclass(frozen=True)
class Rule:
    """
    One guideline check.

    ``id`` is the public rule id used in configuration and reports, ``code``
    the pylint message id the plugin registers it under.
    """

    id: str
    code: str
    description: str
    predicate: Predicate

    def check(self, declaration: Declaration, context: RuleContext) -> Optional[str]:
        """Apply the predicate. None means the declaration passes."""
        return self.predicate(declaration, context)
