"""Pytest configuration and shared builders.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
and the project root on sys.path so ``tests.unit`` helpers import cleanly.
"""

from typing import Optional
from unittest.mock import MagicMock

from object_design_linter.domain.config import ConfigurationLoader
from object_design_linter.domain.entities import (
    BodySummary,
    CallKind,
    CallSite,
    Declaration,
    DeclarationKind,
    Parameter,
    SourceLocation,
)
from object_design_linter.domain.rules import RuleContext


def rule_context(**overrides: object) -> RuleContext:
    """RuleContext built from default configuration plus overrides."""
    return RuleContext.from_config(ConfigurationLoader({}, overrides))


def method(
    name: str,
    owner: Optional[str] = "Mailer",
    parameters: tuple[Parameter, ...] = (),
    calls: tuple[str, ...] = (),
    assigned: tuple[str, ...] = (),
    sources: tuple[tuple[str, str], ...] = (),
    return_type: Optional[str] = None,
    constructor_parameters: tuple[str, ...] = (),
    line: int = 10,
    file: str = "src/Mailer.php",
) -> Declaration:
    """Build a method (or a function when owner is None) Declaration."""
    return Declaration(
        name=name,
        kind=DeclarationKind.METHOD if owner else DeclarationKind.FUNCTION,
        location=SourceLocation(file, line),
        parameters=parameters,
        return_type=return_type,
        body=BodySummary(
            call_sites=tuple(CallSite(symbol, CallKind.FUNCTION, line) for symbol in calls),
            assigned_fields=frozenset(assigned),
            field_sources=sources,
        ),
        owner=owner,
        owner_constructor_parameters=constructor_parameters if owner else (),
    )


def check_use_case_deps(**overrides: object) -> dict[str, object]:
    """Return required dependency mocks for CheckSourcesUseCase. Pass overrides to customize."""
    base: dict[str, object] = {
        "filesystem": MagicMock(),
        "extractors": MagicMock(),
        "evaluator": MagicMock(),
        "rules": (),
        "telemetry": MagicMock(),
        "config_loader": ConfigurationLoader({}, {}),
    }
    base.update(overrides)
    return base
