"""Rule Registry: the fixed, ordered catalog of guideline checks."""

from collections.abc import Iterable

from object_design_linter.domain.constants import (
    RULE_NO_DIRECT_SYSTEM_CALL,
    RULE_NO_OPTIONAL_CONSTRUCTOR_DEPENDENCY,
    RULE_NO_SETTER_DEPENDENCY_INJECTION,
    RULE_SIDE_EFFECT_FREE_CONSTRUCTOR,
    RULE_SINGLE_SHAPE_RETURN,
)
from object_design_linter.domain.errors import ConfigurationError
from object_design_linter.domain.rules import Rule
from object_design_linter.domain.rules.constructor import (
    optional_constructor_dependency,
    side_effecting_constructor,
)
from object_design_linter.domain.rules.return_shape import mixed_return_type
from object_design_linter.domain.rules.setter_injection import setter_dependency_injection
from object_design_linter.domain.rules.system_calls import direct_system_call

CATALOG: tuple[Rule, ...] = (
    Rule(
        id=RULE_NO_OPTIONAL_CONSTRUCTOR_DEPENDENCY,
        code="W9401",
        description="Constructor dependencies on services must be required, never defaulted or nullable.",
        predicate=optional_constructor_dependency,
    ),
    Rule(
        id=RULE_NO_SETTER_DEPENDENCY_INJECTION,
        code="W9402",
        description="Dependencies are injected through the constructor, not through set<Noun>() methods.",
        predicate=setter_dependency_injection,
    ),
    Rule(
        id=RULE_NO_DIRECT_SYSTEM_CALL,
        code="W9403",
        description="Clock, environment and file access happen only behind a system boundary abstraction.",
        predicate=direct_system_call,
    ),
    Rule(
        id=RULE_SINGLE_SHAPE_RETURN,
        code="W9404",
        description="A return type has one concrete shape, optionally nullable.",
        predicate=mixed_return_type,
    ),
    Rule(
        id=RULE_SIDE_EFFECT_FREE_CONSTRUCTOR,
        code="W9405",
        description="Constructors only assign arguments to fields.",
        predicate=side_effecting_constructor,
    ),
)


class RuleRegistry:
    """Read-only view over the catalog. Safe to share between workers."""

    def __init__(self, rules: tuple[Rule, ...] = CATALOG) -> None:
        self._rules = rules
        self._by_id = {rule.id: rule for rule in rules}

    def all_rules(self) -> tuple[Rule, ...]:
        """Every recognised rule, in catalog order."""
        return self._rules

    def select(self, rule_ids: Iterable[str]) -> tuple[Rule, ...]:
        """Enabled subset in catalog order. Unknown ids are a configuration error."""
        wanted = set(rule_ids)
        unknown = sorted(wanted - set(self._by_id))
        if unknown:
            raise ConfigurationError(f"Unknown rule id(s): {', '.join(unknown)}")
        return tuple(rule for rule in self._rules if rule.id in wanted)
