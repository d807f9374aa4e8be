"""Rule Evaluator: apply every enabled rule to a declaration and collect all failures."""

import logging
from collections.abc import Sequence

from object_design_linter.domain.entities import Declaration, Violation
from object_design_linter.domain.rules import Rule, RuleContext

logger = logging.getLogger(__name__)


class RuleEvaluator:
    """
    Stateless evaluator. Rules are independent; a declaration may violate
    several at once and every failure is reported.
    """

    def __init__(self, context: RuleContext) -> None:
        self._context = context

    def evaluate(self, decl: Declaration, rules: Sequence[Rule]) -> list[Violation]:
        """Return one Violation per failing rule, in rule order."""
        violations: list[Violation] = []
        for rule in rules:
            message = self._apply(rule, decl)
            if message is None:
                continue
            violations.append(
                Violation(
                    rule_id=rule.id,
                    declaration=decl.qualified_name,
                    location=decl.location,
                    message=message,
                )
            )
        return violations

    def evaluate_all(self, declarations: Sequence[Declaration], rules: Sequence[Rule]) -> list[Violation]:
        """Evaluate a whole file's declarations."""
        violations: list[Violation] = []
        for decl in declarations:
            violations.extend(self.evaluate(decl, rules))
        return violations

    def _apply(self, rule: Rule, decl: Declaration) -> str | None:
        try:
            return rule.check(decl, self._context)
        except Exception:  # noqa: BLE001
            logger.warning(
                "Rule %s could not evaluate %s at %s; treating as pass.",
                rule.id,
                decl.qualified_name,
                decl.location,
                exc_info=True,
            )
            return None
