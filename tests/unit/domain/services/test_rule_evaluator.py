"""Unit tests for RuleEvaluator."""

import unittest

from object_design_linter.domain.constants import (
    RULE_NO_DIRECT_SYSTEM_CALL,
    RULE_NO_OPTIONAL_CONSTRUCTOR_DEPENDENCY,
    RULE_SIDE_EFFECT_FREE_CONSTRUCTOR,
)
from object_design_linter.domain.entities import Parameter, SourceLocation
from object_design_linter.domain.rules import Rule
from object_design_linter.domain.rules.registry import CATALOG
from object_design_linter.domain.services.evaluator import RuleEvaluator
from tests.conftest import method, rule_context


class TestRuleEvaluator(unittest.TestCase):
    """Aggregation, ordering and predicate failures."""

    def setUp(self) -> None:
        self.evaluator = RuleEvaluator(rule_context())
        self.constructor = method(
            "__construct",
            parameters=(Parameter("logger", "Logger", has_default=True, is_nullable=True),),
            calls=("DateTime",),
            assigned=("logger", "createdAt"),
            line=14,
        )

    def test_collects_every_failing_rule(self) -> None:
        violations = self.evaluator.evaluate(self.constructor, CATALOG)
        self.assertEqual(
            [v.rule_id for v in violations],
            [RULE_NO_OPTIONAL_CONSTRUCTOR_DEPENDENCY, RULE_NO_DIRECT_SYSTEM_CALL, RULE_SIDE_EFFECT_FREE_CONSTRUCTOR],
        )
        for violation in violations:
            self.assertEqual(violation.declaration, "Mailer::__construct")
            self.assertEqual(violation.location, SourceLocation("src/Mailer.php", 14))

    def test_rule_order_does_not_change_the_set(self) -> None:
        forward = self.evaluator.evaluate(self.constructor, CATALOG)
        backward = self.evaluator.evaluate(self.constructor, tuple(reversed(CATALOG)))
        self.assertEqual(set(forward), set(backward))

    def test_evaluation_is_deterministic(self) -> None:
        self.assertEqual(
            self.evaluator.evaluate(self.constructor, CATALOG),
            self.evaluator.evaluate(self.constructor, CATALOG),
        )

    def test_no_rules_no_violations(self) -> None:
        self.assertEqual(self.evaluator.evaluate(self.constructor, ()), [])

    def test_predicate_exception_is_treated_as_pass(self) -> None:
        def broken(decl, context):
            raise RuntimeError("boom")

        rule = Rule(id="broken", code="W9499", description="always raises", predicate=broken)
        with self.assertLogs("object_design_linter.domain.services.evaluator", level="WARNING"):
            self.assertEqual(self.evaluator.evaluate(self.constructor, (rule,)), [])

    def test_evaluate_all_preserves_declaration_order(self) -> None:
        later = method("tick", owner="Job", calls=("time",), line=30)
        violations = self.evaluator.evaluate_all([self.constructor, later], CATALOG)
        self.assertEqual(violations[-1].declaration, "Job::tick")
        self.assertEqual(len(violations), 4)
