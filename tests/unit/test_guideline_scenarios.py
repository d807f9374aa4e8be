"""Acceptance scenarios: source text through extraction and every enabled rule."""

import unittest
from unittest.mock import MagicMock

from object_design_linter.domain.config import ConfigurationLoader
from object_design_linter.domain.constants import (
    NO_VIOLATIONS_MARKER,
    RULE_NO_DIRECT_SYSTEM_CALL,
    RULE_NO_OPTIONAL_CONSTRUCTOR_DEPENDENCY,
    RULE_NO_SETTER_DEPENDENCY_INJECTION,
    RULE_SIDE_EFFECT_FREE_CONSTRUCTOR,
)
from object_design_linter.domain.rules import RuleContext
from object_design_linter.domain.rules.registry import CATALOG
from object_design_linter.domain.services.evaluator import RuleEvaluator
from object_design_linter.domain.services.report_formatter import ReportFormatter
from object_design_linter.infrastructure.extractors import PhpExtractor, PythonExtractor
from object_design_linter.use_cases.check_sources import CheckSourcesUseCase


def _rule_ids(extractor, source: str) -> list[str]:
    evaluator = RuleEvaluator(RuleContext.from_config(ConfigurationLoader()))
    violations = evaluator.evaluate_all(extractor.extract(source, "scenario"), CATALOG)
    return [v.rule_id for v in violations]


class TestPhpScenarios(unittest.TestCase):
    """The guideline examples written in PHP."""

    def test_optional_service_dependency(self) -> None:
        source = "<?php class Mailer { public function __construct(Logger $logger = null) {} }"
        self.assertEqual(_rule_ids(PhpExtractor(), source), [RULE_NO_OPTIONAL_CONSTRUCTOR_DEPENDENCY])

    def test_value_type_constructor_is_clean(self) -> None:
        source = """<?php
class Credentials
{
    public function __construct(string $userName, string $password)
    {
        $this->userName = $userName;
        $this->password = $password;
    }
}
"""
        self.assertEqual(_rule_ids(PhpExtractor(), source), [])

    def test_setter_injection(self) -> None:
        source = """<?php
class Mailer
{
    public function __construct(Logger $logger) { $this->logger = $logger; }

    public function setLogger(Logger $logger): void
    {
        $this->logger = $logger;
    }
}
"""
        self.assertEqual(_rule_ids(PhpExtractor(), source), [RULE_NO_SETTER_DEPENDENCY_INJECTION])

    def test_constructor_side_effects(self) -> None:
        assignments_only = "<?php class Token { public function __construct(string $v) { $this->v = $v; } }"
        self.assertNotIn(RULE_SIDE_EFFECT_FREE_CONSTRUCTOR, _rule_ids(PhpExtractor(), assignments_only))

        with_clock = (
            "<?php class Token { public function __construct(string $v) "
            "{ $this->v = $v; $this->at = new DateTime(); } }"
        )
        ids = _rule_ids(PhpExtractor(), with_clock)
        self.assertEqual(ids.count(RULE_SIDE_EFFECT_FREE_CONSTRUCTOR), 1)

    def test_parent_constructor_delegation_in_any_case(self) -> None:
        source = (
            "<?php class Mailer extends Base { public function __construct(Logger $logger) "
            "{ PARENT::__construct($logger); $this->logger = $logger; } }"
        )
        self.assertEqual(_rule_ids(PhpExtractor(), source), [])

    def test_zero_parameter_constructor(self) -> None:
        source = "<?php class Token { public function __construct() { $this->at = NEW DateTime(); } }"
        self.assertEqual(_rule_ids(PhpExtractor(), source), [RULE_NO_DIRECT_SYSTEM_CALL])


class TestPythonScenarios(unittest.TestCase):
    """The same examples written in Python."""

    def test_optional_service_dependency(self) -> None:
        source = "class Mailer:\n    def __init__(self, logger: Logger = None):\n        self.logger = logger\n"
        self.assertEqual(_rule_ids(PythonExtractor(), source), [RULE_NO_OPTIONAL_CONSTRUCTOR_DEPENDENCY])

    def test_value_type_constructor_is_clean(self) -> None:
        source = (
            "class Credentials:\n"
            "    def __init__(self, user_name: str, password: str) -> None:\n"
            "        self.user_name = user_name\n"
            "        self.password = password\n"
        )
        self.assertEqual(_rule_ids(PythonExtractor(), source), [])

    def test_setter_injection(self) -> None:
        source = (
            "class Mailer:\n"
            "    def __init__(self, logger: Logger):\n"
            "        self.logger = logger\n"
            "\n"
            "    def set_logger(self, logger: Logger) -> None:\n"
            "        self.logger = logger\n"
        )
        self.assertEqual(_rule_ids(PythonExtractor(), source), [RULE_NO_SETTER_DEPENDENCY_INJECTION])

    def test_parent_constructor_delegation(self) -> None:
        source = (
            "class Mailer(Base):\n"
            "    def __init__(self, logger: Logger):\n"
            "        super(Mailer, self).__init__(logger)\n"
            "        Base.__init__(self, logger)\n"
            "        self.logger = logger\n"
        )
        self.assertEqual(_rule_ids(PythonExtractor(), source), [])


class TestEmptyInput(unittest.TestCase):
    """No input files."""

    def test_empty_file_list_reports_marker(self) -> None:
        use_case = CheckSourcesUseCase(
            filesystem=MagicMock(),
            extractors=MagicMock(),
            evaluator=MagicMock(),
            rules=CATALOG,
            telemetry=MagicMock(),
            config_loader=ConfigurationLoader({"fail_on_violation": True}),
        )
        result = use_case.execute([])
        self.assertTrue(result.is_clean())
        self.assertEqual(ReportFormatter.format(result.violations), NO_VIOLATIONS_MARKER)
