"""
Pylint plugin entry point - composition root for the checker plugin.
Load with: pylint --load-plugins=object_design_linter.infrastructure.checker
"""

from typing import TYPE_CHECKING, Optional

from astroid import nodes
from pylint.checkers import BaseChecker

from object_design_linter.domain.config import ConfigurationLoader
from object_design_linter.domain.rules import Rule, RuleContext
from object_design_linter.domain.rules.registry import CATALOG
from object_design_linter.domain.services.evaluator import RuleEvaluator
from object_design_linter.infrastructure.di.container import LinterContainer
from object_design_linter.infrastructure.extractors.python_extractor import PythonExtractor

if TYPE_CHECKING:
    from pylint.lint import PyLinter


class ObjectDesignChecker(BaseChecker):
    """W9401-W9405: object design rules applied to every module pylint visits."""

    name = "object-design"
    msgs = {
        rule.code: ("%s", rule.id, rule.description)
        for rule in CATALOG
    }

    def __init__(
        self,
        linter: "PyLinter",
        config_loader: Optional[ConfigurationLoader] = None,
        rules: tuple[Rule, ...] = CATALOG,
    ) -> None:
        super().__init__(linter)
        self.config_loader = config_loader or ConfigurationLoader()
        enabled = set(self.config_loader.enabled_rules)
        self._rules = tuple(rule for rule in rules if rule.id in enabled)
        self._evaluator = RuleEvaluator(RuleContext.from_config(self.config_loader))
        self._extractor = PythonExtractor()

    def visit_module(self, node: nodes.Module) -> None:
        """Extract the module's declarations and report each failing rule on its def/class node."""
        declarations = self._extractor.declarations_for_module(node)
        scopes = {
            scope.lineno: scope
            for scope in node.nodes_of_class((nodes.ClassDef, nodes.FunctionDef))
        }
        for violation in self._evaluator.evaluate_all(declarations, self._rules):
            self.add_message(
                violation.rule_id,
                node=scopes.get(violation.location.line, node),
                line=violation.location.line,
                args=(violation.message,),
            )


def register(linter: "PyLinter") -> None:
    """Register checkers."""
    container = LinterContainer.get_instance()
    linter.register_checker(ObjectDesignChecker(linter, config_loader=container.get_config_loader()))
