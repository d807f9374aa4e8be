"""Protocol for check reporting - no infrastructure imports."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from object_design_linter.domain.entities import CheckResult
    from object_design_linter.domain.rules import Rule


class CheckReporter(Protocol):
    """Protocol for reporting check results and the rule catalog."""

    def report_check(self, result: "CheckResult", output_format: str = "text") -> None:
        """Report a check run. output_format: text (default), json or table."""
        ...

    def report_rules(self, rules: "tuple[Rule, ...]", enabled: "tuple[str, ...]") -> None:
        """List the rule catalog, marking enabled rules."""
        ...
