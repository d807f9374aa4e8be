"""Terminal reporter implementation - renders check results to stdout."""

from collections import Counter
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from object_design_linter.domain.constants import NO_VIOLATIONS_MARKER
from object_design_linter.domain.services.report_formatter import ReportFormatter

if TYPE_CHECKING:
    from object_design_linter.domain.entities import CheckResult
    from object_design_linter.domain.rules import Rule

OUTPUT_FORMATS: tuple[str, ...] = ("text", "json", "table")


class TerminalCheckReporter:
    """Terminal reporter using rich tables. Implements CheckReporter."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(highlight=False, soft_wrap=True)

    def report_check(self, result: "CheckResult", output_format: str = "text") -> None:
        """Print the report in the requested format."""
        if output_format == "json":
            self.console.print_json(ReportFormatter.format_json(result))
            return
        if output_format == "table":
            self._report_table(result)
            return
        self.console.print(ReportFormatter.format_result(result), markup=False)

    def report_rules(self, rules: "tuple[Rule, ...]", enabled: "tuple[str, ...]") -> None:
        """Print the catalog with codes, ids and descriptions."""
        table = Table(title=Text("[ODL] Rule Catalog"), header_style="bold cyan")
        table.add_column("Code", style="cyan")
        table.add_column("Rule ID")
        table.add_column("Enabled", justify="center")
        table.add_column("Description")
        for rule in rules:
            table.add_row(
                rule.code, Text(rule.id), "yes" if rule.id in enabled else "no", Text(rule.description)
            )
        self.console.print(table)

    def _report_table(self, result: "CheckResult") -> None:
        if result.parse_failures:
            failures = Table(title=Text("[ODL] Parse Failures"), header_style="bold red")
            failures.add_column("Location", style="red")
            failures.add_column("Message")
            for failure in sorted(result.parse_failures, key=lambda f: (f.file, f.line)):
                failures.add_row(Text(f"{failure.file}:{failure.line}"), Text(failure.message))
            self.console.print(failures)

        if not result.violations:
            self.console.print(f"\n✅ {NO_VIOLATIONS_MARKER}", markup=False)
            return

        counts = Counter(v.rule_id for v in result.violations)
        summary = Table(title=Text("[ODL] Object Design Audit"), header_style="bold cyan")
        summary.add_column("Rule ID", style="cyan")
        summary.add_column("Count", justify="right", style="bold")
        for rule_id in sorted(counts):
            summary.add_row(Text(rule_id), str(counts[rule_id]))
        self.console.print(summary)

        details = Table(header_style="bold")
        details.add_column("Location")
        details.add_column("Rule ID", style="cyan")
        details.add_column("Message")
        for violation in ReportFormatter.sort_violations(result.violations):
            details.add_row(Text(str(violation.location)), Text(violation.rule_id), Text(violation.message))
        self.console.print(details)
