"""Report Formatter: deterministic plain-text and JSON renderings of a check run."""

import json
from collections.abc import Sequence

from object_design_linter.domain.constants import NO_VIOLATIONS_MARKER
from object_design_linter.domain.entities import CheckResult, ParseFailure, Violation


class ReportFormatter:
    """Pure formatting. Writing the string anywhere is the caller's job."""

    @staticmethod
    def sort_violations(violations: Sequence[Violation]) -> list[Violation]:
        """Sort by (file, line, rule id); ties keep their input order."""
        return sorted(violations, key=Violation.sort_key)

    @staticmethod
    def format(violations: Sequence[Violation]) -> str:
        """One line per violation, or the canonical marker when there are none."""
        if not violations:
            return NO_VIOLATIONS_MARKER
        return "\n".join(
            f"{v.location}: [{v.rule_id}] {v.message}"
            for v in ReportFormatter.sort_violations(violations)
        )

    @staticmethod
    def format_failures(failures: Sequence[ParseFailure]) -> str:
        """One line per file that could not be parsed, sorted by file and line."""
        return "\n".join(
            f"{f.file}:{f.line}: [parse-error] {f.message}"
            for f in sorted(failures, key=lambda f: (f.file, f.line))
        )

    @staticmethod
    def format_result(result: CheckResult) -> str:
        """Parse failures first, then violations, then a one-line summary."""
        sections: list[str] = []
        if result.parse_failures:
            sections.append(ReportFormatter.format_failures(result.parse_failures))
        if result.violations or not result.parse_failures:
            sections.append(ReportFormatter.format(result.violations))
        sections.append(
            f"{len(result.violations)} violation(s), {len(result.parse_failures)} parse failure(s) "
            f"in {result.files_checked} file(s)."
        )
        return "\n".join(sections)

    @staticmethod
    def format_json(result: CheckResult) -> str:
        """Stable JSON document of the run."""
        payload = {
            "files_checked": result.files_checked,
            "violations": [
                v.to_dict() for v in ReportFormatter.sort_violations(result.violations)
            ],
            "parse_failures": [
                f.to_dict() for f in sorted(result.parse_failures, key=lambda f: (f.file, f.line))
            ],
        }
        return json.dumps(payload, indent=2, sort_keys=True)
