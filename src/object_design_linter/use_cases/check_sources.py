"""Use Case: Check Sources - extract, evaluate and collect results per file."""

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from object_design_linter.domain.entities import CheckResult, ParseFailure, Violation
from object_design_linter.domain.errors import ParseError
from object_design_linter.domain.protocols import (
    ExtractorLookupProtocol,
    FileSystemProtocol,
    TelemetryPort,
)
from object_design_linter.domain.rules import Rule
from object_design_linter.domain.services.evaluator import RuleEvaluator

if TYPE_CHECKING:
    from object_design_linter.domain.config import ConfigurationLoader

FileOutcome = tuple[list[Violation], list[ParseFailure]]

MISSING_PATH_MESSAGE = "Path does not exist"


class CheckSourcesUseCase:
    """Orchestrate extraction and evaluation across files and return one CheckResult."""

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        extractors: ExtractorLookupProtocol,
        evaluator: RuleEvaluator,
        rules: Sequence[Rule],
        telemetry: TelemetryPort,
        config_loader: "ConfigurationLoader",
    ) -> None:
        self.filesystem = filesystem
        self.extractors = extractors
        self.evaluator = evaluator
        self.rules = tuple(rules)
        self.telemetry = telemetry
        self.config_loader = config_loader

    def execute(self, paths: Sequence[str]) -> CheckResult:
        """
        Check every source file under paths.

        A file that fails to parse, or a path that does not exist, becomes a
        ParseFailure and the run goes on. Files are independent, so with
        jobs > 1 they are checked on a thread pool; the formatter sorts the
        merged output.
        """
        files = self.collect_files(paths)
        missing = [
            ParseFailure(path, 0, MISSING_PATH_MESSAGE)
            for path in dict.fromkeys(paths)
            if not self.filesystem.exists(path)
        ]
        if not files:
            self.telemetry.step("No source files to check.")
            return CheckResult(parse_failures=tuple(missing))
        self.telemetry.step(
            f"Checking {len(files)} file(s) against {len(self.rules)} rule(s)..."
        )

        jobs = min(self.config_loader.jobs, len(files))
        if jobs > 1:
            with ThreadPoolExecutor(max_workers=jobs) as executor:
                outcomes = list(executor.map(self.check_file, files))
        else:
            outcomes = [self.check_file(path) for path in files]

        violations: list[Violation] = []
        failures: list[ParseFailure] = []
        for file_violations, file_failures in outcomes:
            violations.extend(file_violations)
            failures.extend(file_failures)
        if failures:
            self.telemetry.warning(f"{len(failures)} file(s) could not be parsed.")
        return CheckResult(
            violations=tuple(violations),
            parse_failures=tuple(missing + failures),
            files_checked=len(files),
        )

    def collect_files(self, paths: Sequence[str]) -> list[str]:
        """Expand directories into supported source files, keeping argument order."""
        suffixes = self.extractors.supported_suffixes()
        files: list[str] = []
        seen: set[str] = set()
        for path in paths:
            if not self.filesystem.exists(path):
                self.telemetry.warning(f"Path does not exist: {path}")
                continue
            for file_path in self.filesystem.glob_source_files(
                path, suffixes, self.config_loader.exclude
            ):
                if file_path not in seen:
                    seen.add(file_path)
                    files.append(file_path)
        return files

    def check_file(self, path: str) -> FileOutcome:
        """Extract and evaluate one file. Never raises for bad input."""
        extractor = self.extractors.for_path(path)
        if extractor is None:
            return [], [ParseFailure(path, 0, "Unsupported file type")]
        try:
            source = self.filesystem.read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            return [], [ParseFailure(path, 0, f"Cannot read file: {exc}")]
        try:
            declarations = extractor.extract(source, path)
        except ParseError as exc:
            self.telemetry.debug(f"Parse error in {path}: {exc}")
            return [], [ParseFailure(path, exc.line, exc.message)]
        return self.evaluator.evaluate_all(declarations, self.rules), []
