"""CLI entry points for the Object Design Linter - Thin Controller using Typer."""

import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from object_design_linter.domain.config import ConfigurationLoader
from object_design_linter.domain.errors import ConfigurationError
from object_design_linter.domain.protocols import (
    ExtractorLookupProtocol,
    FileSystemProtocol,
    TelemetryPort,
)
from object_design_linter.domain.rules import RuleContext
from object_design_linter.domain.rules.registry import RuleRegistry
from object_design_linter.domain.services.evaluator import RuleEvaluator
from object_design_linter.infrastructure.reporters import OUTPUT_FORMATS
from object_design_linter.interface.reporters import CheckReporter
from object_design_linter.use_cases.check_sources import CheckSourcesUseCase

EXIT_OK: int = 0
EXIT_VIOLATIONS: int = 1
EXIT_CONFIGURATION_ERROR: int = 2

# B008: module-level Typer defaults
_PATHS_ARGUMENT = typer.Argument(None, help="Files or directories to check (default: src/ if present, else .)")
_RULE_OPTION = typer.Option(None, "--rule", "-r", help="Enable only this rule id (repeatable)")
_CONFIG_OPTION = typer.Option(None, "--config", "-c", help="pyproject.toml to read instead of the nearest one")
_QUIET_OPTION = typer.Option(False, "--quiet", "-q", help="Suppress the banner and progress lines")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    telemetry: TelemetryPort
    reporter: CheckReporter
    filesystem: FileSystemProtocol
    extractors: ExtractorLookupProtocol
    registry: RuleRegistry
    load_config: Callable[[Optional[Path]], dict[str, object]]


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_target_paths(paths: Optional[list[Path]]) -> list[str]:
        """Explicit paths as given, else src/ if it exists, else '.' (public API)."""
        if paths:
            return [str(path) for path in paths]
        src_dir = Path.cwd() / "src"
        if src_dir.exists() and src_dir.is_dir():
            return ["src"]
        return ["."]

    @staticmethod
    def load_configuration(
        deps: CLIDependencies, config_file: Optional[Path], overrides: dict[str, object]
    ) -> ConfigurationLoader:
        """Read the config table and apply CLI overrides. Exits 2 on ConfigurationError."""
        try:
            return ConfigurationLoader(deps.load_config(config_file), overrides)
        except ConfigurationError as exc:
            deps.telemetry.error(f"Configuration error: {exc}")
            sys.exit(EXIT_CONFIGURATION_ERROR)

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="odlint",
            help="Object Design Linter: flag constructor-injection, immutability and system-boundary violations.",
            add_completion=False,
        )

        @app.command()
        def check(
            paths: Optional[list[Path]] = _PATHS_ARGUMENT,
            output_format: str = typer.Option(
                "text", "--format", "-f", help="Report format: text, json or table"),
            rule: Optional[list[str]] = _RULE_OPTION,
            fail_on_violation: Optional[bool] = typer.Option(
                None,
                "--fail-on-violation/--no-fail-on-violation",
                help="Exit 1 when violations or parse failures are found (default from config: true).",
            ),
            jobs: Optional[int] = typer.Option(
                None, "--jobs", "-j", help="Check files on this many worker threads"),
            config: Optional[Path] = _CONFIG_OPTION,
            quiet: bool = _QUIET_OPTION,
        ) -> None:
            """Check source files against the object design rules."""
            if quiet:
                deps.telemetry.quiet = True
            if output_format not in OUTPUT_FORMATS:
                deps.telemetry.error(
                    f"Unknown format '{output_format}'. Choose one of: {', '.join(OUTPUT_FORMATS)}.")
                sys.exit(EXIT_CONFIGURATION_ERROR)
            config_loader = CLIAppFactory.load_configuration(
                deps,
                config,
                {"rules": rule or None, "fail_on_violation": fail_on_violation, "jobs": jobs},
            )
            deps.telemetry.handshake()
            use_case = CheckSourcesUseCase(
                filesystem=deps.filesystem,
                extractors=deps.extractors,
                evaluator=RuleEvaluator(RuleContext.from_config(config_loader)),
                rules=deps.registry.select(config_loader.enabled_rules),
                telemetry=deps.telemetry,
                config_loader=config_loader,
            )
            result = use_case.execute(CLIAppFactory.resolve_target_paths(paths))
            deps.reporter.report_check(result, output_format=output_format)

            if config_loader.fail_on_violation and not result.is_clean():
                sys.exit(EXIT_VIOLATIONS)
            sys.exit(EXIT_OK)

        @app.command()
        def rules(config: Optional[Path] = _CONFIG_OPTION) -> None:
            """List the rule catalog and which rules the configuration enables."""
            config_loader = CLIAppFactory.load_configuration(deps, config, {})
            deps.reporter.report_rules(deps.registry.all_rules(), config_loader.enabled_rules)

        return app


create_app = CLIAppFactory.create_app
