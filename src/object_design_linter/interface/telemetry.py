"""Project telemetry: rich console status lines mirrored to the stdlib logger."""

import logging

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from object_design_linter.domain.constants import ODL_BANNER


class ProjectTelemetry:
    """Implements TelemetryPort. Status goes to stderr so reports on stdout stay clean."""

    def __init__(self, project: str, color: str, welcome: str, quiet: bool = False) -> None:
        self.project = project
        self.color = color
        self.welcome = welcome
        self.quiet = quiet
        self.console = Console(stderr=True, highlight=False)
        self.logger = logging.getLogger("object_design_linter")

    def handshake(self) -> None:
        """Print the banner and welcome line."""
        self.logger.info("%s: %s", self.project, self.welcome)
        if self.quiet:
            return
        self.console.print(Text.from_ansi(ODL_BANNER))
        self.console.print(f"[bold {self.color}]{escape(f'[{self.project}]')}[/] {escape(self.welcome)}")

    def step(self, message: str) -> None:
        self.logger.info(message)
        if not self.quiet:
            self.console.print(f"[{self.color}]»[/] {escape(message)}")

    def warning(self, message: str) -> None:
        self.logger.warning(message)
        self.console.print(f"[yellow]⚠[/] {escape(message)}")

    def error(self, message: str) -> None:
        self.logger.error(message)
        self.console.print(f"[bold red]✖[/] {escape(message)}")

    def debug(self, message: str) -> None:
        self.logger.debug(message)
