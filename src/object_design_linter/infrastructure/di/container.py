from typing import TYPE_CHECKING, Any, Optional, cast

from object_design_linter.domain.config import ConfigurationLoader
from object_design_linter.domain.rules.registry import RuleRegistry
from object_design_linter.infrastructure.config_file_loader import ConfigFileLoader
from object_design_linter.infrastructure.extractors import ExtractorRegistry
from object_design_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from object_design_linter.infrastructure.reporters import TerminalCheckReporter
from object_design_linter.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from object_design_linter.domain.protocols import (
        ExtractorLookupProtocol,
        FileSystemProtocol,
        TelemetryPort,
    )
    from object_design_linter.interface.reporters import CheckReporter


class LinterContainer:
    """Dependency Injection Container for the Object Design Linter."""

    _instance: Optional["LinterContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    @classmethod
    def get_instance(cls) -> "LinterContainer":
        """Shared container for entry points that cannot receive one (the pylint plugin)."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        self.register_singleton(
            "TelemetryPort", ProjectTelemetry("ODL", "cyan", "Object design conformance scan")
        )
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("ExtractorRegistry", ExtractorRegistry())
        self.register_singleton("RuleRegistry", RuleRegistry())
        self.register_singleton("CheckReporter", TerminalCheckReporter())

    # JUSTIFICATION: DI Container must handle any type of service
    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    # JUSTIFICATION: DI Container must return any type of service
    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_extractor_registry(self) -> "ExtractorLookupProtocol":
        """Return the suffix -> extractor lookup."""
        return cast("ExtractorLookupProtocol", self.get("ExtractorRegistry"))

    def get_rule_registry(self) -> RuleRegistry:
        """Return the rule catalog."""
        return cast(RuleRegistry, self.get("RuleRegistry"))

    def get_reporter(self) -> "CheckReporter":
        """Return the check reporter."""
        return cast("CheckReporter", self.get("CheckReporter"))

    def get_config_loader(self) -> ConfigurationLoader:
        """Configuration from the nearest pyproject.toml, loaded once."""
        if "ConfigurationLoader" not in self._singletons:
            self.register_singleton(
                "ConfigurationLoader", ConfigurationLoader(ConfigFileLoader.load_config_from_fs())
            )
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

