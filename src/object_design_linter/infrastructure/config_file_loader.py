"""Load [tool.object-design-linter] from pyproject.toml. Infrastructure I/O only."""

import sys
from pathlib import Path
from typing import Optional

from object_design_linter.domain.constants import CONFIG_SECTION
from object_design_linter.domain.errors import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib


class ConfigFileLoader:
    """
    Loads config from pyproject.toml, walking up from the working directory.
    """

    @staticmethod
    def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
        """Nearest pyproject.toml at or above start."""
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            candidate = directory / "pyproject.toml"
            if candidate.is_file():
                return candidate
        return None

    @staticmethod
    def load_config_from_fs(config_file: Optional[Path] = None) -> dict[str, object]:
        """Return the [tool.object-design-linter] table, or {} when there is none."""
        path = config_file or ConfigFileLoader.find_config_file()
        if path is None:
            return {}
        try:
            with path.open("rb") as f:
                data = toml_lib.load(f)
        except OSError:
            if config_file is not None:
                raise ConfigurationError(f"Cannot read configuration file: {path}") from None
            return {}
        except toml_lib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Malformed TOML in {path}: {exc}") from exc
        tool_section = data.get("tool", {}) or {}
        section = tool_section.get(CONFIG_SECTION, {}) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"[tool.{CONFIG_SECTION}] in {path} must be a table.")
        return section
