"""Configuration for linter settings. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging
import re

from object_design_linter.domain.constants import (
    DEFAULT_BANNED_SYSTEM_CALL_SYMBOLS,
    DEFAULT_SERVICE_TYPE_PATTERN,
    DEFAULT_SYSTEM_BOUNDARY_PATTERN,
    RULE_IDS,
)
from object_design_linter.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")

KNOWN_KEYS: frozenset[str] = frozenset(
    {
        "rules",
        "service_type_pattern",
        "service_type_naming_pattern",
        "banned_system_call_symbols",
        "fail_on_violation",
        "system_boundary_pattern",
        "sanctioned_return_unions",
        "exclude",
        "jobs",
    }
)


class ConfigurationLoader:
    """
    Immutable configuration for linter settings.

    Created by Infrastructure from the ``[tool.object-design-linter]`` table
    plus CLI overrides. Domain does not read the filesystem; Infrastructure
    calls ConfigFileLoader.load_config_from_fs() and constructs
    ConfigurationLoader(config_dict, overrides) at the composition root.

    Keys may be written in snake_case, kebab-case or camelCase
    (``serviceTypeNamingPattern``). Every value is validated here so a bad
    configuration aborts the run before any file is read.
    """

    def __init__(
        self,
        config_dict: dict[str, object] | None = None,
        overrides: dict[str, object] | None = None,
    ) -> None:
        """Set config once at construction. No mutable state after init."""
        merged = ConfigurationLoader.normalize_keys(config_dict or {})
        merged.update(
            {k: v for k, v in ConfigurationLoader.normalize_keys(overrides or {}).items() if v is not None}
        )
        self._config = merged
        self.validate_config(merged)

        self._enabled_rules = self._read_rules(merged.get("rules"))
        pattern = merged.get("service_type_pattern", merged.get("service_type_naming_pattern"))
        self._service_type_pattern = self._compile(
            "service_type_pattern", pattern, DEFAULT_SERVICE_TYPE_PATTERN
        )
        self._system_boundary_pattern = self._compile(
            "system_boundary_pattern",
            merged.get("system_boundary_pattern"),
            DEFAULT_SYSTEM_BOUNDARY_PATTERN,
        )
        self._banned = self._read_string_set(
            "banned_system_call_symbols",
            merged.get("banned_system_call_symbols"),
            DEFAULT_BANNED_SYSTEM_CALL_SYMBOLS,
        )
        self._sanctioned_unions = frozenset(
            ConfigurationLoader.canonical_union(item)
            for item in self._read_string_set(
                "sanctioned_return_unions", merged.get("sanctioned_return_unions"), frozenset()
            )
        )
        self._exclude = tuple(
            sorted(self._read_string_set("exclude", merged.get("exclude"), frozenset()))
        )
        self._fail_on_violation = self._read_bool(
            "fail_on_violation", merged.get("fail_on_violation"), True
        )
        self._jobs = self._read_jobs(merged.get("jobs"))

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about keys this version does not understand."""
        unknown = sorted(set(config) - KNOWN_KEYS)
        if unknown:
            logger.warning(
                "Configuration Warning: ignoring unknown option(s): %s", ", ".join(unknown)
            )

    @property
    def config(self) -> dict[str, object]:
        """Return the merged configuration."""
        return dict(self._config)

    @property
    def enabled_rules(self) -> tuple[str, ...]:
        """Rule ids to evaluate, in catalog order."""
        return self._enabled_rules

    @property
    def service_type_pattern(self) -> re.Pattern[str]:
        """Pattern distinguishing service types from value types."""
        return self._service_type_pattern

    @property
    def system_boundary_pattern(self) -> re.Pattern[str]:
        """Pattern naming declarations allowed to perform system calls."""
        return self._system_boundary_pattern

    @property
    def banned_system_call_symbols(self) -> frozenset[str]:
        """Call symbols that reach outside the process."""
        return self._banned

    @property
    def sanctioned_return_unions(self) -> frozenset[str]:
        """Canonical union spellings allowed as return types."""
        return self._sanctioned_unions

    @property
    def exclude(self) -> tuple[str, ...]:
        """Glob patterns excluded from directory walks."""
        return self._exclude

    @property
    def fail_on_violation(self) -> bool:
        """Whether violations produce a failing exit status."""
        return self._fail_on_violation

    @property
    def jobs(self) -> int:
        """Worker threads used to check files."""
        return self._jobs

    @staticmethod
    def normalize_keys(raw: dict[str, object]) -> dict[str, object]:
        """Map kebab-case and camelCase keys to snake_case. Public API."""
        normalized: dict[str, object] = {}
        for key, value in raw.items():
            if not isinstance(key, str):
                continue
            snake = _CAMEL_BOUNDARY.sub(r"_\1", key).replace("-", "_").lower()
            normalized[snake] = value
        return normalized

    @staticmethod
    def canonical_union(spelling: str) -> str:
        """Canonical form of a union spelling: sorted, lower-cased shapes joined by '|'."""
        shapes = {part.strip().lstrip("\\").lower() for part in spelling.split("|") if part.strip()}
        return "|".join(sorted(shapes))

    def _read_rules(self, raw: object) -> tuple[str, ...]:
        if raw is None:
            return RULE_IDS
        if not isinstance(raw, (list, tuple, set, frozenset)) or not all(
            isinstance(item, str) for item in raw
        ):
            raise ConfigurationError("'rules' must be a list of rule ids.")
        unknown = sorted(set(raw) - set(RULE_IDS))
        if unknown:
            raise ConfigurationError(
                f"Unknown rule id(s): {', '.join(unknown)}. Known rules: {', '.join(RULE_IDS)}."
            )
        return tuple(rule_id for rule_id in RULE_IDS if rule_id in raw)

    def _compile(self, key: str, raw: object, default: str) -> re.Pattern[str]:
        if raw is None:
            raw = default
        if not isinstance(raw, str) or not raw:
            raise ConfigurationError(f"'{key}' must be a non-empty regular expression string.")
        try:
            return re.compile(raw)
        except re.error as exc:
            raise ConfigurationError(f"Malformed pattern for '{key}': {exc}") from exc

    def _read_string_set(
        self, key: str, raw: object, default: frozenset[str]
    ) -> frozenset[str]:
        if raw is None:
            return default
        if not isinstance(raw, (list, tuple, set, frozenset)) or not all(
            isinstance(item, str) for item in raw
        ):
            raise ConfigurationError(f"'{key}' must be a list of strings.")
        return frozenset(raw)

    def _read_bool(self, key: str, raw: object, default: bool) -> bool:
        if raw is None:
            return default
        if not isinstance(raw, bool):
            raise ConfigurationError(f"'{key}' must be true or false.")
        return raw

    def _read_jobs(self, raw: object) -> int:
        if raw is None:
            return 1
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 1:
            raise ConfigurationError("'jobs' must be a positive integer.")
        return raw
