"""Configuration for boundary checks. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging

from feature_boundary_linter.domain.constants import DEFAULT_EXCLUDE_PATTERNS

_KNOWN_KEYS: frozenset[str] = frozenset(
    {
        "disabled_rules",
        "extra_internal_directories",
        "exclude_patterns",
        "lib_dir",
        "package_name",
    }
)


class ConfigurationLoader:
    """
    Immutable configuration for boundary checks.

    Created by Infrastructure from the feature_boundary section of analysis_options.yaml.
    Domain does not read the filesystem; Infrastructure calls
    ConfigFileLoader.load_config_from_fs() and constructs ConfigurationLoader(config_dict)
    at composition root.
    """

    def __init__(self, config_dict: dict[str, object]) -> None:
        """Set config once at construction. No mutable state after init."""
        self._config = config_dict
        if config_dict:
            self.validate_config(config_dict)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about keys this tool does not understand; they are ignored."""
        for key in sorted(str(k) for k in config):
            if key not in _KNOWN_KEYS:
                logging.warning(
                    "Configuration Warning: unknown key 'feature_boundary.%s' ignored.", key
                )

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration section."""
        return self._config

    @property
    def disabled_rules(self) -> frozenset[str]:
        """Rule codes or symbols switched off for this project."""
        return frozenset(self._string_list("disabled_rules"))

    @property
    def extra_internal_directories(self) -> frozenset[str]:
        """
        Additional directory names treated as feature internals.

        Entries are normalised to bare names ('/services/' -> 'services').
        """
        names = (name.strip("/") for name in self._string_list("extra_internal_directories"))
        return frozenset(name for name in names if name)

    @property
    def exclude_patterns(self) -> list[str]:
        """fnmatch globs of files to skip; defaults to generated Dart sources."""
        if "exclude_patterns" not in self._config:
            return list(DEFAULT_EXCLUDE_PATTERNS)
        return self._string_list("exclude_patterns")

    @property
    def lib_dir(self) -> str:
        raw = self._config.get("lib_dir", "lib")
        if isinstance(raw, str) and raw.strip("/"):
            return raw.strip("/")
        return "lib"

    @property
    def package_name(self) -> str | None:
        """Explicit package name; None means read it from pubspec.yaml."""
        raw = self._config.get("package_name")
        if isinstance(raw, str) and raw:
            return raw
        return None

    def is_rule_enabled(self, code: str, symbol: str = "") -> bool:
        disabled = self.disabled_rules
        return code not in disabled and (not symbol or symbol not in disabled)

    def _string_list(self, key: str) -> list[str]:
        raw = self._config.get(key, [])
        if isinstance(raw, str):
            return [raw]
        if isinstance(raw, list):
            return [str(x) for x in raw if isinstance(x, str)]
        return []
