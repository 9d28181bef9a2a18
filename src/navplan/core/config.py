"""Configuration loader for YAML files.

This module provides configuration loading with support for nested access,
package defaults, and merging of user overrides.

Typical usage example:
    from navplan.core.config import ConfigLoader

    config = ConfigLoader.load_with_defaults("config/navplan.yaml")
    day_reserve = config.get("fuel.reserve_minutes.VFR_DAY", default=30)
"""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# Regulatory values and tunables used when no configuration file overrides them.
DEFAULT_SETTINGS: dict[str, Any] = {
    "fuel": {
        "reserve_minutes": {
            "VFR_DAY": 30.0,
            "VFR_NIGHT": 45.0,
            "IFR": 45.0,
        },
        "contingency_fraction": 0.05,
        "taxi_fuel": 4.0,
        "density_kg_per_l": 0.72,
    },
    "orchestration": {
        "debounce_s": 0.5,
    },
    "remote": {
        "base_url": "https://api.byteflight.app",
        "timeout_s": 10.0,
    },
    "plan": {
        "min_altitude_ft": 0.0,
        "max_altitude_ft": 19500.0,
    },
}


class ConfigError(Exception):
    """Raised when configuration operations fail."""


class ConfigLoader:
    """Configuration loader for YAML files.

    Examples:
        >>> config = ConfigLoader.load("config/navplan.yaml")
        >>> taxi = config.get("fuel.taxi_fuel", default=4.0)
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        """Initialize with configuration data.

        Args:
            data: Configuration dictionary.
        """
        self._data = data if data is not None else {}

    @classmethod
    def load(cls, path: str | Path) -> "ConfigLoader":
        """Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            ConfigLoader instance with loaded data.

        Raises:
            ConfigError: If the file is missing, unreadable or not a mapping.
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {path}")

        logger.info("Loaded configuration from: %s", path)
        return cls(data)

    @classmethod
    def defaults(cls) -> "ConfigLoader":
        """Build a loader holding only the built-in defaults."""
        return cls(copy.deepcopy(DEFAULT_SETTINGS))

    @classmethod
    def load_with_defaults(cls, path: str | Path | None = None) -> "ConfigLoader":
        """Load a YAML file on top of the built-in defaults.

        Args:
            path: Optional override file. Keys it does not set keep their
                default values.

        Returns:
            Merged configuration.
        """
        config = cls.defaults()
        if path is not None:
            config.merge(cls.load(path))
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g. "fuel.taxi_fuel").
            default: Default value if key not found.

        Returns:
            Configuration value or default.
        """
        value: Any = self._data

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_section(self, key: str) -> dict[str, Any]:
        """Get an entire configuration section.

        Args:
            key: Section key (supports dot notation).

        Returns:
            Configuration section as dictionary.

        Raises:
            ConfigError: If section not found or not a dict.
        """
        value = self.get(key)

        if value is None:
            raise ConfigError(f"Configuration section not found: {key}")

        if not isinstance(value, dict):
            raise ConfigError(f"Configuration key is not a section: {key}")

        return value

    def merge(self, other: "ConfigLoader") -> None:
        """Merge another configuration into this one.

        Args:
            other: ConfigLoader to merge from. Its values win.
        """
        self._data = self._merge_dicts(self._data, other._data)

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value

        return result

    def to_dict(self) -> dict[str, Any]:
        """Get the configuration as a dictionary."""
        return copy.deepcopy(self._data)
