"""Configuration loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from shellmod.errors import ConfigError, ConfigNotFoundError

__all__ = ["Config", "DEFAULTS"]

DEFAULTS: dict[str, Any] = {
    "module_path.variable": "SHELLMOD_MODULE_PATH",
    "module_path.system_first": False,
    "modules.max_nesting_depth": 10,
}


class Config:
    """Configuration accessor with dot-path key support.

    Keys absent from the loaded data fall back to ``DEFAULTS`` before the
    caller's default.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def load(cls, path: str | Path) -> Config:
        """Load configuration from a YAML mapping file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigNotFoundError(config_path=str(config_path))

        content = config_path.read_text(encoding="utf-8")
        try:
            parsed = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in config file: {config_path}") from e

        if parsed is None:
            return cls()
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Config file must be a YAML mapping: {config_path}")
        return cls(parsed)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return DEFAULTS.get(key, default)
        return current
