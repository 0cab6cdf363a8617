"""Configuration management for Tempo."""

import copy
import logging
from pathlib import Path
from typing import Any, Optional

import yaml  # type: ignore[import-untyped]
from jsonschema import ValidationError, validate  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class ConfigManager:
    """Manage application configuration."""

    DEFAULT_CONFIG = {
        "version": "1.0",
        "general": {
            "data_dir": "~/.tempo/data",
        },
        "display": {
            "time_format": "%H:%M",
            "color": True,
        },
        "advanced": {
            "log_level": "WARNING",
        },
    }

    CONFIG_SCHEMA = {
        "type": "object",
        "properties": {
            "version": {"type": "string"},
            "general": {
                "type": "object",
                "properties": {
                    "data_dir": {"type": "string"},
                },
            },
            "display": {
                "type": "object",
                "properties": {
                    "time_format": {"type": "string"},
                    "color": {"type": "boolean"},
                },
            },
            "advanced": {
                "type": "object",
                "properties": {
                    "log_level": {"type": "string", "enum": LOG_LEVELS},
                },
            },
        },
        "required": ["version"],
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to config file. Defaults to ~/.tempo/config.yml
        """
        if config_path is None:
            config_path = Path.home() / ".tempo" / "config.yml"
        self.config_path = config_path
        self._config: dict[str, Any] = {}
        self._load_or_create()

    def _load_or_create(self) -> None:
        """Load existing config or create default."""
        if not self.config_path.exists():
            self._config = copy.deepcopy(self.DEFAULT_CONFIG)
            self.save()
            return

        with open(self.config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        self._config = self._merge_with_defaults(loaded)
        try:
            self.validate()
        except ValueError as e:
            backup_path = self.config_path.with_suffix(".yml.backup")
            self.config_path.rename(backup_path)
            logger.warning(f"Invalid config moved to {backup_path}")
            self._config = copy.deepcopy(self.DEFAULT_CONFIG)
            self.save()
            raise ValueError(
                f"Config validation failed, backed up to {backup_path}. "
                f"Using defaults. Error: {e}"
            )

    def _merge_with_defaults(self, config: dict[str, Any]) -> dict[str, Any]:
        """Merge config with defaults so that every default key exists."""
        result = copy.deepcopy(self.DEFAULT_CONFIG)
        self._deep_merge(result, config)
        return result

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> None:
        """Deep merge override into base dictionary (in-place)."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., 'general.data_dir')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get('advanced.log_level')
            'WARNING'
        """
        value: Any = self._config
        for k in key.split("."):
            if not isinstance(value, dict):
                return default
            value = value.get(k)
            if value is None:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation and save.

        Raises:
            ValueError: If configuration is invalid after setting
        """
        keys = key.split(".")
        previous = copy.deepcopy(self._config)
        config = self._config
        for k in keys[:-1]:
            config = config.setdefault(k, {})
        config[keys[-1]] = value
        try:
            self.validate()
        except ValueError:
            self._config = previous
            raise
        self.save()

    def validate(self) -> bool:
        """Validate configuration against schema.

        Raises:
            ValueError: If configuration is invalid
        """
        try:
            validate(instance=self._config, schema=self.CONFIG_SCHEMA)
            return True
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e.message}")

    def save(self) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(
                self._config, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )

    def reset(self) -> None:
        """Reset to default configuration."""
        self._config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.save()

    def get_all_keys(self, prefix: str = "") -> list[str]:
        """Get all leaf configuration keys in dot notation.

        Example:
            >>> config.get_all_keys()
            ['version', 'general.data_dir', 'display.time_format', ...]
        """
        keys = []
        config = self._config if not prefix else self.get(prefix, {})

        if isinstance(config, dict):
            for key, value in config.items():
                full_key = f"{prefix}.{key}" if prefix else key
                if isinstance(value, dict):
                    keys.extend(self.get_all_keys(full_key))
                else:
                    keys.append(full_key)
        return keys

    def to_dict(self) -> dict[str, Any]:
        """Get a copy of the full configuration."""
        return copy.deepcopy(self._config)

    @property
    def data_dir(self) -> Path:
        """Configured data directory with ``~`` expanded."""
        return Path(self.get("general.data_dir", "~/.tempo/data")).expanduser()
