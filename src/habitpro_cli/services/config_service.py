"""Configuration service for managing HabitPro CLI configuration.

This module provides the ConfigService class, which is the single source of truth
for all configuration management in HabitPro CLI. It handles:

- Loading and saving config.json
- Dotted-key reads and writes (``output.format``)
- Resolving the vault path, honouring ``HABITPRO_DB_PATH``
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError

from habitpro_cli.models.config_models import AppConfig
from habitpro_cli.utils.logger import get_logger

DB_PATH_ENV = "HABITPRO_DB_PATH"


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("habitpro_cli"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("habitpro_cli"))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage, writing defaults on first run.

        Raises:
            RuntimeError: If the file exists but is not a valid configuration
        """
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = AppConfig()
            self.save_config()
        except (OSError, ValidationError) as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self):
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        if self.config_path.exists():
            self.config_path.unlink()
        self._config = AppConfig()
        self.save_config()
        get_logger().info("configuration reset to defaults")
        return self._config

    def get(self, key: str):
        """Get a config value by dotted key.

        Raises:
            KeyError: If the key does not exist
        """
        return self.config.get_value(key)

    def set(self, key: str, value) -> AppConfig:
        """Set a config value by dotted key and persist it.

        String values are coerced by validation (``"false"`` for a bool).

        Raises:
            KeyError: If the key does not exist
            pydantic.ValidationError: If the value is invalid for the key
        """
        self._config = self.config.with_value(key, value)
        self.save_config()
        get_logger().info("config %s set to %r", key, value)
        return self._config

    @property
    def db_path(self) -> str:
        """Vault path: ``HABITPRO_DB_PATH``, then ``storage.path``, then default."""
        override = os.environ.get(DB_PATH_ENV)
        if override:
            return override
        if self.config.storage.path:
            return self.config.storage.path
        return str(self.data_dir / "habits.db")


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
