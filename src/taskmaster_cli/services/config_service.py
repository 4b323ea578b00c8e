"""Configuration service for managing TaskMaster configuration.

This module provides the ConfigService class, which is the single source of truth
for all configuration management in TaskMaster. It handles:

- Loading and saving config.json
- Dot-separated key access (``analytics.timezone``)
- The active owner of tasks
- Default database location
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from taskmaster_cli.models.config_models import AppConfig
from taskmaster_cli.models.exceptions import InvalidInputError

_APP_NAME = "taskmaster_cli"


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir(_APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(_APP_NAME))

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

    @property
    def db_path(self) -> str:
        """Path of the SQLite database for the current configuration."""
        return self.config.storage.db_path or str(self.data_dir / "taskmaster.db")

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults, keeping the active user."""
        current_user_id = self.config.current_user_id
        self._config = AppConfig(current_user_id=current_user_id)
        self.save_config()
        return self._config

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            InvalidInputError: If the key does not exist
        """
        value: Any = self.config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                raise InvalidInputError(f"Unknown config key: {key}")
            value = getattr(value, k)
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        The whole configuration is re-validated before it is saved.

        Raises:
            InvalidInputError: If the key is unknown or the value is invalid
        """
        self.get(key)
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        try:
            self._config = AppConfig(**config_dict)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid value for {key}: {value}") from e
        self.save_config()

    def set_current_user(self, user_id: str | None) -> None:
        """Set the active owner of tasks."""
        self.config.current_user_id = user_id
        self.save_config()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
