"""Configuration models for HabitPro CLI.

The configuration is persisted as JSON and validated with Pydantic on load.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Storage backend configuration.

    ``local`` keeps habits in a SQLite vault at ``path``; ``memory`` keeps
    them in process memory only (nothing survives the command).
    """

    type: Literal["local", "memory"] = Field(default="local")
    path: str = Field(default="", description="SQLite vault path (local only)")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        return v.strip()


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml"] = Field(default="pretty")
    color: bool = Field(default=True)
    compact: bool = Field(default=False)


class CalendarConfig(BaseModel):
    """Calendar view configuration."""

    week_start: Literal["monday", "sunday"] = Field(default="monday")


class AppConfig(BaseModel):
    """Main HabitPro configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    calendar: CalendarConfig = Field(default_factory=CalendarConfig)

    def get_value(self, key: str):
        """Get a value by dotted key (e.g. ``output.format``).

        Raises:
            KeyError: If the key does not exist
        """
        current = self.model_dump()
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                raise KeyError(key)
            current = current[part]
        return current

    def with_value(self, key: str, value) -> AppConfig:
        """Return a copy with the dotted key set, re-validated.

        Raises:
            KeyError: If the key does not exist
            pydantic.ValidationError: If the value is invalid for the key
        """
        data = self.model_dump()
        parts = key.split(".")
        current = data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                raise KeyError(key)
            current = current[part]
        if parts[-1] not in current or isinstance(current[parts[-1]], dict):
            raise KeyError(key)
        current[parts[-1]] = value
        return AppConfig.model_validate(data)
