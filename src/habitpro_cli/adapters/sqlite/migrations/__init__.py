"""Database migration system for the habit vault."""

from .runner import Migration, MigrationRunner

__all__ = [
    "Migration",
    "MigrationRunner",
]
