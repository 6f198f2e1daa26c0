"""Forward-only migrations for the habit vault.

Each migration has a sequential version; the runner records applied versions
in ``schema_version`` and applies anything newer on connect.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from datetime import UTC, datetime

from habitpro_cli.utils.logger import get_logger

CREATE_SCHEMA_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at DATETIME NOT NULL
)
"""


class Migration(ABC):
    """Base class for vault migrations."""

    @property
    @abstractmethod
    def version(self) -> int:
        """Sequential migration version."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary."""

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None:
        """Apply the migration."""


class MigrationRunner:
    """Applies pending migrations to a connection."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self.connection.execute(CREATE_SCHEMA_VERSION_TABLE)
        self.connection.commit()

    def get_current_version(self) -> int:
        """Return the highest applied version, 0 for a fresh vault."""
        row = self.connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
        return row[0] or 0

    def apply(self, migration: Migration) -> None:
        """Apply one migration inside a transaction.

        Raises:
            ValueError: If the migration is not newer than the vault
            RuntimeError: If the migration fails (the transaction is rolled back)
        """
        current = self.get_current_version()
        if migration.version <= current:
            raise ValueError(
                f"Migration {migration.version} is not newer than vault version {current}"
            )

        try:
            migration.up(self.connection)
            self.connection.execute(
                "INSERT INTO schema_version (version, description, applied_at) VALUES (?, ?, ?)",
                (migration.version, migration.description, datetime.now(UTC).isoformat()),
            )
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            raise RuntimeError(f"Migration {migration.version} failed: {e}") from e

        get_logger().info(
            "vault migrated to v%d (%s)", migration.version, migration.description
        )

    def run_migrations(self, migrations: list[Migration]) -> int:
        """Apply every migration newer than the vault, in version order.

        Returns:
            Number of migrations applied
        """
        current = self.get_current_version()
        pending = sorted(
            (m for m in migrations if m.version > current), key=lambda m: m.version
        )
        for migration in pending:
            self.apply(migration)
        return len(pending)
