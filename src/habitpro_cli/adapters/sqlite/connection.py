"""Database connection management for the local SQLite vault.

This module provides a singleton connection manager for the habit vault,
ensuring proper connection lifecycle, WAL mode, and foreign key enforcement
(completions and achievements cascade when their task is deleted).
"""

from __future__ import annotations

import atexit
import os
import sqlite3
import time
from pathlib import Path

from platformdirs import user_data_dir

from habitpro_cli.adapters.sqlite.migrations.m001_initial_schema import ALL_MIGRATIONS
from habitpro_cli.adapters.sqlite.migrations.runner import MigrationRunner
from habitpro_cli.utils.logger import get_logger


def default_db_path() -> Path:
    """Default vault location under the platform data directory."""
    return Path(user_data_dir("habitpro_cli")) / "habits.db"


class DatabaseConnection:
    """Singleton connection manager for the local SQLite vault.

    Provides:
    - Single connection per process (connection reuse)
    - WAL mode for better concurrency
    - Foreign key constraint enforcement
    - Automatic directory creation and migrations
    - Owner-only file permissions
    """

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None

    def __new__(cls) -> DatabaseConnection:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            atexit.register(cls.close_connection)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create database connection.

        Args:
            db_path: Path to database file. If None, uses default location.

        Returns:
            sqlite3.Connection configured for HabitPro usage
        """
        instance = cls()
        db_path = Path(db_path) if db_path else default_db_path()

        if instance._connection is not None and instance._db_path == db_path:
            return instance._connection

        if instance._connection is not None:
            cls.close_connection()

        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

        connection = sqlite3.connect(
            str(db_path),
            check_same_thread=False,
            timeout=30.0,
        )
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        connection.execute("PRAGMA journal_mode = WAL")

        if is_new_database:
            os.chmod(db_path, 0o600)
            get_logger().info("created habit vault at %s", db_path)

        MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)

        instance._connection = connection
        instance._db_path = db_path
        return connection

    @classmethod
    def close_connection(cls) -> None:
        """Commit and close the current connection, if any."""
        instance = cls()
        if instance._connection is None:
            return
        try:
            instance._connection.commit()
            instance._connection.close()
        except sqlite3.Error as e:
            get_logger().warning("error closing vault connection: %s", e)
        finally:
            instance._connection = None
            instance._db_path = None

    @classmethod
    def get_db_path(cls) -> Path | None:
        """Get current database path."""
        return cls()._db_path

    @classmethod
    def execute_with_retry(
        cls,
        connection: sqlite3.Connection,
        sql: str,
        params: tuple | dict | None = None,
        max_retries: int = 3,
    ) -> sqlite3.Cursor:
        """Execute SQL, backing off while the database is locked.

        Args:
            connection: Database connection
            sql: SQL statement to execute
            params: Parameters for SQL statement
            max_retries: Maximum number of attempts

        Returns:
            Cursor after successful execution

        Raises:
            sqlite3.OperationalError: If database remains locked after retries
        """
        for attempt in range(max_retries):
            try:
                return connection.execute(sql, params or ())
            except sqlite3.OperationalError as e:
                if "database is locked" in str(e) and attempt < max_retries - 1:
                    # 0.1s, 0.2s, 0.4s
                    time.sleep(0.1 * (2**attempt))
                    continue
                raise

        raise sqlite3.OperationalError("Max retries exceeded")


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get database connection."""
    return DatabaseConnection.get_connection(db_path)
