"""SQLite implementation of AchievementRepository."""

from __future__ import annotations

import sqlite3

from habitpro_cli.adapters.sqlite.connection import DatabaseConnection, get_connection
from habitpro_cli.adapters.sqlite.utils import generate_uuid, now_iso, row_to_dict
from habitpro_cli.models import Achievement, AchievementCreate
from habitpro_cli.repositories import AchievementRepository


class SqliteAchievementRepository(AchievementRepository):
    """SQLite implementation of achievement repository."""

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    async def list_all(self) -> list[Achievement]:
        rows = self.connection.execute(
            "SELECT * FROM achievements ORDER BY earned_at ASC, rowid ASC"
        ).fetchall()
        return [Achievement(**row_to_dict(row)) for row in rows]

    async def list_for_task(self, task_id: str) -> list[Achievement]:
        rows = self.connection.execute(
            "SELECT * FROM achievements WHERE task_id = ? ORDER BY earned_at ASC, rowid ASC",
            (task_id,),
        ).fetchall()
        return [Achievement(**row_to_dict(row)) for row in rows]

    async def create(self, achievement_data: AchievementCreate) -> Achievement:
        """Record an achievement.

        A second award of the same milestone type for a task is ignored and
        the existing record is returned.
        """
        DatabaseConnection.execute_with_retry(
            self.connection,
            """INSERT OR IGNORE INTO achievements (id, task_id, type, streak_count, earned_at)
            VALUES (?, ?, ?, ?, ?)""",
            (
                generate_uuid(),
                achievement_data.task_id,
                achievement_data.type,
                achievement_data.streak_count,
                now_iso(),
            ),
        )
        self.connection.commit()

        row = self.connection.execute(
            "SELECT * FROM achievements WHERE task_id = ? AND type = ?",
            (achievement_data.task_id, achievement_data.type),
        ).fetchone()
        return Achievement(**row_to_dict(row))

    async def delete(self, achievement_id: str) -> bool:
        cursor = DatabaseConnection.execute_with_retry(
            self.connection, "DELETE FROM achievements WHERE id = ?", (achievement_id,)
        )
        self.connection.commit()
        return cursor.rowcount > 0
