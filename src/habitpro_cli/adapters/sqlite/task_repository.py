"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3

from habitpro_cli.adapters.sqlite.connection import DatabaseConnection, get_connection
from habitpro_cli.adapters.sqlite.utils import generate_uuid, now_iso, row_to_dict
from habitpro_cli.models import Task, TaskCreate
from habitpro_cli.repositories import TaskRepository


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository."""

    def __init__(self, db_path: str | None = None):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    async def list_all(self, include_inactive: bool = False) -> list[Task]:
        query = "SELECT * FROM tasks"
        if not include_inactive:
            query += " WHERE is_active = 1"
        query += " ORDER BY created_at ASC, rowid ASC"

        rows = self.connection.execute(query).fetchall()
        return [Task(**row_to_dict(row)) for row in rows]

    async def get(self, task_id: str) -> Task | None:
        row = self.connection.execute(
            "SELECT * FROM tasks WHERE id = ?", (task_id,)
        ).fetchone()
        return Task(**row_to_dict(row)) if row else None

    async def add(self, task_data: TaskCreate) -> Task:
        task_id = generate_uuid()
        data = task_data.model_dump()

        DatabaseConnection.execute_with_retry(
            self.connection,
            """INSERT INTO tasks (
                id, title, description, time, frequency,
                day_of_month, month_of_year, day_of_year, is_active, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                task_id,
                data["title"],
                data["description"],
                data["time"],
                data["frequency"],
                data["day_of_month"],
                data["month_of_year"],
                data["day_of_year"],
                int(data["is_active"]),
                now_iso(),
            ),
        )
        self.connection.commit()

        return await self.get(task_id)

    async def update(self, task_id: str, task_data: TaskCreate) -> Task | None:
        data = task_data.model_dump()

        cursor = DatabaseConnection.execute_with_retry(
            self.connection,
            """UPDATE tasks SET
                title = ?, description = ?, time = ?, frequency = ?,
                day_of_month = ?, month_of_year = ?, day_of_year = ?, is_active = ?
            WHERE id = ?""",
            (
                data["title"],
                data["description"],
                data["time"],
                data["frequency"],
                data["day_of_month"],
                data["month_of_year"],
                data["day_of_year"],
                int(data["is_active"]),
                task_id,
            ),
        )
        self.connection.commit()

        if cursor.rowcount == 0:
            return None
        return await self.get(task_id)

    async def delete(self, task_id: str) -> bool:
        # Children are removed explicitly so the cascade holds even when the
        # connection was opened without foreign key enforcement.
        with self.connection:
            self.connection.execute(
                "DELETE FROM completions WHERE task_id = ?", (task_id,)
            )
            self.connection.execute(
                "DELETE FROM achievements WHERE task_id = ?", (task_id,)
            )
            cursor = self.connection.execute(
                "DELETE FROM tasks WHERE id = ?", (task_id,)
            )
        return cursor.rowcount > 0
