"""SQLite implementation of CompletionRepository."""

from __future__ import annotations

import sqlite3
from datetime import date

from habitpro_cli.adapters.sqlite.connection import DatabaseConnection, get_connection
from habitpro_cli.adapters.sqlite.utils import (
    date_to_text,
    generate_uuid,
    now_iso,
    row_to_dict,
)
from habitpro_cli.models import Completion, CompletionCreate
from habitpro_cli.repositories import CompletionRepository


class SqliteCompletionRepository(CompletionRepository):
    """SQLite implementation of completion repository.

    The ``UNIQUE(task_id, date)`` constraint plus ``INSERT OR IGNORE`` keeps
    creation idempotent even with several writers on the same vault.
    """

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def _fetch(self, query: str, params: tuple) -> list[Completion]:
        rows = self.connection.execute(query, params).fetchall()
        return [Completion(**row_to_dict(row)) for row in rows]

    async def list_all(self) -> list[Completion]:
        return self._fetch("SELECT * FROM completions ORDER BY date ASC, rowid ASC", ())

    async def get(self, completion_id: str) -> Completion | None:
        found = self._fetch("SELECT * FROM completions WHERE id = ?", (completion_id,))
        return found[0] if found else None

    async def list_for_task(self, task_id: str) -> list[Completion]:
        return self._fetch(
            "SELECT * FROM completions WHERE task_id = ? ORDER BY date ASC",
            (task_id,),
        )

    async def list_for_date(self, on: date) -> list[Completion]:
        return self._fetch(
            "SELECT * FROM completions WHERE date = ? ORDER BY rowid ASC",
            (date_to_text(on),),
        )

    async def create(self, completion_data: CompletionCreate) -> Completion:
        day = date_to_text(completion_data.date)

        DatabaseConnection.execute_with_retry(
            self.connection,
            """INSERT OR IGNORE INTO completions (id, task_id, date, completed_at)
            VALUES (?, ?, ?, ?)""",
            (generate_uuid(), completion_data.task_id, day, now_iso()),
        )
        self.connection.commit()

        return self._fetch(
            "SELECT * FROM completions WHERE task_id = ? AND date = ?",
            (completion_data.task_id, day),
        )[0]

    async def delete(self, completion_id: str) -> bool:
        cursor = DatabaseConnection.execute_with_retry(
            self.connection, "DELETE FROM completions WHERE id = ?", (completion_id,)
        )
        self.connection.commit()
        return cursor.rowcount > 0

    async def delete_for_task_and_date(self, task_id: str, on: date) -> bool:
        cursor = DatabaseConnection.execute_with_retry(
            self.connection,
            "DELETE FROM completions WHERE task_id = ? AND date = ?",
            (task_id, date_to_text(on)),
        )
        self.connection.commit()
        return cursor.rowcount > 0
