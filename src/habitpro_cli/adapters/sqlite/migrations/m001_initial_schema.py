"""v1: tasks, completions and achievements with their indexes."""

import sqlite3

from habitpro_cli.adapters.sqlite import schema

from .runner import Migration


class CreateHabitTables(Migration):
    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Create tasks, completions and achievements"

    def up(self, connection: sqlite3.Connection) -> None:
        # Tasks first: the other two tables reference it
        for statement in (*schema.ALL_TABLES, *schema.ALL_INDEXES):
            connection.execute(statement)


ALL_MIGRATIONS = [CreateHabitTables()]
