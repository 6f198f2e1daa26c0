"""SQLite adapter module - Local vault storage implementation."""

from habitpro_cli.adapters.sqlite.achievement_repository import (
    SqliteAchievementRepository,
)
from habitpro_cli.adapters.sqlite.completion_repository import (
    SqliteCompletionRepository,
)
from habitpro_cli.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "SqliteTaskRepository",
    "SqliteCompletionRepository",
    "SqliteAchievementRepository",
]
