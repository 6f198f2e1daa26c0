"""Adapters module - Repository implementations for different storage backends.

This package contains concrete implementations (adapters) for the repository interfaces:
- sqlite: Local SQLite vault storage
- memory: In-process storage for tests and throwaway sessions
"""

from .memory import (
    MemoryAchievementRepository,
    MemoryCompletionRepository,
    MemoryStore,
    MemoryTaskRepository,
)
from .sqlite import (
    SqliteAchievementRepository,
    SqliteCompletionRepository,
    SqliteTaskRepository,
)

__all__ = [
    # SQLite adapters
    "SqliteTaskRepository",
    "SqliteCompletionRepository",
    "SqliteAchievementRepository",
    # In-memory adapters
    "MemoryStore",
    "MemoryTaskRepository",
    "MemoryCompletionRepository",
    "MemoryAchievementRepository",
]
