"""
Strategy Pattern: Storage Strategy Container

The storage backend is chosen once at startup by the context manager, which
wraps it in a StrategyContext. Services receive repositories from the
context and never branch on the backend themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from habitpro_cli.repositories.repository import (
    AchievementRepository,
    CompletionRepository,
    TaskRepository,
)


class StorageStrategy(ABC):
    """
    Abstract base class for storage strategies.

    A strategy encapsulates ALL repository implementations for a given
    storage backend (SQLite vault or process memory).
    """

    @abstractmethod
    def get_task_repository(self) -> TaskRepository:
        """Get task repository implementation for this strategy."""

    @abstractmethod
    def get_completion_repository(self) -> CompletionRepository:
        """Get completion repository implementation for this strategy."""

    @abstractmethod
    def get_achievement_repository(self) -> AchievementRepository:
        """Get achievement repository implementation for this strategy."""

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/debugging)."""


class LocalStrategy(StorageStrategy):
    """
    Local SQLite storage strategy.

    All repositories share one vault file.
    """

    def __init__(self, db_path: str):
        """
        Initialize local strategy.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path

        # Import here to avoid circular dependencies
        from habitpro_cli.adapters.sqlite import (
            SqliteAchievementRepository,
            SqliteCompletionRepository,
            SqliteTaskRepository,
        )

        self._task_repo = SqliteTaskRepository(db_path=db_path)
        self._completion_repo = SqliteCompletionRepository(db_path=db_path)
        self._achievement_repo = SqliteAchievementRepository(db_path=db_path)

    def get_task_repository(self) -> TaskRepository:
        return self._task_repo

    def get_completion_repository(self) -> CompletionRepository:
        return self._completion_repo

    def get_achievement_repository(self) -> AchievementRepository:
        return self._achievement_repo

    @property
    def storage_type(self) -> str:
        return "local"


class MemoryStrategy(StorageStrategy):
    """
    In-process storage strategy.

    All repositories share one MemoryStore; data is lost on exit.
    """

    def __init__(self, store=None):
        from habitpro_cli.adapters.memory import (
            MemoryAchievementRepository,
            MemoryCompletionRepository,
            MemoryStore,
            MemoryTaskRepository,
        )

        self.store = store or MemoryStore()
        self._task_repo = MemoryTaskRepository(self.store)
        self._completion_repo = MemoryCompletionRepository(self.store)
        self._achievement_repo = MemoryAchievementRepository(self.store)

    def get_task_repository(self) -> TaskRepository:
        return self._task_repo

    def get_completion_repository(self) -> CompletionRepository:
        return self._completion_repo

    def get_achievement_repository(self) -> AchievementRepository:
        return self._achievement_repo

    @property
    def storage_type(self) -> str:
        return "memory"


class StrategyContext:
    """
    Strategy context that provides access to all repositories.

    Usage:
        strategy = LocalStrategy(db_path="/path/to/habits.db")
        context = StrategyContext(strategy)

        task_repo = context.task_repository
        await task_repo.list_all()  # Works regardless of strategy
    """

    def __init__(self, strategy: StorageStrategy):
        self._strategy = strategy

    @property
    def task_repository(self) -> TaskRepository:
        """Get task repository from current strategy."""
        return self._strategy.get_task_repository()

    @property
    def completion_repository(self) -> CompletionRepository:
        """Get completion repository from current strategy."""
        return self._strategy.get_completion_repository()

    @property
    def achievement_repository(self) -> AchievementRepository:
        """Get achievement repository from current strategy."""
        return self._strategy.get_achievement_repository()

    @property
    def storage_type(self) -> str:
        """Get storage type (for logging/debugging only)."""
        return self._strategy.storage_type

    @property
    def strategy(self) -> StorageStrategy:
        return self._strategy
