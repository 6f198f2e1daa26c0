"""Repository abstraction layer for HabitPro CLI.

This module defines the abstract base classes (interfaces) for the storage
collaborator, following the hexagonal architecture (Ports & Adapters) pattern.

The recurrence and streak engine only ever talks to these interfaces, so the
local SQLite vault and the in-memory store are interchangeable adapters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from habitpro_cli.models import (
    Achievement,
    AchievementCreate,
    Completion,
    CompletionCreate,
    Task,
    TaskCreate,
)


class TaskRepository(ABC):
    """Abstract base class for task persistence operations."""

    @abstractmethod
    async def list_all(self, include_inactive: bool = False) -> list[Task]:
        """List tasks.

        Args:
            include_inactive: Also return paused (inactive) tasks

        Returns:
            List of Task objects, oldest first

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, task_id: str) -> Task | None:
        """Get a specific task by ID.

        Args:
            task_id: Unique identifier for the task

        Returns:
            Task object, or None if it does not exist

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task.

        Args:
            task_data: TaskCreate object with task details

        Returns:
            Created Task object with generated ID and creation timestamp

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, task_id: str, task_data: TaskCreate) -> Task | None:
        """Replace every field of a task except its ID and creation timestamp.

        Args:
            task_id: Unique identifier for the task
            task_data: TaskCreate object with the new field values

        Returns:
            Updated Task object, or None if the task does not exist

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Delete a task together with its completions and achievements.

        Args:
            task_id: Unique identifier for the task

        Returns:
            True if a task was deleted

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )


class CompletionRepository(ABC):
    """Abstract base class for completion persistence operations.

    Implementations must keep at most one completion per (task, date) pair.
    """

    @abstractmethod
    async def list_all(self) -> list[Completion]:
        """List every completion."""
        raise NotImplementedError(
            "CompletionRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, completion_id: str) -> Completion | None:
        """Get a completion by ID, or None if it does not exist."""
        raise NotImplementedError(
            "CompletionRepository.get() must be implemented by adapter"
        )

    @abstractmethod
    async def list_for_task(self, task_id: str) -> list[Completion]:
        """List completions recorded for a task."""
        raise NotImplementedError(
            "CompletionRepository.list_for_task() must be implemented by adapter"
        )

    @abstractmethod
    async def list_for_date(self, on: date) -> list[Completion]:
        """List completions recorded on a calendar date."""
        raise NotImplementedError(
            "CompletionRepository.list_for_date() must be implemented by adapter"
        )

    @abstractmethod
    async def create(self, completion_data: CompletionCreate) -> Completion:
        """Record a completion.

        Idempotent: if a completion already exists for the same task and
        date, that existing record is returned and nothing is written.

        Args:
            completion_data: CompletionCreate object

        Returns:
            The new or pre-existing Completion

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "CompletionRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, completion_id: str) -> bool:
        """Delete a completion by ID. Returns True if one was deleted."""
        raise NotImplementedError(
            "CompletionRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_for_task_and_date(self, task_id: str, on: date) -> bool:
        """Delete the completion for a (task, date) pair. Returns True if one was deleted."""
        raise NotImplementedError(
            "CompletionRepository.delete_for_task_and_date() must be implemented by adapter"
        )


class AchievementRepository(ABC):
    """Abstract base class for achievement persistence operations."""

    @abstractmethod
    async def list_all(self) -> list[Achievement]:
        """List every achievement."""
        raise NotImplementedError(
            "AchievementRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def list_for_task(self, task_id: str) -> list[Achievement]:
        """List achievements earned by a task, in the order they were earned."""
        raise NotImplementedError(
            "AchievementRepository.list_for_task() must be implemented by adapter"
        )

    @abstractmethod
    async def create(self, achievement_data: AchievementCreate) -> Achievement:
        """Record an achievement.

        Args:
            achievement_data: AchievementCreate object

        Returns:
            Created Achievement object with generated ID and timestamp

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "AchievementRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, achievement_id: str) -> bool:
        """Delete an achievement by ID. Returns True if one was deleted."""
        raise NotImplementedError(
            "AchievementRepository.delete() must be implemented by adapter"
        )
