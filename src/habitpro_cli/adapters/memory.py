"""In-memory repository implementations.

Records live in plain dicts owned by a shared ``MemoryStore``, so the three
repositories see one consistent dataset. Nothing survives the process; this
backend is meant for tests and throwaway sessions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from habitpro_cli.adapters.sqlite.utils import generate_uuid
from habitpro_cli.models import (
    Achievement,
    AchievementCreate,
    Completion,
    CompletionCreate,
    Task,
    TaskCreate,
)
from habitpro_cli.repositories import (
    AchievementRepository,
    CompletionRepository,
    TaskRepository,
)


@dataclass
class MemoryStore:
    """Shared backing dicts, keyed by record ID in insertion order."""

    tasks: dict[str, Task] = field(default_factory=dict)
    completions: dict[str, Completion] = field(default_factory=dict)
    achievements: dict[str, Achievement] = field(default_factory=dict)


class MemoryTaskRepository(TaskRepository):
    """In-memory implementation of task repository."""

    def __init__(self, store: MemoryStore | None = None):
        self.store = store or MemoryStore()

    async def list_all(self, include_inactive: bool = False) -> list[Task]:
        return [
            task
            for task in self.store.tasks.values()
            if include_inactive or task.is_active
        ]

    async def get(self, task_id: str) -> Task | None:
        return self.store.tasks.get(task_id)

    async def add(self, task_data: TaskCreate) -> Task:
        task = Task(
            id=generate_uuid(),
            created_at=datetime.now(UTC),
            **task_data.model_dump(),
        )
        self.store.tasks[task.id] = task
        return task

    async def update(self, task_id: str, task_data: TaskCreate) -> Task | None:
        existing = self.store.tasks.get(task_id)
        if existing is None:
            return None
        task = Task(
            id=existing.id,
            created_at=existing.created_at,
            **task_data.model_dump(),
        )
        self.store.tasks[task_id] = task
        return task

    async def delete(self, task_id: str) -> bool:
        if self.store.tasks.pop(task_id, None) is None:
            return False
        self.store.completions = {
            cid: c for cid, c in self.store.completions.items() if c.task_id != task_id
        }
        self.store.achievements = {
            aid: a for aid, a in self.store.achievements.items() if a.task_id != task_id
        }
        return True


class MemoryCompletionRepository(CompletionRepository):
    """In-memory implementation of completion repository."""

    def __init__(self, store: MemoryStore | None = None):
        self.store = store or MemoryStore()

    async def list_all(self) -> list[Completion]:
        return list(self.store.completions.values())

    async def get(self, completion_id: str) -> Completion | None:
        return self.store.completions.get(completion_id)

    async def list_for_task(self, task_id: str) -> list[Completion]:
        return [c for c in self.store.completions.values() if c.task_id == task_id]

    async def list_for_date(self, on: date) -> list[Completion]:
        return [c for c in self.store.completions.values() if c.date == on]

    async def create(self, completion_data: CompletionCreate) -> Completion:
        for existing in self.store.completions.values():
            if (
                existing.task_id == completion_data.task_id
                and existing.date == completion_data.date
            ):
                return existing

        completion = Completion(
            id=generate_uuid(),
            task_id=completion_data.task_id,
            date=completion_data.date,
            completed_at=datetime.now(UTC),
        )
        self.store.completions[completion.id] = completion
        return completion

    async def delete(self, completion_id: str) -> bool:
        return self.store.completions.pop(completion_id, None) is not None

    async def delete_for_task_and_date(self, task_id: str, on: date) -> bool:
        for completion in list(self.store.completions.values()):
            if completion.task_id == task_id and completion.date == on:
                del self.store.completions[completion.id]
                return True
        return False


class MemoryAchievementRepository(AchievementRepository):
    """In-memory implementation of achievement repository."""

    def __init__(self, store: MemoryStore | None = None):
        self.store = store or MemoryStore()

    async def list_all(self) -> list[Achievement]:
        return list(self.store.achievements.values())

    async def list_for_task(self, task_id: str) -> list[Achievement]:
        return [a for a in self.store.achievements.values() if a.task_id == task_id]

    async def create(self, achievement_data: AchievementCreate) -> Achievement:
        for existing in self.store.achievements.values():
            if (
                existing.task_id == achievement_data.task_id
                and existing.type == achievement_data.type
            ):
                return existing

        achievement = Achievement(
            id=generate_uuid(),
            earned_at=datetime.now(UTC),
            **achievement_data.model_dump(),
        )
        self.store.achievements[achievement.id] = achievement
        return achievement

    async def delete(self, achievement_id: str) -> bool:
        return self.store.achievements.pop(achievement_id, None) is not None
