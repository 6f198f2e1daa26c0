"""Task service - Business logic for habit definitions.

This service layer sits between commands and repositories, providing
a clean API for creating, replacing, pausing and deleting habits.
"""

from __future__ import annotations

from habitpro_cli.models import NotFoundError, Task, TaskCreate
from habitpro_cli.repositories import TaskRepository
from habitpro_cli.utils.logger import get_logger


class TaskService:
    """Service for task business logic."""

    def __init__(self, task_repository: TaskRepository):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
        """
        self.repository = task_repository

    async def list_tasks(self, *, include_inactive: bool = False) -> list[Task]:
        return await self.repository.list_all(include_inactive=include_inactive)

    async def get_task(self, task_id: str) -> Task:
        """Get a task by ID.

        Raises:
            NotFoundError: If the task does not exist
        """
        task = await self.repository.get(task_id)
        if task is None:
            raise NotFoundError("task", task_id)
        return task

    async def add_task(
        self,
        title: str,
        *,
        time: str,
        frequency: str = "daily",
        description: str | None = None,
        day_of_month: int | None = None,
        month_of_year: int | None = None,
        day_of_year: int | None = None,
    ) -> Task:
        """Create a new habit.

        Args:
            title: Habit title (required)
            time: Scheduled time of day (HH:MM)
            frequency: "daily", "monthly" or "yearly"
            description: Optional description
            day_of_month: Required for monthly habits
            month_of_year: Required for yearly habits
            day_of_year: Required for yearly habits

        Returns:
            Created Task object

        Raises:
            pydantic.ValidationError: If the fields violate the recurrence rules
        """
        task_data = TaskCreate(
            title=title,
            description=description,
            time=time,
            frequency=frequency,
            day_of_month=day_of_month,
            month_of_year=month_of_year,
            day_of_year=day_of_year,
        )
        task = await self.repository.add(task_data)
        get_logger().info("task created: %s (%s)", task.id, task.frequency)
        return task

    async def update_task(self, task_id: str, task_data: TaskCreate) -> Task:
        """Replace every field of a habit except its ID and creation time.

        Raises:
            NotFoundError: If the task does not exist
        """
        task = await self.repository.update(task_id, task_data)
        if task is None:
            raise NotFoundError("task", task_id)
        get_logger().info("task updated: %s", task_id)
        return task

    async def edit_task(self, task_id: str, **changes: object) -> Task:
        """Apply a partial edit by merging it into a full replacement.

        ``None`` values are ignored, except that switching frequency clears
        recurrence parameters the new frequency does not use. Pass an empty
        description to remove it.

        Raises:
            NotFoundError: If the task does not exist
            pydantic.ValidationError: If the merged task is invalid
        """
        current = await self.get_task(task_id)
        merged = current.model_dump(exclude={"id", "created_at"})
        merged.update({k: v for k, v in changes.items() if v is not None})

        if merged["frequency"] != "monthly":
            merged["day_of_month"] = None
        if merged["frequency"] != "yearly":
            merged["month_of_year"] = None
            merged["day_of_year"] = None

        return await self.update_task(task_id, TaskCreate(**merged))

    async def set_active(self, task_id: str, active: bool) -> Task:
        """Pause (inactive) or resume (active) a habit."""
        return await self.edit_task(task_id, is_active=active)

    async def delete_task(self, task_id: str) -> bool:
        """Delete a habit with its completions and achievements.

        Raises:
            NotFoundError: If the task does not exist
        """
        if not await self.repository.delete(task_id):
            raise NotFoundError("task", task_id)
        get_logger().info("task deleted: %s", task_id)
        return True
