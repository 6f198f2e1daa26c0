"""Completion service - recording and removing habit completions.

Recording a completion recomputes the task's streak at the completion date
and hands it to the milestone evaluator.
"""

from __future__ import annotations

from datetime import date

from habitpro_cli.models import (
    Completion,
    CompletionCreate,
    CompletionResult,
    NotFoundError,
)
from habitpro_cli.repositories import CompletionRepository, TaskRepository
from habitpro_cli.services.achievement_service import AchievementService
from habitpro_cli.services.streak_service import StreakService
from habitpro_cli.utils.logger import get_logger


class CompletionService:
    """Service for completion business logic."""

    def __init__(
        self,
        task_repository: TaskRepository,
        completion_repository: CompletionRepository,
        achievement_service: AchievementService,
    ):
        self.task_repository = task_repository
        self.repository = completion_repository
        self.achievement_service = achievement_service
        self.streaks = StreakService(task_repository, completion_repository)

    async def complete(self, task_id: str, on: date) -> CompletionResult:
        """Mark a task as done on a date and award any milestones reached.

        Completing the same task twice on one date returns the existing
        completion.

        Args:
            task_id: Task to complete
            on: Calendar date of the completion

        Returns:
            CompletionResult with the completion, the fresh streak and any
            newly awarded achievements

        Raises:
            NotFoundError: If the task does not exist
        """
        if await self.task_repository.get(task_id) is None:
            raise NotFoundError("task", task_id)

        completion = await self.repository.create(
            CompletionCreate(task_id=task_id, date=on)
        )
        streak = await self.streaks.streak(task_id, on)
        awarded = await self.achievement_service.check_and_award(task_id, streak)

        get_logger().info(
            "completion recorded: task %s on %s (streak %d)",
            task_id,
            on.isoformat(),
            streak,
        )
        return CompletionResult(
            completion=completion, streak=streak, new_achievements=awarded
        )

    async def uncomplete(self, task_id: str, on: date) -> bool:
        """Remove the completion for a task on a date.

        Earned achievements are kept.

        Raises:
            NotFoundError: If there is no completion for the pair
        """
        if not await self.repository.delete_for_task_and_date(task_id, on):
            raise NotFoundError("completion", f"{task_id} on {on.isoformat()}")
        get_logger().info("completion removed: task %s on %s", task_id, on.isoformat())
        return True

    async def delete(self, completion_id: str) -> bool:
        """Delete a completion by ID.

        Raises:
            NotFoundError: If the completion does not exist
        """
        if not await self.repository.delete(completion_id):
            raise NotFoundError("completion", completion_id)
        get_logger().info("completion deleted: %s", completion_id)
        return True

    async def list_completions(
        self, *, task_id: str | None = None, on: date | None = None
    ) -> list[Completion]:
        """List completions, optionally filtered by task and/or date."""
        if task_id is not None:
            completions = await self.repository.list_for_task(task_id)
            if on is not None:
                completions = [c for c in completions if c.date == on]
            return completions
        if on is not None:
            return await self.repository.list_for_date(on)
        return await self.repository.list_all()
