"""Daily summaries and monthly statistics.

Both aggregations are read-only: they fetch a snapshot from the repositories,
evaluate the recurrence rules per date and fold the results into the view
models in ``habitpro_cli.models.views``.
"""

from __future__ import annotations

import asyncio
import calendar
from collections.abc import Iterable
from datetime import date

from habitpro_cli.models import (
    Completion,
    DailyCompletion,
    DailySummary,
    MonthlyStats,
    Task,
    TaskWithCompletion,
)
from habitpro_cli.repositories import (
    AchievementRepository,
    CompletionRepository,
    TaskRepository,
)
from habitpro_cli.services.achievement_service import latest_milestone
from habitpro_cli.services.streak_service import calculate_streak
from habitpro_cli.utils.logger import get_logger
from habitpro_cli.utils.recurrence import is_due, iter_month, next_occurrence


def completion_rate(completed: int, due: int) -> float:
    """Percentage of due occurrences completed; 0 when nothing is due."""
    if due <= 0:
        return 0.0
    return completed / due * 100


def perfect_day_streak(days: Iterable[DailyCompletion]) -> int:
    """Longest run of consecutive perfect days.

    A day extends the run when something was due and everything due was
    completed. Any other day, including one with nothing due, resets it.
    """
    best = 0
    current = 0
    for day in days:
        if day.total > 0 and day.count == day.total:
            current += 1
            best = max(best, current)
        else:
            current = 0
    return best


def heatmap_intensity(count: int, total: int) -> int:
    """Bucket a day's completion rate into 0-5 for the calendar heatmap."""
    if total == 0:
        return 0
    percentage = count / total * 100
    if percentage == 0:
        return 0
    if percentage < 25:
        return 1
    if percentage < 50:
        return 2
    if percentage < 75:
        return 3
    if percentage < 100:
        return 4
    return 5


class SummaryService:
    """Builds daily summaries and monthly statistics."""

    def __init__(
        self,
        task_repository: TaskRepository,
        completion_repository: CompletionRepository,
        achievement_repository: AchievementRepository,
    ):
        self.task_repository = task_repository
        self.completion_repository = completion_repository
        self.achievement_repository = achievement_repository

    async def _enrich(
        self, task: Task, on: date, completions_on_date: list[Completion]
    ) -> TaskWithCompletion:
        completion = next(
            (c for c in completions_on_date if c.task_id == task.id), None
        )
        task_completions, achievements = await asyncio.gather(
            self.completion_repository.list_for_task(task.id),
            self.achievement_repository.list_for_task(task.id),
        )

        return TaskWithCompletion(
            **task.model_dump(),
            is_completed=completion is not None,
            completion_id=completion.id if completion else None,
            streak=calculate_streak(task, (c.date for c in task_completions), on),
            next_occurrence=next_occurrence(task, on),
            achievements=achievements,
            latest_milestone=latest_milestone(achievements),
        )

    async def daily_summary(self, on: date) -> DailySummary:
        """Summarize the active tasks due on a date.

        Args:
            on: Reference date

        Returns:
            DailySummary with one TaskWithCompletion per due task
        """
        tasks, completions = await asyncio.gather(
            self.task_repository.list_all(),
            self.completion_repository.list_for_date(on),
        )
        due_tasks = [task for task in tasks if is_due(task, on)]

        enriched = await asyncio.gather(
            *(self._enrich(task, on, completions) for task in due_tasks)
        )
        completed = sum(1 for t in enriched if t.is_completed)

        get_logger().debug(
            "daily summary %s: %d/%d completed", on.isoformat(), completed, len(enriched)
        )
        return DailySummary(
            date=on,
            total_tasks=len(enriched),
            completed_tasks=completed,
            completion_rate=completion_rate(completed, len(enriched)),
            tasks=list(enriched),
        )

    async def monthly_stats(self, year: int, month: int) -> MonthlyStats:
        """Build completion statistics for every day of a month.

        The caller is responsible for passing a valid month (1-12).

        Args:
            year: Calendar year
            month: Month number

        Returns:
            MonthlyStats with one DailyCompletion per calendar day
        """
        tasks = await self.task_repository.list_all()
        days = list(iter_month(year, month))
        completions_per_day = await asyncio.gather(
            *(self.completion_repository.list_for_date(day) for day in days)
        )

        series: list[DailyCompletion] = []
        for day, completions in zip(days, completions_per_day, strict=True):
            due_ids = {task.id for task in tasks if is_due(task, day)}
            done = {c.task_id for c in completions if c.task_id in due_ids}
            series.append(DailyCompletion(date=day, count=len(done), total=len(due_ids)))

        total_due = sum(day.total for day in series)
        completed_count = sum(day.count for day in series)

        get_logger().debug(
            "monthly stats %d-%02d: %d/%d completed", year, month, completed_count, total_due
        )
        return MonthlyStats(
            month=calendar.month_name[month],
            month_number=month,
            year=year,
            total_tasks=len(tasks),
            total_due=total_due,
            completed_count=completed_count,
            completion_rate=completion_rate(completed_count, total_due),
            streak_days=perfect_day_streak(series),
            perfect_days=sum(1 for day in series if day.is_perfect),
            daily_completions=series,
        )
