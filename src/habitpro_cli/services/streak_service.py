"""Streak calculation.

A streak counts consecutive *scheduled* occurrences that were completed,
walking backward from a reference date. Days on which the habit is not due
are skipped, so a monthly habit's streak counts months, not calendar days.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from habitpro_cli.models import Task
from habitpro_cli.repositories import CompletionRepository, TaskRepository
from habitpro_cli.utils.logger import get_logger
from habitpro_cli.utils.recurrence import is_due

# Upper bound on due days checked per walk; the streak never exceeds this.
MAX_STREAK_CHECKS = 365

# Consecutive non-due days tolerated before the walk gives up. Longer than
# any real gap between occurrences (Feb 29 across a skipped century leap
# year), so it only stops walks for habits that are never due.
MAX_DUE_GAP_DAYS = 8 * 366

_ONE_DAY = timedelta(days=1)


def calculate_streak(
    task: Task,
    completed_dates: Iterable[date],
    reference: date,
    max_checks: int = MAX_STREAK_CHECKS,
    max_gap_days: int = MAX_DUE_GAP_DAYS,
) -> int:
    """Count consecutive completed due dates ending at ``reference``.

    The walk starts at ``reference`` and moves back one day at a time. Non-due
    days are skipped; the first due day without a completion ends the streak.
    Reaching ``max_checks`` due days returns the streak accumulated so far.

    Args:
        task: Habit whose recurrence decides which days are due
        completed_dates: Dates on which the habit was completed
        reference: Newest date to consider
        max_checks: Maximum number of due days to check
        max_gap_days: Maximum run of non-due days before giving up

    Returns:
        Streak length (0 or more)
    """
    done = set(completed_dates)
    streak = 0
    checks = 0
    gap = 0
    current = reference

    while checks < max_checks:
        if is_due(task, current):
            checks += 1
            gap = 0
            if current not in done:
                break
            streak += 1
        else:
            gap += 1
            if gap > max_gap_days:
                break

        if current == date.min:
            break
        current -= _ONE_DAY

    return streak


class StreakService:
    """Computes streaks for stored tasks."""

    def __init__(
        self,
        task_repository: TaskRepository,
        completion_repository: CompletionRepository,
    ):
        self.task_repository = task_repository
        self.completion_repository = completion_repository

    async def streak(self, task_id: str, reference: date) -> int:
        """Current streak of a stored task at ``reference``.

        Returns 0 for an unknown task ID, so a task deleted mid-request does
        not turn into an error.
        """
        task = await self.task_repository.get(task_id)
        if task is None:
            get_logger().debug("streak requested for missing task %s", task_id)
            return 0

        completions = await self.completion_repository.list_for_task(task_id)
        return calculate_streak(task, (c.date for c in completions), reference)
