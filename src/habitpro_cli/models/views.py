"""Derived read models.

These are computed fresh by the summary services on every read and are
never persisted.
"""

from __future__ import annotations

import datetime as dt
from datetime import date

from pydantic import BaseModel, Field

from .core import Achievement, Completion, Task


class TaskWithCompletion(Task):
    """A task enriched with its state on a reference date.

    Attributes:
        is_completed: Whether a completion exists on the reference date
        completion_id: ID of that completion, if any
        streak: Current streak ending at the reference date
        next_occurrence: Next due date after the reference date
        achievements: Milestones earned by the task
        latest_milestone: Earned milestone with the highest streak count
    """

    is_completed: bool = False
    completion_id: str | None = None
    streak: int = 0
    next_occurrence: date | None = None
    achievements: list[Achievement] = Field(default_factory=list)
    latest_milestone: Achievement | None = None


class DailySummary(BaseModel):
    date: dt.date
    total_tasks: int
    completed_tasks: int
    completion_rate: float
    tasks: list[TaskWithCompletion] = Field(default_factory=list)


class DailyCompletion(BaseModel):
    """Completed/due counts for one day of a month."""

    date: dt.date
    count: int
    total: int

    @property
    def is_perfect(self) -> bool:
        return self.total > 0 and self.count == self.total


class MonthlyStats(BaseModel):
    """Month-level completion statistics.

    Attributes:
        month: English month name (e.g. "February")
        month_number: Month number (1-12)
        year: Calendar year
        total_tasks: Number of active tasks
        total_due: Sum of due occurrences across the month
        completed_count: Sum of completed due occurrences
        completion_rate: completed_count / total_due * 100, 0 when nothing is due
        streak_days: Longest run of perfect days
        perfect_days: Number of perfect days
        daily_completions: One entry per calendar day
    """

    month: str
    month_number: int
    year: int
    total_tasks: int
    total_due: int
    completed_count: int
    completion_rate: float
    streak_days: int
    perfect_days: int
    daily_completions: list[DailyCompletion] = Field(default_factory=list)


class CompletionResult(BaseModel):
    """Outcome of recording a completion."""

    completion: Completion
    streak: int
    new_achievements: list[Achievement] = Field(default_factory=list)
