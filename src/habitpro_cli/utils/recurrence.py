"""Recurrence rules for habits.

A habit recurs ``daily``, ``monthly`` on a fixed day of the month, or
``yearly`` on a fixed month and day. Days that do not exist in a given month
(the 31st in April, February 30th, February 29th outside leap years) simply
never fire: there is no rollover and no clamping.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterator
from datetime import date, timedelta

from habitpro_cli.models import Task

FREQUENCIES = ("daily", "monthly", "yearly")

# Forward scan horizon for next_occurrence.
MAX_LOOKAHEAD_DAYS = 365

_ONE_DAY = timedelta(days=1)


def is_due(task: Task, on: date) -> bool:
    """Return whether a task is due on a calendar date.

    Total and side-effect free: a task with an unknown frequency or missing
    recurrence parameters is never due.
    """
    if task.frequency == "daily":
        return True

    if task.frequency == "monthly" and task.day_of_month:
        return on.day == task.day_of_month

    if task.frequency == "yearly" and task.month_of_year and task.day_of_year:
        return on.month == task.month_of_year and on.day == task.day_of_year

    return False


def next_occurrence(
    task: Task, after: date, max_days: int = MAX_LOOKAHEAD_DAYS
) -> date | None:
    """Find the first due date strictly after ``after``.

    Args:
        task: Habit to scan for
        after: Reference date (excluded from the scan)
        max_days: Number of days to scan forward

    Returns:
        The next due date, or None if there is none within the horizon
    """
    current = after
    for _ in range(max_days):
        if current == date.max:
            return None
        current += _ONE_DAY
        if is_due(task, current):
            return current
    return None


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def iter_month(year: int, month: int) -> Iterator[date]:
    """Yield every calendar day of a month, leap-year aware."""
    for day in range(1, days_in_month(year, month) + 1):
        yield date(year, month, day)


def describe_recurrence(task: Task) -> str:
    """Human-readable description of a task's recurrence.

    Examples: "Daily", "Monthly on day 15", "Yearly on June 6".
    """
    if task.frequency == "daily":
        return "Daily"
    if task.frequency == "monthly" and task.day_of_month:
        return f"Monthly on day {task.day_of_month}"
    if task.frequency == "yearly" and task.month_of_year and task.day_of_year:
        return f"Yearly on {calendar.month_name[task.month_of_year]} {task.day_of_year}"
    return f"{task.frequency.capitalize()} (incomplete schedule)"
