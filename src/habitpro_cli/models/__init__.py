"""HabitPro CLI domain models.

This package contains Pydantic models for the habit tracker's records
(tasks, completions, achievements), the derived read models produced by the
summary services, and the application configuration.
"""

from .config_models import AppConfig
from .core import (
    Achievement,
    AchievementCreate,
    Completion,
    CompletionCreate,
    Frequency,
    MilestoneType,
    Task,
    TaskCreate,
    parse_iso_date,
)
from .exceptions import AmbiguousIdError, HabitProError, NotFoundError
from .views import (
    CompletionResult,
    DailyCompletion,
    DailySummary,
    MonthlyStats,
    TaskWithCompletion,
)

__all__ = [
    # Records
    "Task",
    "TaskCreate",
    "Completion",
    "CompletionCreate",
    "Achievement",
    "AchievementCreate",
    "Frequency",
    "MilestoneType",
    "parse_iso_date",
    # Read models
    "TaskWithCompletion",
    "DailySummary",
    "DailyCompletion",
    "MonthlyStats",
    "CompletionResult",
    # Errors
    "HabitProError",
    "NotFoundError",
    "AmbiguousIdError",
    # Config
    "AppConfig",
]
