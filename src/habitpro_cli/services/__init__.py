"""Services module for HabitPro CLI - Business logic layer."""

from .achievement_service import AchievementService
from .completion_service import CompletionService
from .streak_service import StreakService
from .summary_service import SummaryService
from .task_service import TaskService

__all__ = [
    "TaskService",
    "CompletionService",
    "StreakService",
    "AchievementService",
    "SummaryService",
]
