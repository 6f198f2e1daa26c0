"""Repository interfaces for the HabitPro CLI.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- habitpro_cli.adapters.sqlite (local vault)
- habitpro_cli.adapters.memory (in-process store)
"""

from .repository import (
    AchievementRepository,
    CompletionRepository,
    TaskRepository,
)

__all__ = [
    "TaskRepository",
    "CompletionRepository",
    "AchievementRepository",
]
