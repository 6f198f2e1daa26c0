"""Streak milestone awards."""

from __future__ import annotations

from habitpro_cli.models import Achievement, AchievementCreate
from habitpro_cli.repositories import AchievementRepository
from habitpro_cli.utils.logger import get_logger

# (threshold, achievement type), ascending
MILESTONES: tuple[tuple[int, str], ...] = (
    (7, "7-day"),
    (30, "30-day"),
    (100, "100-day"),
)

MILESTONE_LABELS = {
    "7-day": "7 Day Streak",
    "30-day": "30 Day Streak",
    "100-day": "100 Day Streak!",
}

MILESTONE_ICONS = {
    "7-day": "⭐",
    "30-day": "🏅",
    "100-day": "🏆",
}


def latest_milestone(achievements: list[Achievement]) -> Achievement | None:
    """Pick the achievement earned at the highest streak count.

    Ties keep the earliest in list order.
    """
    if not achievements:
        return None
    return sorted(achievements, key=lambda a: a.streak_count, reverse=True)[0]


class AchievementService:
    """Awards streak milestones.

    Each milestone is awarded at most once per task. A streak that resets
    and climbs past the same threshold again earns nothing new.
    """

    def __init__(self, achievement_repository: AchievementRepository):
        self.repository = achievement_repository

    async def list_achievements(self, task_id: str | None = None) -> list[Achievement]:
        if task_id is None:
            return await self.repository.list_all()
        return await self.repository.list_for_task(task_id)

    async def check_and_award(
        self, task_id: str, current_streak: int
    ) -> list[Achievement]:
        """Award every unearned milestone the streak has reached.

        Args:
            task_id: Task that was just completed
            current_streak: Freshly computed streak for the task

        Returns:
            Newly created achievements, in ascending threshold order
        """
        earned = {a.type for a in await self.repository.list_for_task(task_id)}
        awarded: list[Achievement] = []

        for threshold, milestone_type in MILESTONES:
            if milestone_type in earned or current_streak < threshold:
                continue
            achievement = await self.repository.create(
                AchievementCreate(
                    task_id=task_id,
                    type=milestone_type,
                    streak_count=current_streak,
                )
            )
            awarded.append(achievement)
            get_logger().info(
                "milestone %s awarded to task %s (streak %d)",
                milestone_type,
                task_id,
                current_streak,
            )

        return awarded

    async def delete_achievement(self, achievement_id: str) -> bool:
        return await self.repository.delete(achievement_id)
