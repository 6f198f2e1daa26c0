"""Unit tests for streak calculation."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from habitpro_cli.models import CompletionCreate
from habitpro_cli.services.streak_service import (
    MAX_DUE_GAP_DAYS,
    MAX_STREAK_CHECKS,
    StreakService,
    calculate_streak,
)


def _days_back(end: date, count: int) -> list[date]:
    return [end - timedelta(days=i) for i in range(count)]


class TestCalculateStreak:
    def test_five_consecutive_daily_completions(self, task_factory):
        task = task_factory(frequency="daily")
        ref = date(2024, 5, 5)
        assert calculate_streak(task, _days_back(ref, 5), ref) == 5

    def test_gap_ends_streak(self, task_factory):
        task = task_factory(frequency="daily")
        ref = date(2024, 5, 10)
        completed = [ref, ref - timedelta(days=1), ref - timedelta(days=3)]
        assert calculate_streak(task, completed, ref) == 2

    def test_reference_not_completed_is_zero(self, task_factory):
        task = task_factory(frequency="daily")
        ref = date(2024, 5, 10)
        assert calculate_streak(task, _days_back(ref - timedelta(days=1), 4), ref) == 0

    def test_monthly_counts_months_not_days(self, task_factory):
        task = task_factory(frequency="monthly", day_of_month=15)
        completed = [
            date(2024, 1, 15),
            date(2024, 3, 15),
            date(2024, 4, 15),
            date(2024, 5, 15),
        ]
        assert calculate_streak(task, completed, date(2024, 5, 20)) == 3

    def test_non_due_reference_walks_back_to_last_occurrence(self, task_factory):
        task = task_factory(frequency="yearly", month_of_year=6, day_of_year=6)
        completed = [date(2023, 6, 6), date(2024, 6, 6)]
        assert calculate_streak(task, completed, date(2024, 12, 1)) == 2

    def test_streak_is_capped(self, task_factory):
        task = task_factory(frequency="daily")
        ref = date(2024, 12, 31)
        completed = _days_back(ref, MAX_STREAK_CHECKS + 50)
        assert calculate_streak(task, completed, ref) == MAX_STREAK_CHECKS

    def test_custom_cap(self, task_factory):
        task = task_factory(frequency="daily")
        ref = date(2024, 12, 31)
        assert calculate_streak(task, _days_back(ref, 20), ref, max_checks=10) == 10

    def test_never_due_task_terminates_with_zero(self, task_factory):
        task = task_factory(frequency="monthly")  # no day_of_month
        assert calculate_streak(task, [date(2024, 1, 1)], date(2024, 1, 1)) == 0

    def test_walk_stops_at_date_min(self, task_factory):
        task = task_factory(frequency="daily")
        completed = _days_back(date(1, 1, 3), 3)
        assert calculate_streak(task, completed, date(1, 1, 3)) == 3

    def test_feb_29_streak_spans_leap_years(self, task_factory):
        task = task_factory(frequency="yearly", month_of_year=2, day_of_year=29)
        completed = [date(2016, 2, 29), date(2020, 2, 29), date(2024, 2, 29)]
        assert calculate_streak(task, completed, date(2024, 2, 29)) == 3

    def test_feb_29_streak_spans_skipped_century_leap_year(self, task_factory):
        # 2100 is not a leap year: eight years between occurrences
        task = task_factory(frequency="yearly", month_of_year=2, day_of_year=29)
        completed = [date(2096, 2, 29), date(2104, 2, 29)]
        gap = (date(2104, 2, 29) - date(2096, 2, 29)).days - 1

        assert gap < MAX_DUE_GAP_DAYS
        assert calculate_streak(task, completed, date(2104, 2, 29)) == 2


class TestStreakService:
    @pytest.mark.asyncio
    async def test_unknown_task_is_zero(self, task_repo, completion_repo):
        service = StreakService(task_repo, completion_repo)
        assert await service.streak("missing", date(2024, 1, 1)) == 0

    @pytest.mark.asyncio
    async def test_streak_from_stored_completions(
        self, task_repo, completion_repo, store, task_factory
    ):
        task = task_factory()
        store.tasks[task.id] = task
        ref = date(2024, 5, 5)
        for day in _days_back(ref, 4):
            await completion_repo.create(CompletionCreate(task_id=task.id, date=day))

        service = StreakService(task_repo, completion_repo)
        assert await service.streak(task.id, ref) == 4
