"""Unit tests for CompletionService."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from habitpro_cli.models import NotFoundError
from habitpro_cli.services.achievement_service import AchievementService
from habitpro_cli.services.completion_service import CompletionService


@pytest.fixture()
def service(task_repo, completion_repo, achievement_repo):
    return CompletionService(
        task_repo, completion_repo, AchievementService(achievement_repo)
    )


@pytest.fixture()
def task(store, task_factory):
    task = task_factory("task-1")
    store.tasks[task.id] = task
    return task


@pytest.mark.asyncio
async def test_complete_unknown_task_raises(service):
    with pytest.raises(NotFoundError):
        await service.complete("missing", date(2024, 1, 1))


@pytest.mark.asyncio
async def test_complete_is_idempotent(service, completion_repo, task):
    first = await service.complete(task.id, date(2024, 1, 1))
    second = await service.complete(task.id, date(2024, 1, 1))

    assert first.completion.id == second.completion.id
    assert len(await completion_repo.list_all()) == 1


@pytest.mark.asyncio
async def test_complete_returns_streak_and_awards_milestone(service, task):
    start = date(2024, 1, 1)
    results = [await service.complete(task.id, start + timedelta(days=i)) for i in range(7)]

    assert [r.streak for r in results] == [1, 2, 3, 4, 5, 6, 7]
    assert results[5].new_achievements == []
    assert [a.type for a in results[6].new_achievements] == ["7-day"]


@pytest.mark.asyncio
async def test_backfilled_completion_uses_its_own_date(service, task):
    await service.complete(task.id, date(2024, 1, 10))
    result = await service.complete(task.id, date(2024, 1, 9))
    assert result.streak == 1


@pytest.mark.asyncio
async def test_uncomplete_keeps_achievements(service, achievement_repo, task):
    start = date(2024, 1, 1)
    for i in range(7):
        await service.complete(task.id, start + timedelta(days=i))

    await service.uncomplete(task.id, date(2024, 1, 7))

    assert await service.list_completions(task_id=task.id, on=date(2024, 1, 7)) == []
    assert len(await achievement_repo.list_for_task(task.id)) == 1


@pytest.mark.asyncio
async def test_uncomplete_missing_raises(service, task):
    with pytest.raises(NotFoundError):
        await service.uncomplete(task.id, date(2024, 1, 1))


@pytest.mark.asyncio
async def test_delete_by_id(service, task):
    result = await service.complete(task.id, date(2024, 1, 1))
    assert await service.delete(result.completion.id) is True
    with pytest.raises(NotFoundError):
        await service.delete(result.completion.id)


@pytest.mark.asyncio
async def test_list_completions_filters(service, store, task_factory, task):
    other = task_factory("task-2")
    store.tasks[other.id] = other
    await service.complete(task.id, date(2024, 1, 1))
    await service.complete(task.id, date(2024, 1, 2))
    await service.complete(other.id, date(2024, 1, 1))

    assert len(await service.list_completions()) == 3
    assert len(await service.list_completions(task_id=task.id)) == 2
    assert len(await service.list_completions(on=date(2024, 1, 1))) == 2
    assert len(await service.list_completions(task_id=other.id, on=date(2024, 1, 2))) == 0
