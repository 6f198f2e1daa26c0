"""Completion history commands."""

from typing import Annotated

import typer

from habitpro_cli.models import parse_iso_date
from habitpro_cli.services.achievement_service import AchievementService
from habitpro_cli.services.completion_service import CompletionService
from habitpro_cli.services.context_manager import get_strategy_context
from habitpro_cli.services.task_service import TaskService
from habitpro_cli.utils.task_helpers import output_settings, resolve_task_id
from habitpro_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Completion history commands")


@app.command("list")
@command_wrapper
async def list_completions(
    task_id: Annotated[
        str | None, typer.Option("--task", help="Only this habit (ID or suffix)")
    ] = None,
    on: Annotated[
        str | None, typer.Option("--date", help="Only this date (YYYY-MM-DD)")
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """List recorded completions, newest first."""
    output, _ = output_settings(output)

    strategy = get_strategy_context()
    if task_id is not None:
        task_id = await resolve_task_id(TaskService(strategy.task_repository), task_id)

    service = CompletionService(
        strategy.task_repository,
        strategy.completion_repository,
        AchievementService(strategy.achievement_repository),
    )
    completions = await service.list_completions(
        task_id=task_id, on=parse_iso_date(on) if on else None
    )
    completions.sort(key=lambda c: (c.date, c.completed_at), reverse=True)
    format_output([c.model_dump(mode="json") for c in completions], output)


@app.command("delete")
@command_wrapper
async def delete_completion(
    completion_id: Annotated[str, typer.Argument(help="Completion ID")],
) -> None:
    """Delete a completion by ID."""
    strategy = get_strategy_context()
    service = CompletionService(
        strategy.task_repository,
        strategy.completion_repository,
        AchievementService(strategy.achievement_repository),
    )
    await service.delete(completion_id)
    format_success(f"Deleted completion {completion_id}")
