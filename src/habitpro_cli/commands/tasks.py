"""Habit management commands."""

from datetime import date
from typing import Annotated

import typer

from habitpro_cli.models import TaskWithCompletion
from habitpro_cli.services.achievement_service import latest_milestone
from habitpro_cli.services.context_manager import get_strategy_context
from habitpro_cli.services.streak_service import StreakService
from habitpro_cli.services.task_service import TaskService
from habitpro_cli.utils.exit_codes import ERROR_INVALID_ARGS
from habitpro_cli.utils.recurrence import FREQUENCIES, describe_recurrence, next_occurrence
from habitpro_cli.utils.task_helpers import output_settings, resolve_task_id
from habitpro_cli.utils.ui.console import get_console
from habitpro_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Habit management commands")
console = get_console()


def _check_frequency(frequency: str | None) -> None:
    if frequency is not None and frequency not in FREQUENCIES:
        raise AppError(
            f"Invalid frequency '{frequency}'. Choose from: {', '.join(FREQUENCIES)}",
            exit_code=ERROR_INVALID_ARGS,
        )


@app.command("add")
@command_wrapper
async def add_task(
    title: Annotated[str, typer.Argument(help="Habit title")],
    time: Annotated[str, typer.Option("--time", "-t", help="Time of day (HH:MM)")],
    frequency: Annotated[
        str, typer.Option("--frequency", "-f", help="daily, monthly or yearly")
    ] = "daily",
    day_of_month: Annotated[
        int | None, typer.Option("--day", help="Day of month (monthly habits)")
    ] = None,
    month_of_year: Annotated[
        int | None, typer.Option("--month", help="Month (yearly habits)")
    ] = None,
    day_of_year: Annotated[
        int | None,
        typer.Option("--month-day", help="Day within --month (yearly habits)"),
    ] = None,
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="Description")
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """Create a new habit."""
    _check_frequency(frequency)
    output, _ = output_settings(output)

    task_service = TaskService(get_strategy_context().task_repository)
    task = await task_service.add_task(
        title,
        time=time,
        frequency=frequency,
        description=description,
        day_of_month=day_of_month,
        month_of_year=month_of_year,
        day_of_year=day_of_year,
    )

    format_success(f"Created habit: {task.title} ({describe_recurrence(task)})")
    console.print(f"[dim]ID: {task.id}[/dim]")
    if output not in ("pretty", "table"):
        format_output(task.model_dump(mode="json"), output)


@app.command("list")
@command_wrapper
async def list_tasks(
    all_tasks: Annotated[
        bool, typer.Option("--all", "-a", help="Include paused habits")
    ] = False,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
    compact: Annotated[bool, typer.Option("--compact", help="Compact output")] = False,
) -> None:
    """List habits."""
    output, compact = output_settings(output, compact)

    task_service = TaskService(get_strategy_context().task_repository)
    tasks = await task_service.list_tasks(include_inactive=all_tasks)
    format_output([task.model_dump(mode="json") for task in tasks], output, compact)


@app.command("show")
@command_wrapper
async def show_task(
    task_id: Annotated[str, typer.Argument(help="Habit ID or suffix")],
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """Show a habit with its streak, next occurrence and milestones."""
    output, _ = output_settings(output)

    strategy = get_strategy_context()
    task_service = TaskService(strategy.task_repository)
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.get_task(resolved_id)

    today = date.today()
    streak = await StreakService(
        strategy.task_repository, strategy.completion_repository
    ).streak(resolved_id, today)
    achievements = await strategy.achievement_repository.list_for_task(resolved_id)
    completions = await strategy.completion_repository.list_for_task(resolved_id)

    detail = TaskWithCompletion(
        **task.model_dump(),
        is_completed=any(c.date == today for c in completions),
        streak=streak,
        next_occurrence=next_occurrence(task, today),
        achievements=achievements,
        latest_milestone=latest_milestone(achievements),
    )
    format_output(detail.model_dump(mode="json"), output)


@app.command("edit")
@command_wrapper
async def edit_task(
    task_id: Annotated[str, typer.Argument(help="Habit ID or suffix")],
    title: Annotated[str | None, typer.Option("--title", help="New title")] = None,
    time: Annotated[
        str | None, typer.Option("--time", "-t", help="New time (HH:MM)")
    ] = None,
    frequency: Annotated[
        str | None, typer.Option("--frequency", "-f", help="daily, monthly or yearly")
    ] = None,
    day_of_month: Annotated[
        int | None, typer.Option("--day", help="Day of month (monthly habits)")
    ] = None,
    month_of_year: Annotated[
        int | None, typer.Option("--month", help="Month (yearly habits)")
    ] = None,
    day_of_year: Annotated[
        int | None,
        typer.Option("--month-day", help="Day within --month (yearly habits)"),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option("--description", "-d", help='New description ("" clears it)'),
    ] = None,
) -> None:
    """Edit a habit. Unset options keep their current value."""
    _check_frequency(frequency)

    task_service = TaskService(get_strategy_context().task_repository)
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.edit_task(
        resolved_id,
        title=title,
        time=time,
        frequency=frequency,
        day_of_month=day_of_month,
        month_of_year=month_of_year,
        day_of_year=day_of_year,
        description=description,
    )
    format_success(f"Updated habit: {task.title} ({describe_recurrence(task)})")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: Annotated[str, typer.Argument(help="Habit ID or suffix")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Delete a habit together with its completions and achievements."""
    task_service = TaskService(get_strategy_context().task_repository)
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.get_task(resolved_id)

    if not yes and not typer.confirm(
        f"Delete '{task.title}' and its whole history?", default=False
    ):
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(0)

    await task_service.delete_task(resolved_id)
    format_success(f"Deleted habit: {task.title}")


@app.command("pause")
@command_wrapper
async def pause_task(
    task_id: Annotated[str, typer.Argument(help="Habit ID or suffix")],
) -> None:
    """Pause a habit: it stops appearing in daily summaries and stats."""
    task_service = TaskService(get_strategy_context().task_repository)
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.set_active(resolved_id, False)
    format_success(f"Paused habit: {task.title}")


@app.command("resume")
@command_wrapper
async def resume_task(
    task_id: Annotated[str, typer.Argument(help="Habit ID or suffix")],
) -> None:
    """Resume a paused habit."""
    task_service = TaskService(get_strategy_context().task_repository)
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.set_active(resolved_id, True)
    format_success(f"Resumed habit: {task.title}")
