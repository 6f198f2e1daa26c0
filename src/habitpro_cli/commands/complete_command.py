"""Commands 'complete' and 'uncomplete' of habitpro-cli"""

from typing import Annotated

import typer
from rich.markup import escape

from habitpro_cli.services.achievement_service import (
    MILESTONE_ICONS,
    MILESTONE_LABELS,
    AchievementService,
)
from habitpro_cli.services.completion_service import CompletionService
from habitpro_cli.services.context_manager import get_strategy_context
from habitpro_cli.services.task_service import TaskService
from habitpro_cli.utils.task_helpers import (
    output_settings,
    parse_date_option,
    resolve_task_id,
)
from habitpro_cli.utils.ui.console import get_console
from habitpro_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


def _completion_service(strategy) -> CompletionService:
    return CompletionService(
        strategy.task_repository,
        strategy.completion_repository,
        AchievementService(strategy.achievement_repository),
    )


@app.command("complete")
@command_wrapper
async def complete_command(
    task_id: Annotated[str, typer.Argument(help="Habit ID or suffix")],
    on: Annotated[
        str | None,
        typer.Option("--date", help="Completion date (YYYY-MM-DD, default today)"),
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """Mark a habit as done for a day."""
    output, _ = output_settings(output)
    completion_date = parse_date_option(on)

    strategy = get_strategy_context()
    task_service = TaskService(strategy.task_repository)
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.get_task(resolved_id)

    result = await _completion_service(strategy).complete(resolved_id, completion_date)

    if output not in ("pretty", "table"):
        format_output(result.model_dump(mode="json"), output)
        return

    title = task.title if len(task.title) <= 60 else task.title[:57] + "..."
    format_success(f"✓ Completed: {title} ({completion_date.isoformat()})")
    if result.streak:
        console.print(f"[orange1]🔥 Streak: {result.streak}[/orange1]")
    for achievement in result.new_achievements:
        console.print(
            f"{MILESTONE_ICONS[achievement.type]} [bold magenta]Milestone unlocked: "
            f"{MILESTONE_LABELS[achievement.type]}[/bold magenta]"
        )
    console.print(f"[dim]To undo: habitpro uncomplete {escape(task_id)} --date {completion_date}[/dim]")


@app.command("uncomplete")
@command_wrapper
async def uncomplete_command(
    task_id: Annotated[str, typer.Argument(help="Habit ID or suffix")],
    on: Annotated[
        str | None,
        typer.Option("--date", help="Completion date (YYYY-MM-DD, default today)"),
    ] = None,
) -> None:
    """Remove a habit's completion for a day."""
    completion_date = parse_date_option(on)

    strategy = get_strategy_context()
    resolved_id = await resolve_task_id(TaskService(strategy.task_repository), task_id)
    await _completion_service(strategy).uncomplete(resolved_id, completion_date)
    format_success(f"Completion removed for {completion_date.isoformat()}")
