"""Streak milestone commands."""

from datetime import date
from typing import Annotated

import typer
from rich.markup import escape

from habitpro_cli.services.achievement_service import (
    MILESTONE_ICONS,
    MILESTONE_LABELS,
    MILESTONES,
    AchievementService,
)
from habitpro_cli.services.context_manager import get_strategy_context
from habitpro_cli.services.streak_service import StreakService
from habitpro_cli.services.task_service import TaskService
from habitpro_cli.utils.task_helpers import output_settings, resolve_task_id
from habitpro_cli.utils.ui.console import get_console
from habitpro_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(help="Streak milestones")


def render_progress_bar(value: float, max_value: float, width: int = 20) -> str:
    """Render a progress bar using block characters."""
    ratio = 0 if max_value == 0 else min(value / max_value, 1.0)
    filled = int(ratio * width)
    return "█" * filled + "░" * (width - filled)


@app.command("list")
@command_wrapper
async def list_achievements(
    task_id: Annotated[
        str | None, typer.Argument(help="Only this habit (ID or suffix)")
    ] = None,
    progress: Annotated[
        bool, typer.Option("--progress", help="Show progress toward the next milestone")
    ] = False,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """Show earned streak milestones."""
    output, _ = output_settings(output)

    strategy = get_strategy_context()
    task_service = TaskService(strategy.task_repository)
    if task_id is not None:
        task_id = await resolve_task_id(task_service, task_id)

    achievements = await AchievementService(
        strategy.achievement_repository
    ).list_achievements(task_id)

    if output != "pretty":
        format_output([a.model_dump(mode="json") for a in achievements], output)
        return

    if achievements:
        console.print("\n[bold cyan]🏆 Earned Milestones[/bold cyan]\n")
        format_output([a.model_dump(mode="json") for a in achievements], output)
    elif not progress:
        console.print(
            "[yellow]No milestones earned yet. Keep a streak going for 7 days![/yellow]"
        )
        console.print("\nTip: Use [cyan]--progress[/cyan] to see how close you are")
        return

    if not progress:
        return

    tasks = (
        [await task_service.get_task(task_id)]
        if task_id is not None
        else await task_service.list_tasks()
    )
    streaks = StreakService(strategy.task_repository, strategy.completion_repository)
    earned = {(a.task_id, a.type) for a in achievements}
    today = date.today()

    console.print("\n[bold cyan]📋 Next Milestones[/bold cyan]\n")
    for task in tasks:
        pending = [
            (threshold, kind)
            for threshold, kind in MILESTONES
            if (task.id, kind) not in earned
        ]
        if not pending:
            console.print(f"  🏆 [bold]{escape(task.title)}[/bold] [dim]all milestones earned[/dim]")
            continue

        threshold, kind = pending[0]
        current = await streaks.streak(task.id, today)
        console.print(
            f"  {MILESTONE_ICONS[kind]} [bold]{escape(task.title)}[/bold] "
            f"[dim]→ {MILESTONE_LABELS[kind]}[/dim]"
        )
        console.print(
            f"     {render_progress_bar(current, threshold)} {current}/{threshold}"
        )
