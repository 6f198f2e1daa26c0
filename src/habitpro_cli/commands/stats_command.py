"""Monthly statistics commands."""

from datetime import date
from typing import Annotated

import typer

from habitpro_cli.services.config_service import get_config_service
from habitpro_cli.services.context_manager import get_strategy_context
from habitpro_cli.services.summary_service import SummaryService, heatmap_intensity
from habitpro_cli.utils.task_helpers import output_settings
from habitpro_cli.utils.ui.formatters import (
    format_month_heatmap,
    format_month_totals,
    format_output,
)

from .decorators import command_wrapper

app = typer.Typer(help="Completion statistics")


@app.command("month")
@command_wrapper
async def month_stats(
    year: Annotated[
        int | None,
        typer.Argument(
            min=1000, max=9999, help="Four-digit year (default: current year)"
        ),
    ] = None,
    month: Annotated[
        int | None,
        typer.Argument(min=1, max=12, help="Month 1-12 (default: current month)"),
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """Show a month's completion heatmap and totals."""
    output, _ = output_settings(output)
    today = date.today()

    strategy = get_strategy_context()
    stats = await SummaryService(
        strategy.task_repository,
        strategy.completion_repository,
        strategy.achievement_repository,
    ).monthly_stats(year or today.year, month or today.month)

    data = stats.model_dump(mode="json")
    for day, raw in zip(data["daily_completions"], stats.daily_completions, strict=True):
        day["intensity"] = heatmap_intensity(raw.count, raw.total)

    if output == "pretty":
        week_start = get_config_service().config.calendar.week_start
        format_month_heatmap(data, week_start=week_start)
        format_month_totals(data)
    else:
        format_output(data, output)
