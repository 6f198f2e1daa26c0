"""Command 'today' of habitpro-cli"""

from typing import Annotated

import typer

from habitpro_cli.services.context_manager import get_strategy_context
from habitpro_cli.services.summary_service import SummaryService
from habitpro_cli.utils.task_helpers import output_settings, parse_date_option
from habitpro_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper

app = typer.Typer()


@app.command("today")
@command_wrapper
async def today_command(
    on: Annotated[
        str | None, typer.Option("--date", help="Day to summarize (YYYY-MM-DD)")
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
    json_opt: Annotated[
        bool, typer.Option("--json", help="Output as JSON (alias for --output json)")
    ] = False,
    compact: Annotated[bool, typer.Option("--compact", help="Compact output")] = False,
) -> None:
    """Show the habits due today with completion state and streaks."""
    if json_opt:
        output = "json"
    output, compact = output_settings(output, compact)

    strategy = get_strategy_context()
    summary = await SummaryService(
        strategy.task_repository,
        strategy.completion_repository,
        strategy.achievement_repository,
    ).daily_summary(parse_date_option(on))

    format_output(summary.model_dump(mode="json"), output, compact)
