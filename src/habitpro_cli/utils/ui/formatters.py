"""Output formatters for different formats."""

import calendar
import json
from datetime import date
from typing import Any

import yaml
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from habitpro_cli.models import Task
from habitpro_cli.services.achievement_service import MILESTONE_ICONS
from habitpro_cli.services.config_service import get_config_service
from habitpro_cli.utils.recurrence import describe_recurrence
from habitpro_cli.utils.ui.console import get_console


def _console():
    return get_console(color=get_config_service().config.output.color)


def calculate_unique_suffixes(task_ids: list[str]) -> dict[str, int]:
    """
    Calculate minimum unique suffix length for each task ID.

    Args:
        task_ids: List of full task IDs

    Returns:
        Dict mapping task_id -> required suffix length
    """
    result = {}

    for task_id in task_ids:
        for length in range(1, len(task_id) + 1):
            suffix = task_id[-length:]
            conflicts = [
                tid for tid in task_ids if tid != task_id and tid.endswith(suffix)
            ]
            if not conflicts:
                result[task_id] = length
                break
        else:
            result[task_id] = len(task_id)

    return result


def format_output(data: Any, output_format: str = "pretty", compact: bool = False) -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data, compact=compact)


def format_table(data: Any) -> None:
    """Format data as a table."""
    console = _console()
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item, markup=False)
    elif isinstance(data, dict):
        if "tasks" in data:
            format_dict_table(data["tasks"])
        elif "daily_completions" in data:
            format_dict_table(data["daily_completions"])
        else:
            format_single_item(data)
    else:
        console.print(data, markup=False)


def _cell(value: Any) -> str:
    """Render a value as a markup-safe table or line cell."""
    return escape(_plain(value))


def _plain(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return str(len(value)) if value and isinstance(value[0], dict) else ", ".join(
            str(v) for v in value
        )
    if isinstance(value, dict):
        return value.get("type") or value.get("id") or "-"
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    console = _console()
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    _console().print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    _console().print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    _console().print(f"[bold green]Success:[/bold green] {escape(message)}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================

STATUS_ICONS = {
    "open": "⬜",
    "completed": "✅",
    "paused": "⏸️",
}

FREQUENCY_ICONS = {
    "daily": "🔁",
    "monthly": "📅",
    "yearly": "🎂",
}

# Heatmap cell styles indexed by intensity (0-5)
HEATMAP_STYLES = (
    "dim",
    "on grey23",
    "on dark_green",
    "on green4",
    "on green3",
    "bold black on bright_green",
)


def format_pretty(data: Any, compact: bool = False) -> None:
    """Format data in pretty format with colors and icons."""
    console = _console()
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        first_item = data[0]
        if not isinstance(first_item, dict):
            for item in data:
                console.print(item, markup=False)
        elif "frequency" in first_item:
            format_habits_pretty(data, compact)
        elif "streak_count" in first_item:
            format_achievements_pretty(data)
        else:
            format_generic_list_pretty(data)
    elif isinstance(data, dict):
        if "tasks" in data and "completion_rate" in data:
            format_daily_summary_pretty(data, compact)
        elif "frequency" in data:
            format_habit_item(data, compact=False)
        else:
            format_single_item_pretty(data)
    else:
        console.print(data, markup=False)


def format_habits_pretty(tasks: list[dict], compact: bool = False) -> None:
    """Format a list of habits in pretty format."""
    console = _console()
    active = [t for t in tasks if t.get("is_active", True)]

    header = Text()
    header.append("📋 Habits ", style="bold cyan")
    header.append(f"({len(active)} active", style="dim")
    if len(active) != len(tasks):
        header.append(f", {len(tasks) - len(active)} paused", style="dim yellow")
    header.append(")", style="dim")
    console.print(header)
    console.print()

    suffix_map = calculate_unique_suffixes([t["id"] for t in tasks if t.get("id")])
    for task in sorted(tasks, key=lambda t: (t.get("time") or "").zfill(5)):
        format_habit_item(task, compact, indent="  ", suffix_map=suffix_map)


def format_habit_item(
    task: dict,
    compact: bool = False,
    indent: str = "",
    suffix_map: dict[str, int] | None = None,
) -> None:
    """Format a single habit, with daily state when present."""
    console = _console()
    is_completed = task.get("is_completed", False)

    if not task.get("is_active", True):
        status_icon = STATUS_ICONS["paused"]
    elif is_completed:
        status_icon = STATUS_ICONS["completed"]
    else:
        status_icon = STATUS_ICONS["open"]

    title = escape(task.get("title", "Untitled"))
    line_str = f"{indent}{status_icon} [cyan]{task.get('time', '')}[/cyan] "
    line_str += f"[dim]{title}[/dim]" if is_completed else f"[bold]{title}[/bold]"

    streak = task.get("streak", 0)
    if streak:
        line_str += f"  [orange1]🔥 {streak}[/orange1]"

    milestone = task.get("latest_milestone")
    if milestone:
        line_str += f" {MILESTONE_ICONS.get(milestone['type'], '')}"

    console.print(Text.from_markup(line_str))
    if compact:
        return

    meta = [
        (
            f"{FREQUENCY_ICONS.get(task.get('frequency'), '')} "
            f"{describe_recurrence(Task.model_validate(task))}",
            "blue",
        )
    ]
    if task.get("next_occurrence"):
        meta.append((f"Next: {format_date(task['next_occurrence'])}", "cyan"))
    if task.get("description"):
        meta.append((task["description"], "dim"))
    if task.get("id"):
        task_id = task["id"]
        length = suffix_map[task_id] if suffix_map and task_id in suffix_map else 6
        meta.append((f"#{task_id[-length:]}", "dim"))

    meta_line = Text()
    meta_line.append(f"{indent}   └─ ", style="dim")
    for i, (text, style) in enumerate(meta):
        if i > 0:
            meta_line.append(" • ", style="dim")
        meta_line.append(text, style=style)
    console.print(meta_line)


def format_daily_summary_pretty(summary: dict, compact: bool = False) -> None:
    """Format a daily summary: progress header, then each due habit."""
    console = _console()
    rate = summary["completion_rate"]

    header = Text()
    header.append(f"📆 {format_date(summary['date'])}  ", style="bold cyan")
    header.append(get_progress_bar(rate), style=get_completion_color(rate))
    header.append(
        f" {summary['completed_tasks']}/{summary['total_tasks']} ({rate:.0f}%)",
        style=get_completion_color(rate),
    )
    console.print(header)
    console.print()

    tasks = summary["tasks"]
    if not tasks:
        console.print("[yellow]Nothing due today[/yellow]")
        return

    suffix_map = calculate_unique_suffixes([t["id"] for t in tasks])
    for task in sorted(tasks, key=lambda t: (t.get("time") or "").zfill(5)):
        format_habit_item(task, compact, indent="  ", suffix_map=suffix_map)


def format_achievements_pretty(achievements: list[dict]) -> None:
    """Format earned milestones."""
    console = _console()
    for achievement in achievements:
        icon = MILESTONE_ICONS.get(achievement["type"], "🎖️")
        console.print(
            f"{icon} [bold]{achievement['type']}[/bold] "
            f"[dim]streak {achievement['streak_count']} • "
            f"task #{escape(achievement['task_id'][-6:])} • "
            f"earned {str(achievement['earned_at'])[:10]}[/dim]"
        )


def format_generic_list_pretty(items: list[dict]) -> None:
    """Format generic list of items."""
    console = _console()
    for item in items:
        if "date" in item and "task_id" in item:
            console.print(
                f"• {item['date']}  [dim]task #{item['task_id'][-6:]} • "
                f"id {item.get('id', '-')}[/dim]"
            )
        else:
            console.print(f"• {item.get('id', 'Item')}")


def format_single_item_pretty(item: dict) -> None:
    """Format a single item in pretty format."""
    console = _console()
    for key, value in item.items():
        formatted_key = key.replace("_", " ").title()
        console.print(f"[cyan]{formatted_key}:[/cyan] {_cell(value)}")


def format_month_heatmap(stats: dict, week_start: str = "monday") -> None:
    """Render a month of completion intensities as a calendar grid.

    Args:
        stats: Monthly stats dict with ``daily_completions`` entries carrying
            ``date``, ``count``, ``total`` and ``intensity``
        week_start: "monday" or "sunday"
    """
    console = _console()
    first_weekday = calendar.MONDAY if week_start == "monday" else calendar.SUNDAY
    cal = calendar.Calendar(firstweekday=first_weekday)
    by_day = {
        date.fromisoformat(str(day["date"])).day: day
        for day in stats["daily_completions"]
    }

    table = Table(
        title=f"{stats['month']} {stats['year']}",
        show_header=True,
        header_style="bold magenta",
        box=None,
    )
    for weekday in cal.iterweekdays():
        table.add_column(calendar.day_abbr[weekday][:2], justify="right")

    for week in cal.monthdayscalendar(stats["year"], stats["month_number"]):
        cells = []
        for day in week:
            if day == 0:
                cells.append(Text(""))
                continue
            intensity = by_day[day].get("intensity", 0) if day in by_day else 0
            cells.append(Text(f"{day:>2}", style=HEATMAP_STYLES[intensity]))
        table.add_row(*cells)

    console.print(table)

    legend = Text("Less ", style="dim")
    for style in HEATMAP_STYLES:
        legend.append("  ", style=style)
        legend.append(" ")
    legend.append("More", style="dim")
    console.print(legend)


def format_month_totals(stats: dict) -> None:
    """Print the totals line under a monthly heatmap."""
    console = _console()
    rate = stats["completion_rate"]
    console.print()
    console.print(
        f"[bold]Completed:[/bold] {stats['completed_count']}/{stats['total_due']} "
        f"[{get_completion_color(rate)}]({rate:.1f}%)[/{get_completion_color(rate)}]"
    )
    console.print(
        f"[bold]Perfect days:[/bold] {stats['perfect_days']}  "
        f"[bold]Best run:[/bold] {stats['streak_days']} days  "
        f"[bold]Active habits:[/bold] {stats['total_tasks']}"
    )


# ============================================================================
# Helper Functions
# ============================================================================


def format_date(value: str | date) -> str:
    """Format a date as ``Mon 06/06`` or ``Mon 06/06/2025`` outside this year."""
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value)
        except ValueError:
            return value

    day_str = value.strftime("%d/%m")
    if value.year != date.today().year:
        day_str = value.strftime("%d/%m/%Y")
    return f"{value.strftime('%a')} {day_str}"


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"
