"""Task helper utilities."""

from datetime import date

from habitpro_cli.models import AmbiguousIdError, NotFoundError, parse_iso_date
from habitpro_cli.services.config_service import get_config_service
from habitpro_cli.services.task_service import TaskService
from habitpro_cli.utils.ui.formatters import calculate_unique_suffixes


async def resolve_task_id(task_service: TaskService, task_id_or_suffix: str) -> str:
    """
    Resolve a task ID or suffix to a full task ID.

    Paused tasks are included, so they can be resumed by suffix.

    Args:
        task_service: The task service instance
        task_id_or_suffix: Full task ID or suffix to resolve

    Returns:
        The full task ID

    Raises:
        NotFoundError: If no task matches
        AmbiguousIdError: If more than one task matches the suffix
    """
    tasks = await task_service.list_tasks(include_inactive=True)

    # Exact match wins even when it is also a suffix of another ID
    if any(task.id == task_id_or_suffix for task in tasks):
        return task_id_or_suffix

    matching = [task for task in tasks if task.id.endswith(task_id_or_suffix)]
    if not matching:
        raise NotFoundError("task", task_id_or_suffix)

    if len(matching) > 1:
        suffix_map = calculate_unique_suffixes([task.id for task in tasks])
        suggestions = []
        for task in matching:
            title = task.title if len(task.title) <= 70 else task.title[:67] + "..."
            suggestions.append(f"  #{task.id[-suffix_map[task.id]:]}  {title}")
        raise AmbiguousIdError(
            f"Multiple tasks match suffix '{task_id_or_suffix}':\n"
            + "\n".join(suggestions)
            + "\n\nUse one of the suffixes above to select a specific task."
        )

    return matching[0].id


def parse_date_option(value: str | None) -> date:
    """Parse a ``--date`` option, defaulting to today.

    Raises:
        ValueError: If the value is not a ``YYYY-MM-DD`` date
    """
    if value is None:
        return date.today()
    return parse_iso_date(value)


def output_settings(output: str | None, compact: bool = False) -> tuple[str, bool]:
    """Fill unset ``--output``/``--compact`` options from ``output.*`` config."""
    config = get_config_service().config.output
    return output or config.format, compact or config.compact
