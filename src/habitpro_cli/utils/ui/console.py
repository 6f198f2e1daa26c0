"""Console utilities for HabitPro CLI."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=4)
def get_console(highlight: bool = True, color: bool = True) -> Console:
    """Get a Rich Console instance for consistent output formatting.

    ``color=False`` strips all styling, for ``output.color = false``.
    """
    return Console(highlight=highlight, no_color=not color)
