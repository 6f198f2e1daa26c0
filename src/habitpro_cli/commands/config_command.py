"""Configuration management commands."""

from typing import Annotated

import typer

from habitpro_cli.services.config_service import get_config_service
from habitpro_cli.utils.exit_codes import ERROR_INVALID_ARGS
from habitpro_cli.utils.ui.console import get_console
from habitpro_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console(highlight=False)


@app.command("show")
@command_wrapper
def show_config(
    output: Annotated[str, typer.Option("--output", "-o", help="Output format")] = "yaml",
) -> None:
    """Show the current configuration."""
    config_svc = get_config_service()
    data = config_svc.config.model_dump()
    data["storage"]["resolved_path"] = config_svc.db_path
    format_output(data, output)


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g. output.format)")],
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(f"Unknown configuration key: {key}", ERROR_INVALID_ARGS) from e
    console.print(value, markup=False)


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g. output.format)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    try:
        config = get_config_service().set(key, value)
    except KeyError as e:
        raise AppError(f"Unknown configuration key: {key}", ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{config.get_value(key)}'")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Are you sure you want to reset the configuration?"):
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(0)

    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
