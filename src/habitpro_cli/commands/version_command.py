"""Command 'version' of habitpro-cli"""

import typer

from habitpro_cli import __version__
from habitpro_cli.services.config_service import get_config_service
from habitpro_cli.utils.ui.console import get_console

app = typer.Typer()
console = get_console(highlight=False)


@app.command()
def version(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show storage details"),
) -> None:
    """Show version information"""
    console.print(__version__)
    if verbose:
        config_svc = get_config_service()
        console.print(f"storage: {config_svc.config.storage.type}")
        console.print(f"vault: {config_svc.db_path}")
        console.print(f"config: {config_svc.config_path}")
