"""Main entry point for HabitPro CLI."""

import typer

from habitpro_cli.commands import (
    achievements_command,
    complete_command,
    completions_command,
    config_command,
    stats_command,
    tasks,
    today_command,
    version_command,
)

app = typer.Typer(
    name="habitpro",
    help="Track recurring habits, streaks and milestones from the command line",
    no_args_is_help=True,
)

# Command groups
app.add_typer(tasks.app, name="tasks", help="Habit management commands")
app.add_typer(completions_command.app, name="completions", help="Completion history")
app.add_typer(stats_command.app, name="stats", help="Completion statistics")
app.add_typer(achievements_command.app, name="achievements", help="Streak milestones")
app.add_typer(config_command.app, name="config", help="Configuration management")

# Top-level commands
app.command("complete")(complete_command.complete_command)
app.command("uncomplete")(complete_command.uncomplete_command)
app.command("today")(today_command.today_command)
app.command("version")(version_command.version)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
