"""Main entry point for TaskMaster CLI."""

from typing import Annotated

import typer

from taskmaster_cli import __version__
from taskmaster_cli.commands import (
    analytics_command,
    config_command,
    export_command,
    rewards_command,
    tasks_command,
    users_command,
)
from taskmaster_cli.commands.decorators import command_wrapper
from taskmaster_cli.services.config_service import get_config_service
from taskmaster_cli.utils.typer_helpers import SuggestingGroup
from taskmaster_cli.utils.ui.console import get_console, set_color

app = typer.Typer(
    name="taskmaster",
    cls=SuggestingGroup,
    help="Schedule tasks, finish them on time and collect points",
    no_args_is_help=True,
)

console = get_console(highlight=False)

app.add_typer(tasks_command.app, name="tasks", help="Task management commands")
app.add_typer(rewards_command.app, name="rewards", help="Points, levels and achievements")
app.add_typer(
    analytics_command.app, name="analytics", help="Analytics and productivity insights"
)
app.add_typer(export_command.app, name="export", help="Export tasks")
app.add_typer(users_command.app, name="users", help="User accounts")
app.add_typer(config_command.app, name="config", help="Configuration management")


@app.callback()
@command_wrapper
def main_callback(
    color: Annotated[
        bool | None,
        typer.Option("--color/--no-color", help="Colored output (default: config output.color)"),
    ] = None,
) -> None:
    """Apply global output settings before any command runs."""
    if color is None:
        color = get_config_service().config.output.color
    set_color(color)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]TaskMaster CLI[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
