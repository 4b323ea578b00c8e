"""Configuration management commands."""

from typing import Annotated, Any

import typer

from taskmaster_cli.services.config_service import get_config_service
from taskmaster_cli.utils.timezones import resolve_timezone
from taskmaster_cli.utils.typer_helpers import SuggestingGroup
from taskmaster_cli.utils.ui.console import get_console
from taskmaster_cli.utils.ui.formatters import format_output, format_success, format_warning

from .decorators import command_wrapper
from .options import OutputOption, resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="Configuration management")
console = get_console(highlight=False)


def parse_config_value(value: str) -> Any:
    """Coerce a command-line string to bool, int or None where it looks like one."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    if value.lower() in ("none", "null"):
        return None
    return value


@app.command("show")
@command_wrapper
def show_config(output: OutputOption = None) -> None:
    """Show the current configuration."""
    config_svc = get_config_service()
    data = config_svc.config.model_dump()
    data["config_path"] = str(config_svc.config_path)
    data["db_path"] = config_svc.db_path
    format_output(data, resolve_output_format(output))


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g. analytics.timezone)")],
) -> None:
    """Get a configuration value."""
    console.print(get_config_service().get(key))


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g. analytics.timezone)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    parsed_value = parse_config_value(value)
    if key == "analytics.timezone":
        resolve_timezone(value)
    get_config_service().set(key, parsed_value)
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults (the active user is kept)."""
    if not yes and not typer.confirm("Reset the entire configuration?"):
        format_warning("Cancelled")
        raise typer.Exit(0)
    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
