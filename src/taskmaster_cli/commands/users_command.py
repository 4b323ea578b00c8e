"""User account commands."""

from typing import Annotated

import typer

from taskmaster_cli.services.auth_service import resolve_owner
from taskmaster_cli.services.user_service import get_user_service
from taskmaster_cli.utils.typer_helpers import SuggestingGroup
from taskmaster_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper
from .options import OutputOption, resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="User accounts")


@app.command("register")
@command_wrapper
async def register_user(
    username: Annotated[str, typer.Argument(help="Unique username")],
    name: Annotated[str, typer.Option("--name", "-n", help="Display name")],
    email: Annotated[str | None, typer.Option("--email", help="Email address")] = None,
    activate: Annotated[
        bool, typer.Option("--activate/--no-activate", help="Make the new user active")
    ] = True,
) -> None:
    """Register a new user."""
    user = await get_user_service().register(name, username, email, activate=activate)
    suffix = " and switched to it" if activate else ""
    format_success(f"Registered user '{user.username}'{suffix}")


@app.command("use")
@command_wrapper
async def use_user(
    username: Annotated[str, typer.Argument(help="Username to switch to")],
) -> None:
    """Switch the active user."""
    user = await get_user_service().use(username)
    format_success(f"Switched to user '{user.username}'")


@app.command("whoami")
@command_wrapper
async def whoami(output: OutputOption = None) -> None:
    """Show the active user."""
    owner_id = await resolve_owner()
    user = await get_user_service().get(owner_id)
    format_output(user.model_dump(mode="json"), resolve_output_format(output))


@app.command("streak")
@command_wrapper
async def set_streak(
    days: Annotated[int, typer.Argument(help="Current streak in days")],
) -> None:
    """Record the active user's current streak."""
    owner_id = await resolve_owner()
    user = await get_user_service().set_streak(owner_id, days)
    format_success(f"Streak set to {user.current_streak} days")
