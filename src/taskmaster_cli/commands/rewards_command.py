"""Points, achievements and leaderboard commands."""

from typing import Annotated

import typer
from rich.panel import Panel

from taskmaster_cli.services.auth_service import resolve_owner
from taskmaster_cli.services.config_service import get_config_service
from taskmaster_cli.services.rewards_service import get_rewards_service
from taskmaster_cli.utils.typer_helpers import SuggestingGroup
from taskmaster_cli.utils.ui.console import get_console
from taskmaster_cli.utils.ui.formatters import (
    format_achievements_pretty,
    format_leaderboard_pretty,
    format_output,
    get_progress_bar,
)

from .decorators import command_wrapper
from .options import OutputOption, resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="Points, levels and achievements")
console = get_console()


@app.command("summary")
@command_wrapper
async def rewards_summary(output: OutputOption = None) -> None:
    """Show points, level, streak and badges."""
    owner_id = await resolve_owner()
    summary = await get_rewards_service().get_rewards(owner_id)
    output = resolve_output_format(output)
    if output != "pretty":
        format_output(summary.to_dict(), output)
        return

    progress = summary.total_points % 100
    console.print(
        Panel(
            f"[bold]Level {summary.level}[/bold]  {get_progress_bar(progress)} "
            f"{progress}/100 to level {summary.level + 1}\n"
            f"Points: [cyan]{summary.total_points}[/cyan]   "
            f"Streak: [cyan]{summary.current_streak}[/cyan] days\n"
            f"Completed: {summary.tasks_completed}   "
            f"On time: {summary.on_time_completed}   "
            f"Badges: {summary.badges_earned}",
            title="[bold cyan]🏆 Rewards[/bold cyan]",
            border_style="cyan",
        )
    )


@app.command("achievements")
@command_wrapper
async def list_achievements(
    unlocked_only: Annotated[
        bool, typer.Option("--unlocked", help="Only unlocked achievements")
    ] = False,
    output: OutputOption = None,
) -> None:
    """List achievements with their unlock state."""
    owner_id = await resolve_owner()
    statuses = await get_rewards_service().list_achievements(owner_id)
    data = [s.to_dict() for s in statuses if s.unlocked or not unlocked_only]
    output = resolve_output_format(output)
    if output == "pretty":
        format_achievements_pretty(data)
    else:
        format_output(data, output)


@app.command("leaderboard")
@command_wrapper
async def leaderboard(
    limit: Annotated[
        int | None, typer.Option("--limit", "-n", help="Number of users")
    ] = None,
    output: OutputOption = None,
) -> None:
    """Show the top users by points."""
    owner_id = await resolve_owner()
    limit = limit or get_config_service().config.rewards.leaderboard_size
    entries = await get_rewards_service().leaderboard(owner_id, limit)
    data = [e.to_dict() for e in entries]
    output = resolve_output_format(output)
    if output == "pretty":
        format_leaderboard_pretty(data)
    else:
        format_output(data, output)
