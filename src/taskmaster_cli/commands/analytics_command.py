"""Analytics commands."""

from typing import Annotated

import typer

from taskmaster_cli.services.analytics_service import get_analytics_service
from taskmaster_cli.services.auth_service import resolve_owner
from taskmaster_cli.services.config_service import get_config_service
from taskmaster_cli.utils.task_helpers import parse_month_option
from taskmaster_cli.utils.typer_helpers import SuggestingGroup
from taskmaster_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper
from .options import OutputOption, resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="Analytics and productivity insights")


@app.command("summary")
@command_wrapper
async def window_summary(
    days: Annotated[
        int | None, typer.Option("--days", help="Trailing window in days")
    ] = None,
    output: OutputOption = None,
) -> None:
    """Completion and on-time rates over the last N days."""
    owner_id = await resolve_owner()
    if days is None:
        days = get_config_service().config.analytics.default_window_days
    summary = await get_analytics_service().window_summary(owner_id, days)
    format_output(summary.to_dict(), resolve_output_format(output))


@app.command("monthly")
@command_wrapper
async def monthly_summary(
    month: Annotated[
        str | None, typer.Argument(help="Month (YYYY-MM), default current")
    ] = None,
    output: OutputOption = None,
) -> None:
    """Totals and completion rate of a calendar month."""
    owner_id = await resolve_owner()
    year = month_number = None
    if month is not None:
        year, month_number = parse_month_option(month)
    summary = await get_analytics_service().monthly_summary(owner_id, year, month_number)
    format_output(summary.to_dict(), resolve_output_format(output))


@app.command("today")
@command_wrapper
async def today_summary(output: OutputOption = None) -> None:
    """Today's task counts and total points."""
    owner_id = await resolve_owner()
    data = await get_analytics_service().today_summary(owner_id)
    format_output(data, resolve_output_format(output))
