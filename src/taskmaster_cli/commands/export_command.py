"""Export command - Export tasks to CSV."""

from pathlib import Path
from typing import Annotated

import typer

from taskmaster_cli.services.auth_service import resolve_owner
from taskmaster_cli.services.export_service import get_export_service
from taskmaster_cli.utils.task_helpers import parse_date_option
from taskmaster_cli.utils.typer_helpers import SuggestingGroup
from taskmaster_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper
from .options import OutputOption, resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="Export data")


@app.command("csv")
@command_wrapper
async def export_csv(
    output_file: Annotated[Path, typer.Argument(help="Output file path")] = Path(
        "tasks_export.csv"
    ),
    start: Annotated[str | None, typer.Option("--from", help="From date, inclusive")] = None,
    end: Annotated[str | None, typer.Option("--to", help="To date, inclusive")] = None,
    output: OutputOption = None,
) -> None:
    """Export tasks to a CSV file, newest first."""
    owner_id = await resolve_owner()
    summary = await get_export_service().export_csv(
        owner_id,
        output_file,
        start_date=parse_date_option(start, "--from"),
        end_date=parse_date_option(end, "--to"),
    )
    format_success(f"Exported {summary.total} tasks to: {output_file}")
    format_output(summary.to_dict(), resolve_output_format(output))
