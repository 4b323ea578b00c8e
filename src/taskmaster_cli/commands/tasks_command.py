"""Task management commands."""

from typing import Annotated

import typer

from taskmaster_cli.services.auth_service import resolve_owner
from taskmaster_cli.services.task_service import get_task_service
from taskmaster_cli.utils.task_helpers import (
    parse_date_option,
    parse_month_option,
    resolve_task_id,
)
from taskmaster_cli.utils.typer_helpers import SuggestingGroup
from taskmaster_cli.utils.ui.console import get_console
from taskmaster_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper
from .options import OutputOption, resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")
console = get_console()


def _show(tasks, output: str | None) -> None:
    if isinstance(tasks, list):
        data = [t.model_dump(mode="json") for t in tasks]
    else:
        data = tasks.model_dump(mode="json")
    format_output(data, resolve_output_format(output))


@app.command("add")
@command_wrapper
async def add_task(
    title: Annotated[str, typer.Argument(help="Task title")],
    date: Annotated[str, typer.Option("--date", "-d", help="Scheduled date (YYYY-MM-DD)")],
    time: Annotated[str, typer.Option("--time", "-t", help="Scheduled time (HH:MM)")],
    priority: Annotated[
        str, typer.Option("--priority", "-p", help="low, medium or high")
    ] = "medium",
    output: OutputOption = None,
) -> None:
    """Create a new task."""
    owner_id = await resolve_owner()
    task = await get_task_service().add_task(
        owner_id, title, date, time, priority=priority
    )
    format_success(f"Created task: {task.title}")
    _show(task, output)


@app.command("list")
@command_wrapper
async def list_tasks(
    on: Annotated[str | None, typer.Option("--date", help="Only this date")] = None,
    start: Annotated[str | None, typer.Option("--from", help="From date, inclusive")] = None,
    end: Annotated[str | None, typer.Option("--to", help="To date, inclusive")] = None,
    completed: Annotated[
        bool | None, typer.Option("--completed/--pending", help="Filter by status")
    ] = None,
    priority: Annotated[str | None, typer.Option("--priority", "-p")] = None,
    output: OutputOption = None,
) -> None:
    """List tasks, newest date first."""
    owner_id = await resolve_owner()
    tasks = await get_task_service().list_tasks(
        owner_id,
        on_date=parse_date_option(on, "--date"),
        start_date=parse_date_option(start, "--from"),
        end_date=parse_date_option(end, "--to"),
        completed=completed,
        priority=priority,
    )
    _show(tasks, output)


@app.command("today")
@command_wrapper
async def today_tasks(output: OutputOption = None) -> None:
    """List today's tasks by time."""
    owner_id = await resolve_owner()
    _show(await get_task_service().today_tasks(owner_id), output)


@app.command("month")
@command_wrapper
async def month_tasks(
    month: Annotated[str, typer.Argument(help="Month (YYYY-MM)")],
    output: OutputOption = None,
) -> None:
    """List the tasks of a calendar month."""
    owner_id = await resolve_owner()
    year, month_number = parse_month_option(month)
    _show(await get_task_service().month_tasks(owner_id, year, month_number), output)


@app.command("show")
@command_wrapper
async def show_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
    output: OutputOption = None,
) -> None:
    """Show a single task."""
    owner_id = await resolve_owner()
    service = get_task_service()
    resolved_id = await resolve_task_id(service, owner_id, task_id)
    _show(await service.get_task(owner_id, resolved_id), output)


@app.command("update")
@command_wrapper
async def update_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
    title: Annotated[str | None, typer.Option("--title")] = None,
    date: Annotated[str | None, typer.Option("--date", "-d")] = None,
    time: Annotated[str | None, typer.Option("--time", "-t")] = None,
    priority: Annotated[str | None, typer.Option("--priority", "-p")] = None,
    completed: Annotated[
        bool | None, typer.Option("--completed/--pending", help="Set completion")
    ] = None,
    output: OutputOption = None,
) -> None:
    """Update a task's fields or completion state."""
    owner_id = await resolve_owner()
    service = get_task_service()
    resolved_id = await resolve_task_id(service, owner_id, task_id)
    task = await service.update_task(
        owner_id,
        resolved_id,
        title=title,
        scheduled_date=date,
        scheduled_time=time,
        priority=priority,
        completed=completed,
    )
    format_success(f"Updated task: {task.title}")
    _show(task, output)


@app.command("complete")
@command_wrapper
async def complete_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
) -> None:
    """Mark a task as completed and collect its points."""
    owner_id = await resolve_owner()
    service = get_task_service()
    resolved_id = await resolve_task_id(service, owner_id, task_id)
    task = await service.complete_task(owner_id, resolved_id)

    timing = "on time" if task.completed_on_time else "late"
    format_success(f"✓ Completed {timing}: {task.title} (+{task.points_earned} points)")
    console.print(f"[dim]To undo: taskmaster tasks reopen {task_id}[/dim]")


@app.command("reopen")
@command_wrapper
async def reopen_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
) -> None:
    """Mark a completed task as incomplete again."""
    owner_id = await resolve_owner()
    service = get_task_service()
    resolved_id = await resolve_task_id(service, owner_id, task_id)
    task = await service.reopen_task(owner_id, resolved_id)
    format_success(f"Reopened: {task.title}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Delete a task."""
    owner_id = await resolve_owner()
    service = get_task_service()
    resolved_id = await resolve_task_id(service, owner_id, task_id)
    if not yes:
        task = await service.get_task(owner_id, resolved_id)
        if not typer.confirm(f"Delete task '{task.title}'?"):
            raise typer.Exit(0)
    task = await service.delete_task(owner_id, resolved_id)
    format_success(f"Deleted task: {task.title}")
