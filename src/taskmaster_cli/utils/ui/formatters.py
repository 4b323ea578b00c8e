"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from taskmaster_cli.utils.ui.console import get_console

console = get_console()

OUTPUT_FORMATS = ("pretty", "json", "yaml")


def calculate_unique_suffixes(task_ids: list[str]) -> dict[str, int]:
    """
    Calculate minimum unique suffix length for each task ID.

    Starts from length 1 and grows until unique among all IDs.

    Args:
        task_ids: List of full task IDs

    Returns:
        Dict mapping task_id -> required suffix length
    """
    result = {}
    for task_id in task_ids:
        for length in range(1, len(task_id) + 1):
            suffix = task_id[-length:]
            conflicts = [
                tid for tid in task_ids if tid != task_id and tid.endswith(suffix)
            ]
            if not conflicts:
                result[task_id] = length
                break
        else:
            result[task_id] = len(task_id)
    return result


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    else:
        format_pretty(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict], title: str | None = None) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())
    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))
    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    for key, value in item.items():
        # Nested records have their own views
        if isinstance(value, dict) or (
            isinstance(value, list) and value and isinstance(value[0], dict)
        ):
            continue
        table.add_row(key.replace("_", " ").title(), _cell(value))
    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================

PRIORITY_ICONS = {
    "high": "🔴",
    "medium": "🟡",
    "low": "🟢",
}

PRIORITY_COLORS = {
    "high": "bold red",
    "medium": "bold yellow",
    "low": "green",
}


def _is_task(item: dict) -> bool:
    return "scheduled_date" in item and "points_earned" in item


def format_pretty(data: Any) -> None:
    """Format data in pretty format with colors and icons."""
    if data is None or data == [] or data == {}:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict) and _is_task(data[0]):
            format_tasks_pretty(data)
        elif isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        if _is_task(data):
            format_task_detail(data)
        elif "daily_buckets" in data:
            format_window_summary_pretty(data)
        else:
            format_single_item(data)
    else:
        console.print(data)


def format_tasks_pretty(tasks: list[dict]) -> None:
    """Format tasks as a table with their shortest unique id suffixes."""
    completed = [t for t in tasks if t.get("completed")]

    header = Text()
    header.append("📋 Tasks ", style="bold cyan")
    header.append(f"({len(tasks) - len(completed)} pending", style="dim")
    if completed:
        header.append(f", {len(completed)} completed", style="dim green")
    header.append(")", style="dim")
    console.print(header)

    suffix_map = calculate_unique_suffixes([t["id"] for t in tasks])

    table = Table(show_header=True, header_style="bold magenta", box=None)
    table.add_column("ID", style="dim")
    table.add_column("")
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Title")
    table.add_column("Priority")
    table.add_column("Points", justify="right")

    for task in tasks:
        task_id = task["id"]
        priority = task.get("priority", "medium")
        status = "☑️" if task.get("completed") else "⬜"
        if task.get("completed") and task.get("completed_on_time") is False:
            status += " ⏱️"
        table.add_row(
            task_id[-suffix_map.get(task_id, len(task_id)) :],
            status,
            str(task.get("scheduled_date", "")),
            task.get("scheduled_time", ""),
            Text(task.get("title", ""), style="strike dim" if task.get("completed") else ""),
            Text(f"{PRIORITY_ICONS.get(priority, '')} {priority}", style=PRIORITY_COLORS.get(priority, "")),
            str(task.get("points_earned", 0)),
        )
    console.print(table)


def format_task_detail(task: dict) -> None:
    """Format a single task."""
    priority = task.get("priority", "medium")
    console.print(
        f"{PRIORITY_ICONS.get(priority, '')} [bold]{task.get('title', '')}[/bold]"
    )
    format_single_item({k: v for k, v in task.items() if k != "title"})


def get_progress_bar(percentage: float, width: int = 20) -> str:
    """Render a block-character progress bar for a 0-100 percentage."""
    filled = int(max(0, min(percentage, 100)) / 100 * width)
    return "█" * filled + "░" * (width - filled)


def get_completion_color(percentage: float) -> str:
    if percentage >= 80:
        return "green"
    if percentage >= 50:
        return "yellow"
    return "red"


def format_window_summary_pretty(summary: dict) -> None:
    """Format a trailing-window analytics summary with per-day bars."""
    rate = summary.get("completion_rate", 0)
    on_time_rate = summary.get("on_time_rate", 0)

    console.print(f"[bold cyan]📊 Last {summary.get('window_days')} days[/bold cyan]")
    console.print(
        f"  Tasks: {summary.get('total', 0)}  "
        f"Completed: {summary.get('completed', 0)}  "
        f"On time: {summary.get('on_time_completed', 0)}  "
        f"Avg/day: {summary.get('avg_per_day', 0)}"
    )
    color = get_completion_color(rate)
    console.print(f"  Completion [{color}]{get_progress_bar(rate)}[/{color}] {rate}%")
    color = get_completion_color(on_time_rate)
    console.print(
        f"  On time    [{color}]{get_progress_bar(on_time_rate)}[/{color}] {on_time_rate}%"
    )
    console.print()

    buckets = summary.get("daily_buckets") or []
    busiest = max((b["total"] for b in buckets), default=0)
    for bucket in buckets:
        bar = get_progress_bar(100 * bucket["total"] / busiest if busiest else 0, width=10)
        console.print(
            f"  {bucket['date']}  {bar}  {bucket['completed']}/{bucket['total']}",
            highlight=False,
        )


def format_achievements_pretty(achievements: list[dict]) -> None:
    """Format the achievement catalog with unlock state."""
    unlocked = sum(1 for a in achievements if a.get("unlocked"))
    console.print(f"[bold cyan]🏆 Achievements ({unlocked}/{len(achievements)})[/bold cyan]")
    for achievement in achievements:
        if achievement.get("unlocked"):
            console.print(
                f"  {achievement['icon']} [bold green]{achievement['name']}[/bold green]"
                f" - {achievement['description']}"
            )
        else:
            console.print(
                f"  🔒 [dim]{achievement['name']} - {achievement['description']}[/dim]"
            )


def format_leaderboard_pretty(entries: list[dict]) -> None:
    """Format leaderboard rows, highlighting the current user."""
    if not entries:
        console.print("[yellow]No users yet[/yellow]")
        return

    medals = {1: "🥇", 2: "🥈", 3: "🥉"}
    table = Table(title="Leaderboard", show_header=True, header_style="bold magenta")
    table.add_column("Rank", justify="right")
    table.add_column("Name")
    table.add_column("Username", style="dim")
    table.add_column("Points", justify="right")
    table.add_column("Level", justify="right")
    for entry in entries:
        style = "bold cyan" if entry.get("is_current_user") else ""
        table.add_row(
            medals.get(entry["rank"], str(entry["rank"])),
            entry["name"],
            entry["username"],
            str(entry["points"]),
            str(entry["level"]),
            style=style,
        )
    console.print(table)
