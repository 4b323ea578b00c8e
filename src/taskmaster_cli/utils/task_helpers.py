"""Task helper utilities."""

from datetime import date

from taskmaster_cli.models.exceptions import InvalidInputError, NotFoundError
from taskmaster_cli.services.task_service import TaskService
from taskmaster_cli.utils.ui.formatters import calculate_unique_suffixes


async def resolve_task_id(
    task_service: TaskService, owner_id: str, task_id_or_suffix: str
) -> str:
    """
    Resolve a task ID or suffix to a full task ID.

    The task tables print the shortest unique suffix of every id, so any
    suffix shown there can be typed back in.

    Args:
        task_service: The task service instance
        owner_id: Owner whose tasks are searched
        task_id_or_suffix: Full task ID or suffix to resolve

    Returns:
        The full task ID

    Raises:
        NotFoundError: If no task matches
        InvalidInputError: If the suffix matches more than one task
    """
    try:
        await task_service.get_task(owner_id, task_id_or_suffix)
        return task_id_or_suffix
    except NotFoundError:
        pass

    tasks = await task_service.list_tasks(owner_id)
    matching = [t for t in tasks if t.id.endswith(task_id_or_suffix)]

    if not matching:
        raise NotFoundError(f"No task found with ID or suffix '{task_id_or_suffix}'")

    if len(matching) > 1:
        suffix_map = calculate_unique_suffixes([t.id for t in tasks])
        suggestions = []
        for task in matching:
            title = task.title if len(task.title) <= 70 else task.title[:67] + "..."
            suggestions.append(f"  [{task.id[-suffix_map[task.id]:]}] {title}")
        raise InvalidInputError(
            f"Multiple tasks match suffix '{task_id_or_suffix}':\n"
            + "\n".join(suggestions)
            + "\n\nUse the suffix in brackets to select a specific task."
        )

    return matching[0].id


def parse_date_option(value: str | None, option: str = "date") -> date | None:
    """Parse a ``YYYY-MM-DD`` command-line value.

    Raises:
        InvalidInputError: If the value is not an ISO calendar date
    """
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidInputError(f"Invalid {option} '{value}', expected YYYY-MM-DD") from e


def parse_month_option(value: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` command-line value into ``(year, month)``.

    Raises:
        InvalidInputError: If the value is not of the form YYYY-MM
    """
    parts = value.split("-")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise InvalidInputError(f"Invalid month '{value}', expected YYYY-MM")
    return int(parts[0]), int(parts[1])
