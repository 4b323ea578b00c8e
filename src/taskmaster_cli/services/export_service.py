"""Export service - writes an owner's tasks to CSV."""

from __future__ import annotations

import csv
from dataclasses import asdict, dataclass
from datetime import date
from pathlib import Path
from typing import Any, TextIO

from taskmaster_cli.models import Task, TaskFilters
from taskmaster_cli.models.exceptions import InvalidInputError, StoreFailureError
from taskmaster_cli.repositories import TaskRepository
from taskmaster_cli.utils.logger import get_logger

logger = get_logger("export")

CSV_FIELDNAMES = ["Date", "Task", "Time", "Priority", "Completed", "On Time", "Points"]


def _yes_no(value: bool | None) -> str:
    return "Yes" if value else "No"


def task_to_row(task: Task) -> dict[str, Any]:
    return {
        "Date": task.scheduled_date.isoformat(),
        "Task": task.title,
        "Time": task.scheduled_time,
        "Priority": task.priority,
        "Completed": _yes_no(task.completed),
        "On Time": _yes_no(task.completed_on_time),
        "Points": task.points_earned,
    }


@dataclass(frozen=True)
class ExportSummary:
    total: int
    completed: int
    on_time: int
    total_points: int

    @classmethod
    def from_tasks(cls, tasks: list[Task]) -> ExportSummary:
        return cls(
            total=len(tasks),
            completed=sum(1 for t in tasks if t.completed),
            on_time=sum(1 for t in tasks if t.completed_on_time),
            total_points=sum(t.points_earned for t in tasks),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class ExportService:
    """Service for exporting tasks."""

    def __init__(self, task_repository: TaskRepository):
        self.task_repository = task_repository

    async def tasks_for_export(
        self,
        owner_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Task]:
        """Tasks in the inclusive date range, newest first."""
        if start_date and end_date and start_date > end_date:
            raise InvalidInputError("start date must not be after end date")
        return await self.task_repository.list_by_owner(
            owner_id,
            TaskFilters(start_date=start_date, end_date=end_date, order="date_desc"),
        )

    @staticmethod
    def write_csv(tasks: list[Task], stream: TextIO) -> int:
        """Write *tasks* as CSV to an open text stream; returns the row count."""
        writer = csv.DictWriter(stream, fieldnames=CSV_FIELDNAMES)
        writer.writeheader()
        writer.writerows(task_to_row(t) for t in tasks)
        return len(tasks)

    async def export_csv(
        self,
        owner_id: str,
        output: Path | str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> ExportSummary:
        """Export tasks to a CSV file.

        Raises:
            InvalidInputError: If the date range is inverted
            StoreFailureError: If the file cannot be written
        """
        tasks = await self.tasks_for_export(owner_id, start_date, end_date)
        path = Path(output)
        try:
            with open(path, "w", newline="", encoding="utf-8") as f:
                self.write_csv(tasks, f)
        except OSError as e:
            raise StoreFailureError(f"Failed to write {path}: {e}") from e

        logger.info("exported %d tasks for user %s to %s", len(tasks), owner_id, path)
        return ExportSummary.from_tasks(tasks)


def get_export_service() -> ExportService:
    from taskmaster_cli.services.context_manager import get_strategy_context

    return ExportService(get_strategy_context().task_repository)
