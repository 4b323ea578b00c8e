"""Task service - Business logic for task operations.

This service layer sits between commands and repositories. Every operation is
scoped to an owner. Changing a task's completion state, or deleting a
completed task, recomputes the owner's totals before the call returns.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime, tzinfo

from pydantic import ValidationError

from taskmaster_cli.models import Task, TaskCreate, TaskFilters, TaskUpdate
from taskmaster_cli.models.exceptions import InvalidInputError
from taskmaster_cli.models.rewards.analytics import month_bounds
from taskmaster_cli.models.rewards.scoring import apply_completion
from taskmaster_cli.repositories import TaskRepository, UserRepository
from taskmaster_cli.services.stats_service import (
    StatsService,
    UserLockRegistry,
    get_user_locks,
)
from taskmaster_cli.utils.logger import get_logger

logger = get_logger("tasks")


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(p) for p in first.get("loc", ())) or "input"
    return f"Invalid {field}: {first.get('msg', 'invalid value')}"


class TaskService:
    """Service for task business logic."""

    def __init__(
        self,
        task_repository: TaskRepository,
        user_repository: UserRepository,
        *,
        tz: tzinfo = UTC,
        clock: Callable[[], datetime] = _utc_now,
        locks: UserLockRegistry | None = None,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            user_repository: UserRepository implementation for data access
            tz: Zone in which scheduled dates and times are interpreted
            clock: Source of "now" for completion timestamps
            locks: Per-user lock registry (defaults to the process-wide one)
        """
        self.repository = task_repository
        self.user_repository = user_repository
        self.tz = tz
        self.clock = clock
        self.locks = locks or get_user_locks()
        self.stats = StatsService(task_repository, user_repository)

    async def list_tasks(
        self,
        owner_id: str,
        *,
        on_date: date | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        completed: bool | None = None,
        priority: str | None = None,
    ) -> list[Task]:
        """List tasks, newest scheduled date first.

        Raises:
            InvalidInputError: If the range is inverted or the priority unknown
        """
        if start_date and end_date and start_date > end_date:
            raise InvalidInputError("start date must not be after end date")
        try:
            filters = TaskFilters(
                on_date=on_date,
                start_date=start_date,
                end_date=end_date,
                completed=completed,
                priority=priority,
            )
        except ValidationError as e:
            raise InvalidInputError(_validation_message(e)) from e
        return await self.repository.list_by_owner(owner_id, filters)

    async def today_tasks(self, owner_id: str) -> list[Task]:
        """Tasks scheduled today, by time of day."""
        today = self.clock().astimezone(self.tz).date()
        return await self.repository.list_by_owner(
            owner_id, TaskFilters(on_date=today, order="time_asc")
        )

    async def month_tasks(self, owner_id: str, year: int, month: int) -> list[Task]:
        """Tasks scheduled within a calendar month, earliest first."""
        first, last = month_bounds(year, month)
        return await self.repository.list_by_owner(
            owner_id, TaskFilters(start_date=first, end_date=last, order="date_asc")
        )

    async def get_task(self, owner_id: str, task_id: str) -> Task:
        return await self.repository.get(owner_id, task_id)

    async def add_task(
        self,
        owner_id: str,
        title: str,
        scheduled_date: date | str,
        scheduled_time: str,
        *,
        priority: str = "medium",
    ) -> Task:
        """Create a new task.

        Raises:
            InvalidInputError: If the title, date, time or priority is invalid
            NotFoundError: If the owner does not exist
        """
        try:
            task_data = TaskCreate(
                title=title,
                scheduled_date=scheduled_date,
                scheduled_time=scheduled_time,
                priority=priority,
            )
        except ValidationError as e:
            raise InvalidInputError(_validation_message(e)) from e

        await self.user_repository.get(owner_id)
        task = await self.repository.add(owner_id, task_data)
        logger.info("created task %s for user %s", task.id, owner_id)
        return task

    async def update_task(
        self,
        owner_id: str,
        task_id: str,
        *,
        title: str | None = None,
        scheduled_date: date | str | None = None,
        scheduled_time: str | None = None,
        priority: str | None = None,
        completed: bool | None = None,
    ) -> Task:
        """Update a task's fields and, optionally, its completion state.

        Field edits are applied first, so a completion in the same call is
        judged against the edited schedule.

        Raises:
            InvalidInputError: If an updated field is invalid
            NotFoundError: If the task does not exist for this owner
        """
        try:
            updates = TaskUpdate(
                title=title,
                scheduled_date=scheduled_date,
                scheduled_time=scheduled_time,
                priority=priority,
                completed=completed,
            )
        except ValidationError as e:
            raise InvalidInputError(_validation_message(e)) from e

        async with self.locks.lock_for(owner_id):
            task = await self.repository.get(owner_id, task_id)
            edits = updates.model_dump(exclude_none=True, exclude={"completed"})
            if edits:
                task = task.model_copy(update=edits)

            toggled = updates.completed is not None and updates.completed != task.completed
            if toggled:
                task = apply_completion(task, updates.completed, self.clock(), self.tz)

            saved = await self.repository.save(task)

            if toggled:
                logger.info(
                    "task %s marked %s (%d points)",
                    task_id,
                    "completed" if saved.completed else "incomplete",
                    saved.points_earned,
                )
                await self.stats.recompute_user_stats(owner_id)

        return saved

    async def complete_task(self, owner_id: str, task_id: str) -> Task:
        """Mark a task as completed."""
        return await self.update_task(owner_id, task_id, completed=True)

    async def reopen_task(self, owner_id: str, task_id: str) -> Task:
        """Mark a completed task as incomplete again."""
        return await self.update_task(owner_id, task_id, completed=False)

    async def delete_task(self, owner_id: str, task_id: str) -> Task:
        """Delete a task; a completed one takes its points with it.

        Returns:
            The deleted task
        """
        async with self.locks.lock_for(owner_id):
            deleted = await self.repository.delete(owner_id, task_id)
            logger.info("deleted task %s for user %s", task_id, owner_id)
            if deleted.completed:
                await self.stats.recompute_user_stats(owner_id)
        return deleted


def get_task_service() -> TaskService:
    from taskmaster_cli.services.config_service import get_config_service
    from taskmaster_cli.services.context_manager import get_strategy_context
    from taskmaster_cli.utils.timezones import resolve_timezone

    context = get_strategy_context()
    tz = resolve_timezone(get_config_service().config.analytics.timezone)
    return TaskService(context.task_repository, context.user_repository, tz=tz)
