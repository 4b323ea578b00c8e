"""Analytics service - loads an owner's tasks and rolls them up."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, tzinfo
from typing import Any

from taskmaster_cli.models import TaskFilters
from taskmaster_cli.models.rewards.analytics import (
    MonthSummary,
    WindowSummary,
    month_bounds,
    summarize,
    summarize_day,
    summarize_month,
    window_start,
)
from taskmaster_cli.repositories import TaskRepository, UserRepository


def _utc_now() -> datetime:
    return datetime.now(UTC)


class AnalyticsService:
    """Service for completion analytics."""

    def __init__(
        self,
        task_repository: TaskRepository,
        user_repository: UserRepository,
        *,
        tz: tzinfo = UTC,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.task_repository = task_repository
        self.user_repository = user_repository
        self.tz = tz
        self.clock = clock

    def _now(self) -> datetime:
        return self.clock().astimezone(self.tz)

    async def window_summary(self, owner_id: str, window_days: int = 30) -> WindowSummary:
        """Summarize the trailing ``window_days`` days ending now."""
        now = self._now()
        # Narrow the query by calendar date; summarize() applies the exact bounds.
        start = window_start(now, window_days).date()
        tasks = await self.task_repository.list_by_owner(
            owner_id,
            TaskFilters(start_date=start, end_date=now.date(), order="date_asc"),
        )
        return summarize(tasks, window_days, now=now, tz=self.tz)

    async def monthly_summary(
        self, owner_id: str, year: int | None = None, month: int | None = None
    ) -> MonthSummary:
        """Summarize a calendar month, the current one by default."""
        now = self._now()
        year = now.year if year is None else year
        month = now.month if month is None else month
        first, last = month_bounds(year, month)
        tasks = await self.task_repository.list_by_owner(
            owner_id, TaskFilters(start_date=first, end_date=last, order="date_asc")
        )
        return summarize_month(tasks, year, month)

    async def today_summary(self, owner_id: str) -> dict[str, Any]:
        """Today's task counts together with the owner's total points."""
        user = await self.user_repository.get(owner_id)
        today = self._now().date()
        tasks = await self.task_repository.list_by_owner(
            owner_id, TaskFilters(on_date=today, order="time_asc")
        )
        data = summarize_day(tasks, today).to_dict()
        data["total_points"] = user.total_points
        return data


def get_analytics_service() -> AnalyticsService:
    from taskmaster_cli.services.config_service import get_config_service
    from taskmaster_cli.services.context_manager import get_strategy_context
    from taskmaster_cli.utils.timezones import resolve_timezone

    context = get_strategy_context()
    tz = resolve_timezone(get_config_service().config.analytics.timezone)
    return AnalyticsService(context.task_repository, context.user_repository, tz=tz)
