"""Analytics rollups over task collections."""

from __future__ import annotations

import calendar
from collections import Counter
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from taskmaster_cli.models.core import Task
from taskmaster_cli.models.exceptions import InvalidInputError


@dataclass(frozen=True)
class DailyBucket:
    """Task volume for one calendar day."""

    date: date
    total: int
    completed: int


@dataclass(frozen=True)
class WindowSummary:
    """Rollup of a trailing N-day window ending now."""

    window_days: int
    total: int
    completed: int
    on_time_completed: int
    completion_rate: int
    on_time_rate: int
    avg_per_day: float
    daily_buckets: list[DailyBucket] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["daily_buckets"] = [
            {**bucket, "date": bucket["date"].isoformat()}
            for bucket in data["daily_buckets"]
        ]
        return data


@dataclass(frozen=True)
class MonthSummary:
    """Rollup of one calendar month."""

    year: int
    month: int
    total: int
    completed: int
    completion_rate: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DaySummary:
    """Task counts for a single day."""

    date: date
    total: int
    completed: int
    pending: int
    on_time_completed: int

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        return data


def percentage(part: int, whole: int) -> int:
    """Whole-number percentage rounded half up; 0 when *whole* is 0."""
    if whole <= 0:
        return 0
    ratio = Decimal(100 * part) / Decimal(whole)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _one_decimal(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _start_of_day(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def window_start(now: datetime, window_days: int) -> datetime:
    """Start of the trailing window of *window_days* days ending at *now*.

    Raises:
        InvalidInputError: If window_days is below 1 or reaches past year 1
    """
    if window_days < 1:
        raise InvalidInputError("window_days must be at least 1")
    try:
        return now - timedelta(days=window_days)
    except OverflowError as e:
        raise InvalidInputError(f"window_days is too large: {window_days}") from e


def summarize(
    tasks: Iterable[Task],
    window_days: int,
    *,
    now: datetime | None = None,
    tz: tzinfo = UTC,
) -> WindowSummary:
    """Summarize tasks scheduled in the trailing window ``[now - window_days, now]``.

    A task is placed at the start of its scheduled day in *tz*. Daily buckets
    cover the ``window_days`` calendar days ending today (in *tz*), oldest
    first, each spanning ``[midnight, next midnight)``.

    Raises:
        InvalidInputError: If window_days is below 1 or too large
    """
    now = datetime.now(tz) if now is None else now
    if now.tzinfo is None:
        now = now.replace(tzinfo=tz)
    start = window_start(now, window_days)

    in_window = [
        t
        for t in tasks
        if start <= _start_of_day(t.scheduled_date, tz) <= now
    ]

    total = len(in_window)
    completed = sum(1 for t in in_window if t.completed)
    on_time = sum(1 for t in in_window if t.completed_on_time)

    totals_by_day = Counter(t.scheduled_date for t in in_window)
    completed_by_day = Counter(t.scheduled_date for t in in_window if t.completed)

    today = now.astimezone(tz).date()
    buckets = []
    for offset in range(window_days - 1, -1, -1):
        day = today - timedelta(days=offset)
        buckets.append(
            DailyBucket(
                date=day,
                total=totals_by_day[day],
                completed=completed_by_day[day],
            )
        )

    return WindowSummary(
        window_days=window_days,
        total=total,
        completed=completed,
        on_time_completed=on_time,
        completion_rate=percentage(completed, total),
        on_time_rate=percentage(on_time, completed),
        avg_per_day=_one_decimal(total / window_days),
        daily_buckets=buckets,
    )


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month.

    Raises:
        InvalidInputError: If month is outside 1-12 or year is out of range
    """
    if not 1 <= month <= 12:
        raise InvalidInputError(f"Invalid month: {month}")
    if not 1 <= year <= 9999:
        raise InvalidInputError(f"Invalid year: {year}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def summarize_month(tasks: Iterable[Task], year: int, month: int) -> MonthSummary:
    """Summarize tasks scheduled within a calendar month."""
    first, last = month_bounds(year, month)
    in_month = [t for t in tasks if first <= t.scheduled_date <= last]
    completed = sum(1 for t in in_month if t.completed)
    return MonthSummary(
        year=year,
        month=month,
        total=len(in_month),
        completed=completed,
        completion_rate=percentage(completed, len(in_month)),
    )


def summarize_day(tasks: Iterable[Task], day: date) -> DaySummary:
    """Count a single day's tasks by completion status."""
    day_tasks = [t for t in tasks if t.scheduled_date == day]
    completed = sum(1 for t in day_tasks if t.completed)
    return DaySummary(
        date=day,
        total=len(day_tasks),
        completed=completed,
        pending=len(day_tasks) - completed,
        on_time_completed=sum(1 for t in day_tasks if t.completed_on_time),
    )
