"""Point calculation and completion toggling."""

from __future__ import annotations

from datetime import date, datetime, tzinfo

from taskmaster_cli.models.core import Task, parse_scheduled_time

BASE_POINTS = 5
ON_TIME_BONUS = 10
PRIORITY_BONUS = {"high": 5, "medium": 3, "low": 0}
POINTS_PER_LEVEL = 100


def scheduled_datetime(scheduled_date: date, scheduled_time: str, tz: tzinfo) -> datetime:
    """Combine a task's date and ``HH:MM`` time into an aware datetime in *tz*."""
    return datetime.combine(scheduled_date, parse_scheduled_time(scheduled_time), tzinfo=tz)


def is_completed_on_time(
    scheduled_date: date,
    scheduled_time: str,
    completed_at: datetime,
    tz: tzinfo,
) -> bool:
    """Check whether a completion happened at or before the scheduled moment.

    Naive *completed_at* values are taken to be wall-clock time in *tz*.
    """
    if completed_at.tzinfo is None:
        completed_at = completed_at.replace(tzinfo=tz)
    return completed_at <= scheduled_datetime(scheduled_date, scheduled_time, tz)


def calculate_points(priority: str, completed_on_time: bool) -> int:
    """Points earned by one completion: 5 base, +10 on time, +5/+3/+0 by priority."""
    points = BASE_POINTS
    if completed_on_time:
        points += ON_TIME_BONUS
    return points + PRIORITY_BONUS.get(priority, 0)


def level_for_points(total_points: int) -> int:
    """Level 1 starts at 0 points; every 100 points is one more level."""
    if total_points < 0:
        raise ValueError("total_points must not be negative")
    return total_points // POINTS_PER_LEVEL + 1


def apply_completion(task: Task, completed: bool, now: datetime, tz: tzinfo) -> Task:
    """Return *task* toggled to *completed*, with scoring fields kept consistent.

    Completing stamps ``completed_at``, decides ``completed_on_time`` and awards
    points. Uncompleting resets all three to their defaults. Setting the state
    the task already has returns it unchanged.
    """
    if completed == task.completed:
        return task

    if not completed:
        return task.model_copy(
            update={
                "completed": False,
                "completed_at": None,
                "completed_on_time": None,
                "points_earned": 0,
            }
        )

    on_time = is_completed_on_time(task.scheduled_date, task.scheduled_time, now, tz)
    return task.model_copy(
        update={
            "completed": True,
            "completed_at": now,
            "completed_on_time": on_time,
            "points_earned": calculate_points(task.priority, on_time),
        }
    )
