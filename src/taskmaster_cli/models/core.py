"""Task and user data models."""

from datetime import date, datetime, time
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

Priority = Literal["low", "medium", "high"]

PRIORITIES: tuple[str, ...] = ("low", "medium", "high")


def parse_scheduled_time(value: str) -> time:
    """Parse an ``HH:MM`` wall-clock string.

    Raises:
        ValueError: If the string is not a valid 24h ``HH:MM`` time
    """
    parts = value.strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return time(hours, minutes)


def _normalize_time(value: str) -> str:
    return parse_scheduled_time(value).strftime("%H:%M")


def _normalize_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Title must not be empty")
    return value


class Task(BaseModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier for the task
        user_id: Owner of the task (never transferred)
        title: Task title
        scheduled_date: Calendar date the task is planned for
        scheduled_time: Planned wall-clock time as ``HH:MM``
        priority: Priority level ("low", "medium", "high")
        completed: Completion status
        completed_at: Completion timestamp, set only while completed
        completed_on_time: None until completed, then whether it was on time
        points_earned: Points awarded for the completion, 0 while incomplete
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    user_id: str
    title: str
    scheduled_date: date
    scheduled_time: str
    priority: Priority = "medium"
    completed: bool = False
    completed_at: datetime | None = None
    completed_on_time: bool | None = None
    points_earned: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime

    @property
    def scheduled_hour(self) -> int:
        return parse_scheduled_time(self.scheduled_time).hour


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required, non-empty)
        scheduled_date: Planned calendar date
        scheduled_time: Planned time as ``HH:MM``
        priority: Priority level, defaults to "medium"
    """

    title: str
    scheduled_date: date
    scheduled_time: str
    priority: Priority = "medium"

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _normalize_title(v)

    @field_validator("scheduled_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return _normalize_time(v)


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    All fields are optional - only provided fields will be updated.
    ``completed`` toggles completion and drives scoring.
    """

    title: str | None = None
    scheduled_date: date | None = None
    scheduled_time: str | None = None
    priority: Priority | None = None
    completed: bool | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return None if v is None else _normalize_title(v)

    @field_validator("scheduled_time")
    @classmethod
    def validate_time(cls, v: str | None) -> str | None:
        return None if v is None else _normalize_time(v)


class TaskFilters(BaseModel):
    """Filters for querying an owner's tasks.

    Attributes:
        on_date: Only tasks scheduled on this date
        start_date: Tasks scheduled on or after this date
        end_date: Tasks scheduled on or before this date
        completed: Filter by completion status
        priority: Filter by priority level
        order: Sort order of the result
    """

    on_date: date | None = None
    start_date: date | None = None
    end_date: date | None = None
    completed: bool | None = None
    priority: Priority | None = None
    order: Literal["date_desc", "date_asc", "time_asc"] = "date_desc"


class User(BaseModel):
    """User model.

    ``total_points`` and ``level`` are derived from the user's completed tasks
    and are only ever written by the stats recompute.
    """

    id: str
    name: str
    username: str
    email: EmailStr | None = None
    total_points: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    current_streak: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime


class UserCreate(BaseModel):
    """Model for registering a new user."""

    name: str
    username: str = Field(min_length=1, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr | None = None


class UserStats(BaseModel):
    """Recomputed aggregate stats of a user."""

    total_points: int = Field(ge=0)
    level: int = Field(ge=1)
