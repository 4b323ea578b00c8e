"""TaskMaster domain models.

This package contains Pydantic models for the core domain entities (tasks and
users), the configuration models and the pure rewards engine
(``taskmaster_cli.models.rewards``).
"""

from .config_models import AppConfig
from .core import (
    PRIORITIES,
    Priority,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
    User,
    UserCreate,
    UserStats,
    parse_scheduled_time,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    "Priority",
    "PRIORITIES",
    "parse_scheduled_time",
    # User models
    "User",
    "UserCreate",
    "UserStats",
    # Config models
    "AppConfig",
]
