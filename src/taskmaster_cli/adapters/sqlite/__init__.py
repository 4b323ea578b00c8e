"""SQLite adapter module - Local database storage implementation."""

from taskmaster_cli.adapters.sqlite.connection import (
    close_connection,
    create_connection,
    get_connection,
)
from taskmaster_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from taskmaster_cli.adapters.sqlite.user_manager import get_or_create_local_user
from taskmaster_cli.adapters.sqlite.user_repository import SqliteUserRepository

__all__ = [
    "close_connection",
    "create_connection",
    "get_connection",
    "SqliteTaskRepository",
    "SqliteUserRepository",
    "get_or_create_local_user",
]
