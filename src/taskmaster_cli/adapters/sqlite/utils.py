"""Utility functions for SQLite adapter."""

from __future__ import annotations

import sqlite3
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from taskmaster_cli.models.exceptions import StoreFailureError
from taskmaster_cli.utils.logger import get_logger

logger = get_logger("sqlite")


def generate_uuid() -> str:
    """Generate a new UUID as string."""
    return str(uuid.uuid4())


def now_iso() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now(UTC).isoformat()


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary."""
    if row is None:
        return {}
    return dict(row)


def to_db_bool(value: bool | None) -> int | None:
    """SQLite has no boolean type; keep None distinct from False."""
    if value is None:
        return None
    return 1 if value else 0


def to_db_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@contextmanager
def store_errors(connection: sqlite3.Connection, action: str) -> Iterator[None]:
    """Roll back and wrap sqlite3 errors raised while performing *action*.

    Raises:
        StoreFailureError: If SQLite rejects the statement
    """
    try:
        yield
    except sqlite3.Error as e:
        connection.rollback()
        raise StoreFailureError(f"Failed to {action}: {e}") from e


def execute_write(
    connection: sqlite3.Connection,
    sql: str,
    params: tuple | dict = (),
    attempts: int = 3,
) -> sqlite3.Cursor:
    """Execute a write, backing off while another process holds the lock.

    Raises:
        sqlite3.OperationalError: If the database is still locked after *attempts*
    """
    for attempt in range(1, attempts):
        try:
            return connection.execute(sql, params)
        except sqlite3.OperationalError as e:
            if "database is locked" not in str(e):
                raise
            logger.debug("database locked, retry %d/%d", attempt, attempts - 1)
            time.sleep(0.1 * 2 ** (attempt - 1))
    return connection.execute(sql, params)
