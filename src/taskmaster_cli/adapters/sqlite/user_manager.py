"""Local user profile management for the SQLite store.

A fresh store has no users; the first command run creates a default local
profile so the CLI works without registration.
"""

from __future__ import annotations

import getpass
import sqlite3
import uuid
from datetime import UTC, datetime

DEFAULT_NAME = "Local User"


def _default_username() -> str:
    try:
        return getpass.getuser() or "local"
    except (KeyError, OSError):
        return "local"


def create_default_user(connection: sqlite3.Connection) -> str:
    """Create the default local user profile.

    Returns:
        User ID (UUID string)
    """
    user_id = str(uuid.uuid4())
    now = datetime.now(UTC).isoformat()

    connection.execute(
        """
        INSERT INTO users (id, name, username, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?)
        """,
        (user_id, DEFAULT_NAME, _default_username(), now, now),
    )
    connection.commit()

    return user_id


def get_or_create_local_user(connection: sqlite3.Connection) -> str:
    """Get the oldest existing user, or create the default one.

    Returns:
        User ID (UUID string)
    """
    row = connection.execute(
        "SELECT id FROM users ORDER BY created_at ASC LIMIT 1"
    ).fetchone()

    if row:
        return row[0]

    return create_default_user(connection)
