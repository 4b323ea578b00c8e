"""Opening and sharing SQLite connections.

Every connection comes back with dict-like rows, foreign keys on and the
schema migrated. File databases run in WAL mode and are created owner-only.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
from pathlib import Path

from taskmaster_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, migrate
from taskmaster_cli.utils.logger import get_logger

logger = get_logger("sqlite")

MEMORY = ":memory:"

# db path -> open connection, one per process
_shared: dict[Path, sqlite3.Connection] = {}


def create_connection(db_path: str | Path) -> sqlite3.Connection:
    """Open a new, migrated connection to *db_path* (or ``":memory:"``)."""
    if str(db_path) == MEMORY:
        connection = sqlite3.connect(MEMORY, check_same_thread=False)
        fresh_file = None
    else:
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        fresh_file = None if db_path.exists() else db_path
        # 30s busy timeout so a second CLI process waits instead of failing
        connection = sqlite3.connect(str(db_path), check_same_thread=False, timeout=30.0)
        connection.execute("PRAGMA journal_mode = WAL")

    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    if fresh_file is not None:
        os.chmod(fresh_file, 0o600)

    migrate(connection, ALL_MIGRATIONS)
    return connection


def get_connection(db_path: str | Path) -> sqlite3.Connection:
    """Return the process-wide connection for *db_path*, opening it on first use.

    Switching to another path closes the previous connection.
    """
    db_path = Path(db_path)
    if db_path in _shared:
        return _shared[db_path]

    close_connection()
    _shared[db_path] = create_connection(db_path)
    logger.debug("opened database %s", db_path)
    return _shared[db_path]


def close_connection() -> None:
    """Commit and close the shared connection, if any."""
    while _shared:
        db_path, connection = _shared.popitem()
        try:
            connection.commit()
            connection.close()
        except sqlite3.Error as e:
            logger.warning("error while closing database %s: %s", db_path, e)


atexit.register(close_connection)
