"""Apply numbered schema migrations to a SQLite connection."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from taskmaster_cli.utils.logger import get_logger

logger = get_logger("migrations")

_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at DATETIME NOT NULL
)
"""


class MigrationError(RuntimeError):
    """A migration could not be applied and was rolled back."""


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    statements: tuple[str, ...]


def current_version(connection: sqlite3.Connection) -> int:
    """Highest applied migration version, 0 for an empty database."""
    connection.execute(_VERSION_TABLE)
    row = connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
    return row[0] or 0


def applied_migrations(connection: sqlite3.Connection) -> list[tuple[int, str]]:
    connection.execute(_VERSION_TABLE)
    rows = connection.execute(
        "SELECT version, description FROM schema_version ORDER BY version"
    ).fetchall()
    return [(row[0], row[1]) for row in rows]


def _apply(connection: sqlite3.Connection, migration: Migration) -> None:
    try:
        with connection:
            for statement in migration.statements:
                connection.execute(statement)
            connection.execute(
                "INSERT INTO schema_version (version, description, applied_at) VALUES (?, ?, ?)",
                (migration.version, migration.description, datetime.now(UTC).isoformat()),
            )
    except sqlite3.Error as e:
        raise MigrationError(f"Migration {migration.version} failed: {e}") from e
    logger.info("applied migration %03d: %s", migration.version, migration.description)


def migrate(connection: sqlite3.Connection, migrations: Iterable[Migration]) -> int:
    """Apply every migration newer than the database, in version order.

    Returns:
        Number of migrations applied

    Raises:
        MigrationError: If a statement fails; earlier migrations stay applied
    """
    version = current_version(connection)
    connection.commit()
    pending = sorted((m for m in migrations if m.version > version), key=lambda m: m.version)
    for migration in pending:
        _apply(connection, migration)
    return len(pending)
