"""Schema migrations for the local SQLite store.

Each migration is a numbered list of statements. Versions only move
forward and are recorded in ``schema_version``; pending ones run every
time a connection is opened.
"""

from taskmaster_cli.adapters.sqlite import schema

from .runner import Migration, MigrationError, applied_migrations, current_version, migrate

ALL_MIGRATIONS: tuple[Migration, ...] = (
    Migration(1, "Create users and tasks tables", (schema.USERS_TABLE, schema.TASKS_TABLE)),
    Migration(2, "Index tasks by date and status, users by points", schema.REPORTING_INDEXES),
)

__all__ = [
    "ALL_MIGRATIONS",
    "Migration",
    "MigrationError",
    "applied_migrations",
    "current_version",
    "migrate",
]
