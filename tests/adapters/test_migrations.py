"""Tests for schema migrations and connection setup."""

from __future__ import annotations

import sqlite3
from unittest.mock import MagicMock

import pytest

from taskmaster_cli.adapters.sqlite import create_connection, get_or_create_local_user
from taskmaster_cli.adapters.sqlite.connection import close_connection, get_connection
from taskmaster_cli.adapters.sqlite.migrations import (
    ALL_MIGRATIONS,
    Migration,
    MigrationError,
    applied_migrations,
    current_version,
    migrate,
)
from taskmaster_cli.adapters.sqlite.utils import execute_write


def _tables(conn):
    rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {r[0] for r in rows}


def _indexes(conn):
    rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'index'").fetchall()
    return {r[0] for r in rows}


def test_new_connection_is_migrated(connection):
    assert {"users", "tasks", "schema_version"} <= _tables(connection)
    assert {"idx_tasks_user_date", "idx_users_points"} <= _indexes(connection)
    assert current_version(connection) == max(m.version for m in ALL_MIGRATIONS)
    assert [v for v, _ in applied_migrations(connection)] == [1, 2]


def test_rerun_applies_nothing(connection):
    assert migrate(connection, ALL_MIGRATIONS) == 0


def test_empty_database_starts_at_zero():
    conn = sqlite3.connect(":memory:")
    try:
        assert current_version(conn) == 0
        assert migrate(conn, reversed(ALL_MIGRATIONS)) == len(ALL_MIGRATIONS)
        assert [v for v, _ in applied_migrations(conn)] == [1, 2]
    finally:
        conn.close()


def test_failed_migration_is_not_recorded(connection):
    broken = Migration(99, "Broken", ("CREATE TABLE broken (",))
    with pytest.raises(MigrationError, match="Migration 99 failed"):
        migrate(connection, [*ALL_MIGRATIONS, broken])
    assert current_version(connection) == 2
    assert "broken" not in _tables(connection)


def test_foreign_keys_enforced(connection):
    with pytest.raises(sqlite3.IntegrityError):
        connection.execute(
            "INSERT INTO tasks (id, user_id, title, scheduled_date, scheduled_time,"
            " created_at, updated_at) VALUES ('t', 'nobody', 'x', '2024-03-15', '09:00',"
            " '2024-03-01', '2024-03-01')"
        )


def test_file_database_uses_wal(tmp_path):
    conn = create_connection(tmp_path / "sub" / "tm.db")
    try:
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        assert mode.lower() == "wal"
        assert (tmp_path / "sub" / "tm.db").exists()
    finally:
        conn.close()


def test_shared_connection_is_reused(tmp_path):
    db = tmp_path / "shared.db"
    try:
        first = get_connection(db)
        assert get_connection(db) is first
    finally:
        close_connection()


def test_get_or_create_local_user_is_idempotent(connection):
    first = get_or_create_local_user(connection)
    assert get_or_create_local_user(connection) == first
    count = connection.execute("SELECT COUNT(*) FROM users").fetchone()[0]
    assert count == 1


def test_switching_path_closes_previous(tmp_path):
    try:
        first = get_connection(tmp_path / "a.db")
        second = get_connection(tmp_path / "b.db")
        assert second is not first
        with pytest.raises(sqlite3.ProgrammingError):
            first.execute("SELECT 1")
    finally:
        close_connection()


def test_execute_write_retries_locked_database(mocker):
    conn = MagicMock()
    conn.execute.side_effect = [sqlite3.OperationalError("database is locked"), "cursor"]
    sleep = mocker.patch("taskmaster_cli.adapters.sqlite.utils.time.sleep")

    assert execute_write(conn, "UPDATE tasks SET title = ?", ("x",)) == "cursor"
    assert conn.execute.call_count == 2
    sleep.assert_called_once_with(0.1)


def test_execute_write_gives_up(mocker):
    conn = MagicMock()
    conn.execute.side_effect = sqlite3.OperationalError("database is locked")
    mocker.patch("taskmaster_cli.adapters.sqlite.utils.time.sleep")

    with pytest.raises(sqlite3.OperationalError):
        execute_write(conn, "DELETE FROM tasks", attempts=3)
    assert conn.execute.call_count == 3


def test_execute_write_other_errors_are_not_retried():
    conn = MagicMock()
    conn.execute.side_effect = sqlite3.OperationalError("no such table: nope")
    with pytest.raises(sqlite3.OperationalError):
        execute_write(conn, "DELETE FROM nope")
    assert conn.execute.call_count == 1
