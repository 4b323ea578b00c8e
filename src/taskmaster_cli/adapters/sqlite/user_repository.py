"""SQLite implementation of UserRepository."""

from __future__ import annotations

import sqlite3

from taskmaster_cli.adapters.sqlite.connection import get_connection
from taskmaster_cli.adapters.sqlite.utils import (
    execute_write,
    generate_uuid,
    now_iso,
    row_to_dict,
    store_errors,
)
from taskmaster_cli.models import User, UserCreate
from taskmaster_cli.models.exceptions import InvalidInputError, NotFoundError
from taskmaster_cli.repositories import UserRepository


class SqliteUserRepository(UserRepository):
    """SQLite implementation of user repository."""

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def _fetch_one(self, sql: str, params: tuple, missing: str) -> User:
        with store_errors(self.connection, "load user"):
            row = self.connection.execute(sql, params).fetchone()
        if not row:
            raise NotFoundError(missing)
        return User(**row_to_dict(row))

    async def get(self, user_id: str) -> User:
        return self._fetch_one(
            "SELECT * FROM users WHERE id = ?", (user_id,), f"User not found: {user_id}"
        )

    async def get_by_username(self, username: str) -> User:
        return self._fetch_one(
            "SELECT * FROM users WHERE username = ?",
            (username,),
            f"User not found: {username}",
        )

    async def add(self, user_data: UserCreate) -> User:
        """Register a new user."""
        user_id = generate_uuid()
        now = now_iso()

        with store_errors(self.connection, "create user"):
            try:
                self.connection.execute(
                    """INSERT INTO users (
                        id, name, username, email, total_points, level,
                        current_streak, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, 0, 1, 0, ?, ?)""",
                    (
                        user_id,
                        user_data.name,
                        user_data.username,
                        user_data.email,
                        now,
                        now,
                    ),
                )
            except sqlite3.IntegrityError as e:
                self.connection.rollback()
                raise InvalidInputError(
                    f"Username already taken: {user_data.username}"
                ) from e
            self.connection.commit()

        return await self.get(user_id)

    async def list_top(self, limit: int) -> list[User]:
        """List users by total points, highest first."""
        with store_errors(self.connection, "list users"):
            rows = self.connection.execute(
                "SELECT * FROM users ORDER BY total_points DESC, created_at ASC LIMIT ?",
                (limit,),
            ).fetchall()
        return [User(**row_to_dict(row)) for row in rows]

    async def save_stats(self, user_id: str, total_points: int, level: int) -> User:
        """Write recomputed totals with one UPDATE so they land together or not at all."""
        with store_errors(self.connection, "save user stats"):
            cursor = execute_write(
                self.connection,
                """UPDATE users
                   SET total_points = ?, level = ?, updated_at = ?
                   WHERE id = ?""",
                (total_points, level, now_iso(), user_id),
            )
            if cursor.rowcount == 0:
                self.connection.rollback()
                raise NotFoundError(f"User not found: {user_id}")
            self.connection.commit()

        return await self.get(user_id)

    async def set_streak(self, user_id: str, streak: int) -> User:
        """Record the externally-tracked current streak."""
        if streak < 0:
            raise InvalidInputError("Streak must not be negative")

        with store_errors(self.connection, "save user streak"):
            cursor = self.connection.execute(
                "UPDATE users SET current_streak = ?, updated_at = ? WHERE id = ?",
                (streak, now_iso(), user_id),
            )
            if cursor.rowcount == 0:
                self.connection.rollback()
                raise NotFoundError(f"User not found: {user_id}")
            self.connection.commit()

        return await self.get(user_id)
