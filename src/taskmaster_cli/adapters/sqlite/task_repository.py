"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from typing import Any

from taskmaster_cli.adapters.sqlite.connection import get_connection
from taskmaster_cli.adapters.sqlite.utils import (
    execute_write,
    generate_uuid,
    now_iso,
    row_to_dict,
    store_errors,
    to_db_bool,
    to_db_datetime,
)
from taskmaster_cli.models import Task, TaskCreate, TaskFilters
from taskmaster_cli.models.exceptions import NotFoundError
from taskmaster_cli.repositories import TaskRepository

_ORDER_BY = {
    "date_desc": "t.scheduled_date DESC, t.scheduled_time ASC",
    "date_asc": "t.scheduled_date ASC, t.scheduled_time ASC",
    "time_asc": "t.scheduled_time ASC, t.scheduled_date ASC",
}


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository."""

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task repository.

        Args:
            db_path: Database file path, used when no connection is given
            connection: Optional already-open connection
        """
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    async def list_by_owner(self, owner_id: str, filters: TaskFilters) -> list[Task]:
        """List an owner's tasks with filtering."""
        query = "SELECT t.* FROM tasks t WHERE t.user_id = ?"
        params: list[Any] = [owner_id]

        if filters.on_date is not None:
            query += " AND t.scheduled_date = ?"
            params.append(filters.on_date.isoformat())

        if filters.start_date is not None:
            query += " AND t.scheduled_date >= ?"
            params.append(filters.start_date.isoformat())

        if filters.end_date is not None:
            query += " AND t.scheduled_date <= ?"
            params.append(filters.end_date.isoformat())

        if filters.completed is not None:
            query += " AND t.completed = ?"
            params.append(to_db_bool(filters.completed))

        if filters.priority is not None:
            query += " AND t.priority = ?"
            params.append(filters.priority)

        query += f" ORDER BY {_ORDER_BY[filters.order]}"

        with store_errors(self.connection, "list tasks"):
            rows = self.connection.execute(query, params).fetchall()

        return [Task(**row_to_dict(row)) for row in rows]

    async def get(self, owner_id: str, task_id: str) -> Task:
        """Get a specific task by ID, scoped to its owner."""
        with store_errors(self.connection, "load task"):
            row = self.connection.execute(
                "SELECT * FROM tasks WHERE id = ? AND user_id = ?",
                (task_id, owner_id),
            ).fetchone()

        if not row:
            raise NotFoundError(f"Task not found: {task_id}")

        return Task(**row_to_dict(row))

    async def add(self, owner_id: str, task_data: TaskCreate) -> Task:
        """Create a new task."""
        task_id = generate_uuid()
        now = now_iso()

        with store_errors(self.connection, "create task"):
            execute_write(
                self.connection,
                """INSERT INTO tasks (
                    id, user_id, title, scheduled_date, scheduled_time, priority,
                    completed, completed_at, completed_on_time, points_earned,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, 0, NULL, NULL, 0, ?, ?)""",
                (
                    task_id,
                    owner_id,
                    task_data.title,
                    task_data.scheduled_date.isoformat(),
                    task_data.scheduled_time,
                    task_data.priority,
                    now,
                    now,
                ),
            )
            self.connection.commit()

        return await self.get(owner_id, task_id)

    async def save(self, task: Task) -> Task:
        """Persist every mutable field of an existing task."""
        with store_errors(self.connection, "save task"):
            cursor = execute_write(
                self.connection,
                """UPDATE tasks
                   SET title = ?, scheduled_date = ?, scheduled_time = ?, priority = ?,
                       completed = ?, completed_at = ?, completed_on_time = ?,
                       points_earned = ?, updated_at = ?
                   WHERE id = ? AND user_id = ?""",
                (
                    task.title,
                    task.scheduled_date.isoformat(),
                    task.scheduled_time,
                    task.priority,
                    to_db_bool(task.completed),
                    to_db_datetime(task.completed_at),
                    to_db_bool(task.completed_on_time),
                    task.points_earned,
                    now_iso(),
                    task.id,
                    task.user_id,
                ),
            )
            if cursor.rowcount == 0:
                self.connection.rollback()
                raise NotFoundError(f"Task not found: {task.id}")
            self.connection.commit()

        return await self.get(task.user_id, task.id)

    async def delete(self, owner_id: str, task_id: str) -> Task:
        """Delete a task and return it as it was."""
        task = await self.get(owner_id, task_id)

        with store_errors(self.connection, "delete task"):
            execute_write(
                self.connection,
                "DELETE FROM tasks WHERE id = ? AND user_id = ?",
                (task_id, owner_id),
            )
            self.connection.commit()

        return task
