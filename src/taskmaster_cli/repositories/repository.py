"""Repository abstraction layer for TaskMaster.

This module defines the abstract base classes (interfaces) for the task/user
store, following the hexagonal architecture (Ports & Adapters) pattern.

Every task operation is scoped to an owner. A task that exists but belongs to
someone else is reported exactly like a missing one (``NotFoundError``).
Store-level failures surface as ``StoreFailureError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from taskmaster_cli.models import (
    Task,
    TaskCreate,
    TaskFilters,
    User,
    UserCreate,
)


class TaskRepository(ABC):
    """Abstract base class for task persistence operations."""

    @abstractmethod
    async def list_by_owner(self, owner_id: str, filters: TaskFilters) -> list[Task]:
        """List an owner's tasks with optional filtering.

        Args:
            owner_id: Owner of the tasks
            filters: TaskFilters object specifying filter criteria and order

        Returns:
            List of Task objects matching the filters
        """
        raise NotImplementedError(
            "TaskRepository.list_by_owner() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, owner_id: str, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            NotFoundError: If the task does not exist or is not owned by owner_id
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, owner_id: str, task_data: TaskCreate) -> Task:
        """Create a new task for owner_id.

        Returns:
            Created Task object with generated ID and timestamps
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """Persist every mutable field of an existing task.

        Raises:
            NotFoundError: If the task no longer exists for its owner
        """
        raise NotImplementedError("TaskRepository.save() must be implemented by adapter")

    @abstractmethod
    async def delete(self, owner_id: str, task_id: str) -> Task:
        """Delete a task.

        Returns:
            The deleted Task, as it was before deletion

        Raises:
            NotFoundError: If the task does not exist or is not owned by owner_id
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )


class UserRepository(ABC):
    """Abstract base class for user persistence operations."""

    @abstractmethod
    async def get(self, user_id: str) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        raise NotImplementedError("UserRepository.get() must be implemented by adapter")

    @abstractmethod
    async def get_by_username(self, username: str) -> User:
        """Get a user by username.

        Raises:
            NotFoundError: If no user has that username
        """
        raise NotImplementedError(
            "UserRepository.get_by_username() must be implemented by adapter"
        )

    @abstractmethod
    async def add(self, user_data: UserCreate) -> User:
        """Register a new user with zero points at level 1.

        Raises:
            InvalidInputError: If the username is already taken
        """
        raise NotImplementedError("UserRepository.add() must be implemented by adapter")

    @abstractmethod
    async def list_top(self, limit: int) -> list[User]:
        """List users ordered by total points, highest first."""
        raise NotImplementedError(
            "UserRepository.list_top() must be implemented by adapter"
        )

    @abstractmethod
    async def save_stats(self, user_id: str, total_points: int, level: int) -> User:
        """Write recomputed totals in a single store write.

        Raises:
            NotFoundError: If the user does not exist
        """
        raise NotImplementedError(
            "UserRepository.save_stats() must be implemented by adapter"
        )

    @abstractmethod
    async def set_streak(self, user_id: str, streak: int) -> User:
        """Record the externally-tracked current streak.

        Raises:
            NotFoundError: If the user does not exist
        """
        raise NotImplementedError(
            "UserRepository.set_streak() must be implemented by adapter"
        )
