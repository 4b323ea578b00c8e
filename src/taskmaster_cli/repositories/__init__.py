"""Repository interfaces for TaskMaster.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- taskmaster_cli.adapters.sqlite (local storage)
"""

from .repository import TaskRepository, UserRepository

__all__ = [
    "TaskRepository",
    "UserRepository",
]
