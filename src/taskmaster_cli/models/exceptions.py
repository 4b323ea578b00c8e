"""Custom exceptions for TaskMaster."""


class TaskMasterError(Exception):
    """Base exception for all TaskMaster errors."""


class NotFoundError(TaskMasterError):
    """Raised when a user or task does not exist or is not owned by the requester."""


class InvalidInputError(TaskMasterError):
    """Raised for malformed dates/times, unknown priorities or bad query windows."""


class StoreFailureError(TaskMasterError):
    """Raised when the task/user store is unreachable or rejects a write."""


class AuthenticationError(TaskMasterError):
    """Raised when the active owner cannot be resolved."""
