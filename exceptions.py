"""
Custom exceptions for the task manager.

Exception Hierarchy:
    TaskManagerError (base)
    ├── ValidationError
    │   └── InvalidInputError
    ├── AuthError
    │   └── TokenError
    │       ├── TokenExpiredError
    │       └── TokenInvalidError
    ├── AlreadyExistsError
    ├── NotFoundError
    ├── InvalidCredentialsError
    ├── NotFoundOrForbiddenError
    └── InternalError

HTTP status codes for each type live in ``api.errors``.
"""

from typing import Optional


class TaskManagerError(Exception):
    """
    Base exception for all task manager errors.

    Attributes:
        message: Human-readable error description, returned to the caller
        details: Additional context for logs
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(TaskManagerError):
    """Raised when input is missing or malformed."""


class InvalidInputError(ValidationError):
    """Raised when a value cannot be processed (e.g. an empty password)."""


# =============================================================================
# Authentication
# =============================================================================

class AuthError(TaskManagerError):
    """Raised when a request cannot be authenticated."""


class TokenError(AuthError):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    def __init__(self, message: str = "Token expired."):
        super().__init__(message)


class TokenInvalidError(TokenError):
    def __init__(self, message: str = "Invalid token.", reason: str = ""):
        super().__init__(message, details={"reason": reason} if reason else None)


# =============================================================================
# Credentials
# =============================================================================

class AlreadyExistsError(TaskManagerError):
    def __init__(self, message: str = "User already exists"):
        super().__init__(message)


class NotFoundError(TaskManagerError):
    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class InvalidCredentialsError(TaskManagerError):
    def __init__(self, message: str = "Invalid password"):
        super().__init__(message)


# =============================================================================
# Tasks
# =============================================================================

class NotFoundOrForbiddenError(TaskManagerError):
    """
    Raised when a task does not exist or belongs to someone else.

    Both cases share one message so callers cannot discover which task ids exist.
    """

    def __init__(self, task_id: str = ""):
        super().__init__(
            "Task not found or not authorized.",
            details={"task_id": task_id},
        )


class InternalError(TaskManagerError):
    """Unexpected failure; the message is safe to show to the caller."""
