"""Domain-specific exception types.

Each error carries the HTTP status the API layer answers with.
"""

from typing import Any, Optional


class DaybookError(Exception):
    """Base application error."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DaybookError):
    """Raised when a request carries missing or invalid fields."""

    status_code = 400


class NotFoundError(DaybookError):
    """Raised when an activity, category or cache entry does not exist."""

    status_code = 404


class ConflictError(DaybookError):
    """Raised when a category or subcategory name is already taken."""

    status_code = 409

    def __init__(self, message: str, existing: Optional[Any] = None):
        super().__init__(message)
        self.existing = existing


class AuthError(DaybookError):
    """Raised for a missing, invalid or revoked token, or a wrong password."""

    status_code = 401
