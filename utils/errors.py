"""
Domain error taxonomy.

Every error carries the HTTP status and the public message the API layer
renders; internal details go to the log, never into ``message``.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for failures that map onto a JSON error envelope."""

    status_code: int = 500
    default_message: str = "An error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFields(AppError):
    status_code = 400
    default_message = "All fields are required."


class DuplicateEmail(AppError):
    status_code = 400
    default_message = "Email already exists!"


class InvalidCredentials(AppError):
    """Shared by unknown-email and wrong-password so neither is revealed."""

    status_code = 400
    default_message = "Invalid email or password"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found!"


class InvalidOrExpiredToken(AppError):
    status_code = 400
    default_message = "Invalid or expired token!"


class StoreUnavailable(AppError):
    status_code = 500
    default_message = "An error occurred."


class NotificationFailure(AppError):
    status_code = 500
    default_message = "Could not send password reset email."
