"""Auth-related ORM models, re-exported from the database package."""

from database.models import PasswordReset, User  # noqa: F401

__all__ = ["PasswordReset", "User"]
