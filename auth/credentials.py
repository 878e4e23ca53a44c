"""
Credential store — persisted users keyed by email.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from auth.models import User
from database.helpers import SessionStore
from utils.errors import DuplicateEmail

logger = logging.getLogger(__name__)


class CredentialStore(SessionStore):
    """Reads and writes ``users`` rows. No caching; every call hits the DB."""

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self._run(
            self._session.execute(
                select(User)
                .where(User.email == email)
                .execution_options(populate_existing=True)
            ),
            "find user by email",
        )
        return result.scalar_one_or_none()

    async def create(self, username: str, email: str, password_hash: str) -> User:
        """
        Insert a user.

        The unique index on ``email`` is the final arbiter: a concurrent
        signup that slipped past the caller's lookup fails here with
        ``DuplicateEmail``.
        """
        user = User(username=username, email=email, password_hash=password_hash)
        self._session.add(user)
        try:
            await self._run(self._session.flush(), "insert user")
        except IntegrityError as exc:
            logger.info("Signup rejected by unique index for %s", email)
            raise DuplicateEmail() from exc
        return user

    async def update_password(self, email: str, password_hash: str) -> bool:
        """Replace the stored hash. Returns ``False`` if no user has ``email``."""
        result = await self._run(
            self._session.execute(
                update(User)
                .where(User.email == email)
                .values(password_hash=password_hash)
                .execution_options(synchronize_session=False)
            ),
            "update password",
        )
        return result.rowcount > 0
