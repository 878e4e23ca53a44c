"""
AuthService — signup, login, forgot-password and reset-password.

Each flow is a short linear sequence with no retries: the first failure
is raised to the caller and ends the request. The service owns no state;
everything persistent lives behind the credential and token stores.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional
from urllib.parse import urlencode

from auth.credentials import CredentialStore
from auth.notifications import RESET_SUBJECT, NotificationSender, build_reset_email
from auth.password import DEFAULT_ROUNDS, burn_verify, hash_password, verify_password
from auth.tokens import ResetTokenStore
from utils.errors import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidOrExpiredToken,
    MissingFields,
    NotFound,
    NotificationFailure,
)

logger = logging.getLogger(__name__)


def _require(message: str, *values: Optional[str]) -> None:
    if not all(values):
        raise MissingFields(message)


class AuthService:
    def __init__(
        self,
        credentials: CredentialStore,
        tokens: ResetTokenStore,
        notifier: NotificationSender,
        reset_link_base: str,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
        notification_timeout: float = 10.0,
    ) -> None:
        self._credentials = credentials
        self._tokens = tokens
        self._notifier = notifier
        self._reset_link_base = reset_link_base
        self._rounds = bcrypt_rounds
        self._notification_timeout = notification_timeout

    def reset_link(self, token: str) -> str:
        sep = "&" if "?" in self._reset_link_base else "?"
        return f"{self._reset_link_base}{sep}{urlencode({'token': token})}"

    async def signup(self, username: str, email: str, password: str) -> None:
        _require("All fields are required.", username, email, password)

        if await self._credentials.find_by_email(email) is not None:
            raise DuplicateEmail()

        user = await self._credentials.create(
            username=username,
            email=email,
            password_hash=hash_password(password, self._rounds),
        )
        await self._credentials.commit()
        logger.info("Registered user %s (%s)", username, user.id)

    async def login(self, email: str, password: str) -> None:
        """Check credentials. Unknown email and wrong password fail identically."""
        _require("Email and password are required.", email, password)

        user = await self._credentials.find_by_email(email)
        if user is None:
            burn_verify(password, self._rounds)
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            raise InvalidCredentials()

        logger.info("Login: %s (%s)", user.username, user.id)

    async def forgot_password(self, email: str) -> str:
        """
        Issue a reset token for ``email`` and mail the link.

        The token is committed before the mail goes out so no write lock is
        held during delivery. If the mail cannot be delivered the token is
        revoked (and that committed) before ``NotificationFailure`` is
        raised, so no undelivered token stays usable. Returns the token.
        """
        _require("Email is required.", email)

        if await self._credentials.find_by_email(email) is None:
            raise NotFound("Email not found!")

        token = await self._tokens.issue(email)
        await self._tokens.commit()
        link = self.reset_link(token)
        try:
            await asyncio.wait_for(
                self._notifier.send(email, RESET_SUBJECT, build_reset_email(link)),
                timeout=self._notification_timeout,
            )
        except (NotificationFailure, asyncio.TimeoutError) as exc:
            logger.error("Reset mail to %s not delivered (%r); revoking token", email, exc)
            await self._tokens.consume(token)
            await self._tokens.commit()
            raise NotificationFailure() from exc

        logger.info("Password reset link sent to %s", email)
        return token

    async def reset_password(self, token: str, password: str) -> None:
        """
        Set a new password using a reset token.

        The password is updated before the token is consumed; if
        consumption then finds the token already gone (a concurrent reset
        won), the update is rolled back and ``InvalidOrExpiredToken`` is
        raised.
        """
        _require("Token and password are required.", token, password)

        email = await self._tokens.resolve(token)
        if email is None:
            raise InvalidOrExpiredToken()

        updated = await self._credentials.update_password(
            email, hash_password(password, self._rounds)
        )
        if not updated:
            logger.warning("Reset token for %s points at a missing user", email)
            raise InvalidOrExpiredToken()

        if not await self._tokens.consume(token):
            await self._tokens.rollback()
            raise InvalidOrExpiredToken()
        await self._tokens.commit()

        logger.info("Password reset for %s", email)
