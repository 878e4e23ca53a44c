"""
Reset token store — single-use password reset capabilities.

Tokens are 32 random bytes, hex-encoded (256 bits). A token is valid until
it is consumed or its ``expires_at`` passes, whichever comes first.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from auth.models import PasswordReset
from database.helpers import DEFAULT_STORE_TIMEOUT, SessionStore

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32
DEFAULT_TTL_SECONDS = 3600


def generate_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


class ResetTokenStore(SessionStore):
    def __init__(
        self,
        session: AsyncSession,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        timeout: float = DEFAULT_STORE_TIMEOUT,
    ) -> None:
        super().__init__(session, timeout)
        self._ttl = timedelta(seconds=ttl_seconds)

    async def issue(self, email: str) -> str:
        """Persist a fresh token for ``email`` and return it."""
        now = datetime.now(timezone.utc)
        await self.purge_expired(now)

        token = generate_token()
        self._session.add(
            PasswordReset(
                token=token,
                email=email,
                created_at=now,
                expires_at=now + self._ttl,
            )
        )
        await self._run(self._session.flush(), "insert reset token")
        logger.info("Issued reset token for %s (expires in %ss)", email, int(self._ttl.total_seconds()))
        return token

    async def resolve(self, token: str) -> Optional[str]:
        """Return the email ``token`` authorizes, or ``None`` if unknown or expired."""
        now = datetime.now(timezone.utc)
        result = await self._run(
            self._session.execute(
                select(PasswordReset.email).where(
                    PasswordReset.token == token,
                    PasswordReset.expires_at > now,
                )
            ),
            "resolve reset token",
        )
        return result.scalar_one_or_none()

    async def consume(self, token: str) -> bool:
        """
        Delete ``token``. Returns ``True`` only for the caller that actually
        removed the row, so two concurrent consumers cannot both succeed.
        """
        result = await self._run(
            self._session.execute(
                delete(PasswordReset)
                .where(PasswordReset.token == token)
                .execution_options(synchronize_session=False)
            ),
            "consume reset token",
        )
        return result.rowcount > 0

    async def purge_expired(self, now: Optional[datetime] = None) -> int:
        now = now or datetime.now(timezone.utc)
        result = await self._run(
            self._session.execute(
                delete(PasswordReset)
                .where(PasswordReset.expires_at <= now)
                .execution_options(synchronize_session=False)
            ),
            "purge expired reset tokens",
        )
        if result.rowcount:
            logger.debug("Purged %d expired reset tokens", result.rowcount)
        return result.rowcount
