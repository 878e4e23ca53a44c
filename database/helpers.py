"""
Database helper functions shared by the stores and repositories.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from utils.errors import StoreUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_STORE_TIMEOUT = 10.0


async def guarded(op: Awaitable[T], what: str, timeout: float = DEFAULT_STORE_TIMEOUT) -> T:
    """
    Await a database operation, bounding it with ``timeout`` seconds.

    Any ``SQLAlchemyError`` or timeout is logged and re-raised as
    ``StoreUnavailable``. ``IntegrityError`` passes through untouched so
    stores can map constraint violations onto domain errors.
    """
    try:
        return await asyncio.wait_for(op, timeout=timeout)
    except asyncio.TimeoutError as exc:
        logger.error("Store operation timed out after %.1fs: %s", timeout, what)
        raise StoreUnavailable() from exc
    except IntegrityError:
        raise
    except SQLAlchemyError as exc:
        logger.error("Store operation failed: %s — %s", what, exc)
        raise StoreUnavailable() from exc


class SessionStore:
    """Base for persistence classes that operate on one request's session."""

    def __init__(self, session: AsyncSession, timeout: float = DEFAULT_STORE_TIMEOUT) -> None:
        self._session = session
        self._timeout = timeout

    async def _run(self, op: Awaitable[T], what: str) -> T:
        return await guarded(op, what, self._timeout)

    async def commit(self) -> None:
        """Commit the request's transaction; failures become ``StoreUnavailable``."""
        await self._run(self._session.commit(), "commit")

    async def rollback(self) -> None:
        await self._run(self._session.rollback(), "rollback")
