"""
FastAPI dependencies for authentication.

Builds a request-scoped ``AuthService`` from the per-request DB session
and the collaborators ``create_app`` placed on ``app.state``.
"""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.credentials import CredentialStore
from auth.service import AuthService
from auth.tokens import ResetTokenStore
from config.settings import Settings
from database.session import get_db_session


async def get_auth_service(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
) -> AuthService:
    settings: Settings = request.app.state.settings
    return AuthService(
        credentials=CredentialStore(session, timeout=settings.store_timeout_seconds),
        tokens=ResetTokenStore(
            session,
            ttl_seconds=settings.reset_token_ttl_seconds,
            timeout=settings.store_timeout_seconds,
        ),
        notifier=request.app.state.notifier,
        reset_link_base=settings.reset_link_base,
        bcrypt_rounds=settings.bcrypt_rounds,
        notification_timeout=settings.notification_timeout_seconds,
    )
