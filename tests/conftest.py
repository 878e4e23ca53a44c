"""
Shared fixtures: throwaway SQLite databases and a recording mail sender.
"""

from __future__ import annotations

import re
from typing import List, Tuple

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from auth.credentials import CredentialStore
from auth.notifications import NotificationSender
from auth.service import AuthService
from auth.tokens import ResetTokenStore
from config.settings import Settings
from database.session import build_engine, build_session_factory, create_tables

_TOKEN_RE = re.compile(r"token=([0-9a-f]{64})")


class RecordingSender(NotificationSender):
    """Keeps every message instead of sending it."""

    def __init__(self) -> None:
        self.sent: List[Tuple[str, str, str]] = []

    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        self.sent.append((to_address, subject, html_body))

    def last_token(self) -> str:
        match = _TOKEN_RE.search(self.sent[-1][2])
        assert match, "no reset token in last message"
        return match.group(1)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        bcrypt_rounds=4,
        email_user="",
        email_pass="",
        reset_link_base="http://localhost:3000/reset-password",
    )


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest_asyncio.fixture
async def session(settings):
    engine = build_engine(settings)
    await create_tables(engine)
    factory = build_session_factory(engine)
    async with factory() as db:
        yield db
    await engine.dispose()


@pytest.fixture
def auth_service(session, sender, settings) -> AuthService:
    return AuthService(
        credentials=CredentialStore(session),
        tokens=ResetTokenStore(session, ttl_seconds=settings.reset_token_ttl_seconds),
        notifier=sender,
        reset_link_base=settings.reset_link_base,
        bcrypt_rounds=settings.bcrypt_rounds,
        notification_timeout=1.0,
    )


@pytest.fixture
def client(settings, sender):
    from main import create_app

    app = create_app(settings, notifier=sender)
    with TestClient(app) as test_client:
        yield test_client
