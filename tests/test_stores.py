"""
Tests for the credential and reset-token stores against SQLite.
"""

import asyncio

import pytest
from sqlalchemy.exc import OperationalError

from auth.credentials import CredentialStore
from auth.tokens import ResetTokenStore
from database.helpers import guarded
from utils.errors import DuplicateEmail, StoreUnavailable


class TestCredentialStore:
    @pytest.mark.asyncio
    async def test_create_and_find(self, session):
        store = CredentialStore(session)
        user = await store.create("alice", "a@x.com", "digest")
        assert user.id is not None

        found = await store.find_by_email("a@x.com")
        assert found is not None
        assert found.username == "alice"
        assert await store.find_by_email("nobody@x.com") is None

    @pytest.mark.asyncio
    async def test_unique_index_rejects_duplicate_email(self, session):
        store = CredentialStore(session)
        await store.create("alice", "a@x.com", "digest")
        with pytest.raises(DuplicateEmail):
            await store.create("alice2", "a@x.com", "other")

    @pytest.mark.asyncio
    async def test_update_password(self, session):
        store = CredentialStore(session)
        await store.create("alice", "a@x.com", "old")

        assert await store.update_password("a@x.com", "new") is True
        assert (await store.find_by_email("a@x.com")).password_hash == "new"
        assert await store.update_password("nobody@x.com", "new") is False


class TestResetTokenStore:
    @pytest.mark.asyncio
    async def test_issue_resolve_consume(self, session):
        store = ResetTokenStore(session)
        token = await store.issue("a@x.com")

        assert len(token) == 64
        int(token, 16)
        assert await store.resolve(token) == "a@x.com"
        # resolve does not consume
        assert await store.resolve(token) == "a@x.com"

        assert await store.consume(token) is True
        assert await store.resolve(token) is None
        assert await store.consume(token) is False

    @pytest.mark.asyncio
    async def test_tokens_are_unique(self, session):
        store = ResetTokenStore(session)
        first = await store.issue("a@x.com")
        second = await store.issue("a@x.com")
        assert first != second
        assert await store.resolve(first) == "a@x.com"
        assert await store.resolve(second) == "a@x.com"

    @pytest.mark.asyncio
    async def test_expired_token_does_not_resolve(self, session):
        store = ResetTokenStore(session, ttl_seconds=-1)
        token = await store.issue("a@x.com")
        assert await store.resolve(token) is None

    @pytest.mark.asyncio
    async def test_issue_purges_expired_rows(self, session):
        expired = ResetTokenStore(session, ttl_seconds=-1)
        await expired.issue("a@x.com")

        fresh = ResetTokenStore(session)
        assert await fresh.purge_expired() == 1
        assert await fresh.purge_expired() == 0

    @pytest.mark.asyncio
    async def test_unknown_token(self, session):
        store = ResetTokenStore(session)
        assert await store.resolve("0" * 64) is None
        assert await store.consume("0" * 64) is False


class TestGuarded:
    @pytest.mark.asyncio
    async def test_sqlalchemy_error_becomes_store_unavailable(self):
        async def broken():
            raise OperationalError("SELECT 1", {}, Exception("db down"))

        with pytest.raises(StoreUnavailable) as info:
            await guarded(broken(), "probe")
        assert info.value.status_code == 500
        assert info.value.message == "An error occurred."

    @pytest.mark.asyncio
    async def test_timeout_becomes_store_unavailable(self):
        with pytest.raises(StoreUnavailable):
            await guarded(asyncio.sleep(1), "slow probe", timeout=0.01)

    @pytest.mark.asyncio
    async def test_passes_result_through(self):
        async def ok():
            return 42

        assert await guarded(ok(), "probe") == 42
