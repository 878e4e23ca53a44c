"""
Tests for the notification senders.
"""

from unittest.mock import AsyncMock, patch

import aiosmtplib
import pytest

from auth.notifications import (
    LoggingNotificationSender,
    SmtpNotificationSender,
    build_reset_email,
    build_sender,
)
from config.settings import Settings
from utils.errors import NotificationFailure


def _smtp_sender() -> SmtpNotificationSender:
    return SmtpNotificationSender(
        host="smtp.example.com",
        port=587,
        username="support@example.com",
        password="secret",
    )


class TestResetEmail:
    def test_link_appears_in_body(self):
        link = "http://localhost:3000/reset-password?token=abc"
        body = build_reset_email(link)
        assert "reset your password" in body
        assert 'href="http://localhost:3000/reset-password?token=abc"' in body

    def test_link_is_escaped(self):
        body = build_reset_email('http://x/"><script>')
        assert "<script>" not in body


class TestSmtpNotificationSender:
    @pytest.mark.asyncio
    async def test_send_uses_starttls_and_login(self):
        with patch("auth.notifications.aiosmtplib.send", new_callable=AsyncMock) as send:
            await _smtp_sender().send("a@x.com", "Subject", "<p>hi</p>")

        send.assert_awaited_once()
        message = send.call_args.args[0]
        kwargs = send.call_args.kwargs
        assert kwargs["hostname"] == "smtp.example.com"
        assert kwargs["port"] == 587
        assert kwargs["username"] == "support@example.com"
        assert kwargs["password"] == "secret"
        assert kwargs["start_tls"] is True
        assert kwargs["timeout"] == 10.0
        assert message["to"] == "a@x.com"
        assert message["from"] == "Support Team <support@example.com>"
        assert message["subject"] == "Subject"

    @pytest.mark.asyncio
    async def test_transport_error_becomes_notification_failure(self):
        failure = aiosmtplib.SMTPAuthenticationError(535, "bad credentials")
        with patch("auth.notifications.aiosmtplib.send", new_callable=AsyncMock, side_effect=failure):
            with pytest.raises(NotificationFailure):
                await _smtp_sender().send("a@x.com", "Subject", "<p>hi</p>")

    @pytest.mark.asyncio
    async def test_connection_refused_becomes_notification_failure(self):
        with patch(
            "auth.notifications.aiosmtplib.send",
            new_callable=AsyncMock,
            side_effect=ConnectionRefusedError(),
        ):
            with pytest.raises(NotificationFailure):
                await _smtp_sender().send("a@x.com", "Subject", "<p>hi</p>")


class TestBuildSender:
    def test_without_credentials_logs_only(self):
        settings = Settings(email_user="", email_pass="")
        assert isinstance(build_sender(settings), LoggingNotificationSender)

    def test_with_credentials_uses_smtp(self):
        settings = Settings(email_user="support@example.com", email_pass="secret")
        assert isinstance(build_sender(settings), SmtpNotificationSender)

    @pytest.mark.asyncio
    async def test_logging_sender_does_not_raise(self):
        await LoggingNotificationSender().send("a@x.com", "Subject", "<p>hi</p>")
