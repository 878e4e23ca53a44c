"""
Notification senders — how reset links reach the user.

``NotificationSender`` is the boundary the auth service depends on;
``SmtpNotificationSender`` is the production transport and
``LoggingNotificationSender`` stands in when no mail credentials are set.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from html import escape

import aiosmtplib

from config.settings import Settings
from utils.errors import NotificationFailure

logger = logging.getLogger(__name__)

RESET_SUBJECT = "Password Reset Request"


def build_reset_email(reset_link: str) -> str:
    """HTML body carrying the reset link."""
    link = escape(reset_link, quote=True)
    return (
        "<p>Click the link below to reset your password:</p>"
        f'<a href="{link}">{link}</a>'
    )


class NotificationSender(ABC):
    """Abstract outbound message channel."""

    @abstractmethod
    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        """
        Deliver one HTML message.

        Raises
        ------
        NotificationFailure
            If the message could not be handed to the transport.
        """
        ...


class SmtpNotificationSender(NotificationSender):
    """Sends mail over SMTP with STARTTLS, e.g. a Gmail app password."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_name: str = "Support Team",
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._from_name = from_name
        self._timeout = timeout

    def _build_message(self, to_address: str, subject: str, html_body: str) -> MIMEMultipart:
        mime = MIMEMultipart("alternative")
        mime["to"] = to_address
        mime["from"] = formataddr((self._from_name, self._username))
        mime["subject"] = subject
        mime.attach(MIMEText(html_body, "html"))
        return mime

    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        message = self._build_message(to_address, subject, html_body)
        try:
            await aiosmtplib.send(
                message,
                hostname=self._host,
                port=self._port,
                username=self._username,
                password=self._password,
                start_tls=True,
                timeout=self._timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.error("SMTP delivery to %s failed: %s", to_address, exc)
            raise NotificationFailure() from exc
        logger.info("send_email → to=%s  subject=%s", to_address, subject)


class LoggingNotificationSender(NotificationSender):
    """Development fallback: logs the message instead of sending it."""

    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        logger.warning(
            "Mail transport not configured. Message for %s (%s): %s",
            to_address,
            subject,
            html_body,
        )


def build_sender(settings: Settings) -> NotificationSender:
    """Pick the transport ``settings`` supports."""
    if not settings.smtp_configured:
        logger.warning("EMAIL_USER / EMAIL_PASS not set — reset links will only be logged")
        return LoggingNotificationSender()
    return SmtpNotificationSender(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.email_user,
        password=settings.email_pass,
        from_name=settings.mail_from_name,
        timeout=settings.notification_timeout_seconds,
    )
