"""Email utility — delivers transactional emails via SMTP (TLS)."""
from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List, Tuple

from userauth.core.config import settings

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """The message could not be handed to the mail server."""


class Notifier:
    """Delivers a message to an email address; raises NotificationError on failure."""

    def send(self, to: str, subject: str, body: str) -> None:
        raise NotImplementedError


class SmtpNotifier(Notifier):
    """Notifier backed by an authenticated SMTP TLS connection."""

    def __init__(
        self,
        host: str,
        port: int,
        user: str = "",
        password: str = "",
        sender: str = "",
        timeout: int = 15,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender or user
        self.timeout = timeout

    def _build_smtp_connection(self) -> smtplib.SMTP:
        """Open an authenticated SMTP TLS connection."""
        conn = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        conn.ehlo()
        conn.starttls()
        conn.ehlo()
        if self.user:
            conn.login(self.user, self.password)
        return conn

    def send(self, to: str, subject: str, body: str) -> None:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to
        msg.attach(MIMEText(body, "plain", "utf-8"))

        try:
            with self._build_smtp_connection() as conn:
                conn.sendmail(self.sender, [to], msg.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(f"[Email] Failed to send '{subject}' to {to}: {exc}")
            raise NotificationError(str(exc)) from exc

        logger.info(f"[Email] Sent '{subject}' → {to}")


class OutboxNotifier(Notifier):
    """Keeps messages in memory instead of sending them; for local runs and tests."""

    def __init__(self):
        self.outbox: List[Tuple[str, str, str]] = []

    def send(self, to: str, subject: str, body: str) -> None:
        self.outbox.append((to, subject, body))
        logger.info(f"[Email] Queued '{subject}' → {to} (outbox)")


def build_notifier() -> Notifier:
    """SMTP notifier when a host is configured, otherwise the in-memory outbox"""
    if not settings.SMTP_HOST:
        logger.warning("SMTP_HOST is empty, emails are kept in the in-memory outbox")
        return OutboxNotifier()
    return SmtpNotifier(
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        user=settings.SMTP_USER,
        password=settings.SMTP_PASS,
        sender=settings.EMAIL_FROM,
        timeout=settings.SMTP_TIMEOUT,
    )


# ── Convenience senders ───────────────────────────────────────────────────────

def send_otp_email(notifier: Notifier, to: str, otp: str) -> None:
    """Send a 6-digit OTP for email verification."""
    notifier.send(to, "Your OTP Code", f"Your OTP is: {otp}")
