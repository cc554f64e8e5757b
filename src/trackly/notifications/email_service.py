from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Mapping, Optional, Sequence

from ..core.enums import DigestFrequency
from .model import Notification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailResult:
    success: bool
    error: Optional[str] = None


class EmailService:
    """Plain-text mail over SMTP.

    Sending is a no-op (returning a failed EmailResult) until EMAIL_USER and
    EMAIL_PASSWORD are configured. Failures are logged and reported, never raised.
    """

    def __init__(self, smtp_config: Mapping[str, object]):
        self._host = str(smtp_config.get("host") or "")
        self._port = int(smtp_config.get("port") or 587)
        self._user = str(smtp_config.get("user") or "")
        self._password = str(smtp_config.get("password") or "")
        self._use_tls = bool(smtp_config.get("use_tls", True))
        self._sender_name = str(smtp_config.get("sender_name") or "TrackLy")

    @property
    def is_configured(self) -> bool:
        return bool(self._host and self._user and self._password)

    def send_email(self, recipient: str, subject: str, body: str) -> EmailResult:
        if not self.is_configured:
            logger.warning("Email not sent to %s: SMTP credentials are not configured", recipient)
            return EmailResult(False, "Email service not configured")
        if not recipient:
            return EmailResult(False, "Recipient email is required")

        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = formataddr((self._sender_name, self._user))
        message["To"] = recipient
        message.set_content(body)

        try:
            with smtplib.SMTP(self._host, self._port, timeout=10) as server:
                if self._use_tls:
                    server.starttls()
                server.login(self._user, self._password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Failed to send email to %s: %s", recipient, exc)
            return EmailResult(False, str(exc))

        logger.info("Email sent to %s: %s", recipient, subject)
        return EmailResult(True)

    def send_notification_email(self, notification: Notification, recipient: str) -> EmailResult:
        return self.send_email(recipient, notification.title, notification.message)

    def send_digest(
        self, recipient: str, notifications: Sequence[Notification], frequency: DigestFrequency
    ) -> EmailResult:
        if not notifications:
            return EmailResult(False, "No notifications to send")

        timeframe = "Today" if frequency == DigestFrequency.DAILY else "This Week"
        subject = f"TrackLy {frequency.value.capitalize()} Digest"

        lines = [f"Here's a summary of your notifications from {timeframe}:", ""]
        for n in notifications:
            lines.append(n.title)
            lines.append(n.message)
            if n.created_at:
                lines.append(n.created_at.strftime("%Y-%m-%d %H:%M"))
            lines.append("")
        lines.append("Log in to your TrackLy account to view more details.")

        return self.send_email(recipient, subject, "\n".join(lines))
