from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import NOTIFICATION_MESSAGE_MAX, NOTIFICATION_TITLE_MAX
from ..core.enums import DigestFrequency, NotificationCategory, NotificationType, Priority
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .email_service import EmailService
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DigestSummary:
    sent: int
    errors: int

    @property
    def message(self) -> str:
        return f"Sent {self.sent} digest(s), {self.errors} error(s)"


def _truncate(value: str, limit: int) -> str:
    return value if len(value) <= limit else value[: limit - 3] + "..."


class NotificationService:
    """Use case: in-app notifications with optional email delivery."""

    def __init__(self, notifications: NotificationRepository, *, users: UserRepository, email: EmailService):
        self._notifications = notifications
        self._users = users
        self._email = email

    def create_notification(
        self,
        user_id: int,
        *,
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
        category: NotificationCategory = NotificationCategory.SYSTEM,
        priority: Priority = Priority.MEDIUM,
    ) -> Notification:
        """Store a notification and mail it right away for instant-email users."""

        if not title or not message:
            raise ValidationError("Notification title and message are required")

        title = _truncate(title, NOTIFICATION_TITLE_MAX)
        message = _truncate(message, NOTIFICATION_MESSAGE_MAX)
        notification_id = self._notifications.create(
            user_id=int(user_id), title=title, message=message, type=type, category=category, priority=priority
        )
        notification = Notification(
            notification_id=notification_id,
            user_id=int(user_id),
            title=title,
            message=message,
            type=type,
            category=category,
            priority=priority,
            created_at=now_local(),
        )

        user = self._users.get_by_id(int(user_id))
        if user and user.preferences.wants_instant_email(category.value):
            result = self._email.send_notification_email(notification, user.email)
            if not result.success:
                logger.warning("Instant email for notification %s failed: %s", notification_id, result.error)

        return notification

    def list(self, user_id: int, *, unread_only: bool = False, limit: Any = 50) -> Sequence[Notification]:
        try:
            limit = max(1, min(int(limit), 200))
        except (TypeError, ValueError):
            raise ValidationError("limit must be a number")
        return self._notifications.list_for_user(user_id=int(user_id), unread_only=unread_only, limit=limit)

    def unread_count(self, user_id: int) -> int:
        return self._notifications.count_unread(user_id=int(user_id))

    def mark_read(self, user_id: int, notification_id: int) -> Notification:
        notification = self._notifications.get_for_user(user_id=int(user_id), notification_id=int(notification_id))
        if not notification:
            raise NotFoundError("Notification not found")
        if not notification.read:
            self._notifications.mark_read(user_id=int(user_id), notification_id=int(notification_id))
        return replace(notification, read=True)

    def clear_read(self, user_id: int) -> int:
        removed = self._notifications.delete_read(user_id=int(user_id))
        logger.info("Cleared %d read notification(s) for user %s", removed, user_id)
        return removed

    def mark_all_read(self, user_id: int) -> int:
        return self._notifications.mark_all_read(user_id=int(user_id))

    def delete(self, user_id: int, notification_id: int) -> None:
        if not self._notifications.delete(user_id=int(user_id), notification_id=int(notification_id)):
            raise NotFoundError("Notification not found")

    def send_digests(self, frequency: DigestFrequency, *, now: Optional[datetime] = None) -> DigestSummary:
        """Mail every opted-in user their unread notifications from the last day or week."""

        frequency = DigestFrequency(frequency)
        if frequency == DigestFrequency.INSTANT:
            raise ValidationError("Digests are only sent daily or weekly")

        now = now or now_local()
        since = now - timedelta(days=1 if frequency == DigestFrequency.DAILY else 7)

        sent = errors = 0
        for user in self._users.list_by_digest_frequency(frequency):
            unread = self._notifications.list_unread_since(user_id=user.user_id, since=since)
            if not unread:
                continue
            result = self._email.send_digest(user.email, unread, frequency)
            if result.success:
                self._users.mark_digest_sent(user.user_id, sent_at=now)
                sent += 1
            else:
                logger.warning("Digest for user %s failed: %s", user.user_id, result.error)
                errors += 1

        summary = DigestSummary(sent=sent, errors=errors)
        logger.info("%s digest run: %s", frequency.value.capitalize(), summary.message)
        return summary
