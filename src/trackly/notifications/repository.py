from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import NotificationCategory, NotificationType, Priority
from .model import Notification


class NotificationRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        title: str,
        message: str,
        type: NotificationType,
        category: NotificationCategory,
        priority: Priority,
    ) -> int:
        raise NotImplementedError

    def get_for_user(self, *, user_id: int, notification_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def list_for_user(self, *, user_id: int, unread_only: bool = False, limit: int = 50) -> Sequence[Notification]:
        """Newest first."""

        raise NotImplementedError

    def list_unread_since(self, *, user_id: int, since: datetime) -> Sequence[Notification]:
        raise NotImplementedError

    def count_unread(self, *, user_id: int) -> int:
        raise NotImplementedError

    def mark_read(self, *, user_id: int, notification_id: int) -> bool:
        raise NotImplementedError

    def mark_all_read(self, *, user_id: int) -> int:
        raise NotImplementedError

    def delete(self, *, user_id: int, notification_id: int) -> bool:
        raise NotImplementedError

    def delete_read(self, *, user_id: int) -> int:
        raise NotImplementedError
