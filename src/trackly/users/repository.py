from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import DigestFrequency
from .model import NotificationPreferences, User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, name: str, email: str, password_hash: str, current_semester: int) -> int:
        raise NotImplementedError

    def set_auto_attendance(self, user_id: int, *, enabled: bool) -> bool:
        raise NotImplementedError

    def set_pdf_schedule_path(self, user_id: int, *, path: Optional[str]) -> bool:
        raise NotImplementedError

    def update_profile(self, user_id: int, *, name: str, current_semester: int) -> bool:
        raise NotImplementedError

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        """Store a new hash and drop any pending reset token."""

        raise NotImplementedError

    def set_reset_token(self, user_id: int, *, token: str, expires_at: datetime) -> bool:
        raise NotImplementedError

    def get_by_reset_token(self, token: str) -> Optional[User]:
        raise NotImplementedError

    def update_preferences(self, user_id: int, prefs: NotificationPreferences) -> bool:
        raise NotImplementedError

    def mark_digest_sent(self, user_id: int, *, sent_at: datetime) -> bool:
        raise NotImplementedError

    def list_by_digest_frequency(self, frequency: DigestFrequency) -> Sequence[User]:
        """Users with email notifications enabled at the given frequency."""

        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError
