from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_ATTENDANCE_THRESHOLD
from ..core.enums import DigestFrequency


@dataclass(frozen=True)
class NotificationPreferences:
    """Email delivery settings for a user."""

    email_enabled: bool = False
    frequency: DigestFrequency = DigestFrequency.DAILY
    muted_categories: tuple[str, ...] = ()
    attendance_threshold: int = DEFAULT_ATTENDANCE_THRESHOLD
    last_digest_sent: Optional[datetime] = None

    def wants_instant_email(self, category: str) -> bool:
        return (
            self.email_enabled
            and self.frequency == DigestFrequency.INSTANT
            and category not in self.muted_categories
        )

    def to_dict(self) -> dict:
        return {
            "emailNotifications": {
                "enabled": self.email_enabled,
                "frequency": self.frequency.value,
                "mutedTypes": list(self.muted_categories),
                "lastDigestSent": self.last_digest_sent.isoformat() if self.last_digest_sent else None,
            },
            "attendanceThreshold": self.attendance_threshold,
        }


@dataclass(frozen=True)
class User:
    """Domain entity: a student account.

    Plain data object, no DB access code.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    current_semester: int = 1
    auto_attendance_enabled: bool = False
    pdf_schedule_path: Optional[str] = None
    preferences: NotificationPreferences = field(default_factory=NotificationPreferences)
    reset_token: Optional[str] = None
    reset_token_expires: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "currentSemester": self.current_semester,
            "autoAttendanceEnabled": self.auto_attendance_enabled,
            "pdfSchedule": self.pdf_schedule_path,
            "notificationPreferences": self.preferences.to_dict(),
        }
