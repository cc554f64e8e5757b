from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def create_if_absent(self, record: AttendanceRecord) -> Optional[int]:
        """Insert unless (user, subject, date, schedule_class_id) already exists.

        Returns the new attendance_id, or None when nothing was inserted.
        """

        raise NotImplementedError

    def list_range(
        self,
        *,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: int = 200,
    ) -> Sequence[AttendanceRecord]:
        """Newest first."""

        raise NotImplementedError

    def list_users_inactive_since(self, cutoff: date) -> Sequence[int]:
        """Users whose most recent attendance date is before cutoff."""

        raise NotImplementedError
