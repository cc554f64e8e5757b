from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AcademicPeriod


class AcademicPeriodRepository(Protocol):
    def get_by_id(self, period_id: int) -> Optional[AcademicPeriod]:
        raise NotImplementedError

    def get_by_semester(self, *, user_id: int, semester: str) -> Optional[AcademicPeriod]:
        raise NotImplementedError

    def list_for_user(self, *, user_id: int) -> Sequence[AcademicPeriod]:
        raise NotImplementedError

    def upsert(self, *, user_id: int, semester: str, start_date: date, end_date: date) -> int:
        """Create the period for (user, semester) or update its dates. Returns id."""

        raise NotImplementedError

    def mark_completed(self, period_id: int) -> bool:
        raise NotImplementedError

    def delete(self, *, user_id: int, semester: str) -> bool:
        """Holidays of the period go with it; schedules are detached."""

        raise NotImplementedError
