from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def list_for_user(self, *, user_id: int) -> Sequence[Holiday]:
        raise NotImplementedError

    def list_for_period(self, *, academic_period_id: int) -> Sequence[Holiday]:
        raise NotImplementedError

    def create_if_absent(self, *, user_id: int, academic_period_id: int, holiday_date: date, reason: str) -> Optional[int]:
        """Insert a holiday; returns None when the date already exists for the period."""

        raise NotImplementedError

    def get_for_user(self, *, user_id: int, holiday_id: int) -> Optional[Holiday]:
        raise NotImplementedError

    def delete(self, *, user_id: int, holiday_id: int) -> bool:
        raise NotImplementedError
