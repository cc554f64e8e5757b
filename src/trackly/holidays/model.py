from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Holiday:
    """An excluded calendar date. Unique per (academic_period_id, date)."""

    holiday_id: int
    user_id: int
    academic_period_id: int
    date: date
    reason: str = ""

    @property
    def day(self) -> int:
        return self.date.day

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def year(self) -> int:
        return self.date.year

    def to_dict(self) -> dict:
        return {
            "id": self.holiday_id,
            "academicPeriodId": self.academic_period_id,
            "date": self.date.isoformat(),
            "day": self.day,
            "month": self.month,
            "year": self.year,
            "reason": self.reason,
        }
