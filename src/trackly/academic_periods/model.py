from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..subjects.model import Subject


@dataclass(frozen=True)
class AcademicPeriod:
    """Semester date window bounding auto-attendance. start_date <= end_date."""

    academic_period_id: int
    user_id: int
    semester: str
    start_date: date
    end_date: date
    is_completed: bool = False
    created_at: Optional[datetime] = None

    def has_ended(self, today: date) -> bool:
        # end_date itself is still part of the period
        return today > self.end_date

    def to_dict(self) -> dict:
        return {
            "id": self.academic_period_id,
            "semester": self.semester,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "isCompleted": self.is_completed,
        }


@dataclass(frozen=True)
class ArchivedPeriod:
    """A completed period with the attendance totals of its subjects."""

    period: AcademicPeriod
    subjects: tuple[Subject, ...] = ()

    @property
    def attended_classes(self) -> int:
        return sum(s.attended_classes for s in self.subjects)

    @property
    def total_classes(self) -> int:
        return sum(s.total_classes for s in self.subjects)

    def to_dict(self) -> dict:
        return {
            "semester": self.period.semester,
            "startDate": self.period.start_date.isoformat(),
            "endDate": self.period.end_date.isoformat(),
            "totalAttended": self.attended_classes,
            "totalClasses": self.total_classes,
            "overallPercentage": _percent(self.attended_classes, self.total_classes),
            "subjects": [
                {
                    "name": s.name,
                    "code": s.code,
                    "classType": s.class_type.value,
                    "attendedClasses": s.attended_classes,
                    "totalClasses": s.total_classes,
                    "percentage": _percent(s.attended_classes, s.total_classes),
                }
                for s in self.subjects
            ],
        }


def _percent(attended: int, total: int) -> int:
    return round(attended / total * 100) if total else 0
