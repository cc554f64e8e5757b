from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Optional

from ..common.datetime_utils import format_hhmm
from ..core.enums import ClassType


@dataclass(frozen=True)
class ScheduledClass:
    class_id: str
    day: str
    subject_id: Optional[int]
    subject_name: str
    class_type: ClassType
    start_time: time
    end_time: time
    room: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.class_id,
            "day": self.day,
            "subjectId": self.subject_id,
            "subject": self.subject_name,
            "classType": self.class_type.value,
            "startTime": format_hhmm(self.start_time),
            "endTime": format_hhmm(self.end_time),
            "room": self.room,
        }


@dataclass(frozen=True)
class Schedule:
    """Weekly timetable for one (user, semester).

    Never edited in place: a new upload creates a new Schedule and the most
    recent one wins.
    """

    schedule_id: int
    user_id: int
    semester: int
    academic_period_id: Optional[int] = None
    classes: tuple[ScheduledClass, ...] = ()
    off_days: frozenset[str] = field(default_factory=frozenset)
    created_at: Optional[datetime] = None

    def classes_on(self, day_name: str) -> list[ScheduledClass]:
        return [c for c in self.classes if c.day == day_name]

    def to_dict(self) -> dict:
        return {
            "id": self.schedule_id,
            "semester": self.semester,
            "academicPeriodId": self.academic_period_id,
            "classes": [c.to_dict() for c in self.classes],
            "offDays": sorted(self.off_days),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
