from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, ClassType


@dataclass(frozen=True)
class AttendanceRecord:
    """One class occurrence. Unique per (user, subject, date, schedule_class_id)."""

    user_id: int
    subject_id: int
    date: date
    status: AttendanceStatus
    subject_name: str = ""
    class_type: ClassType = ClassType.NONE
    schedule_class_id: str = ""
    is_auto_marked: bool = False
    has_preparatory_tag: bool = False
    start_time: str = ""
    end_time: str = ""
    attendance_id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def time_range(self) -> str:
        if self.start_time and self.end_time:
            return f"{self.start_time} - {self.end_time}"
        return ""

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "subjectId": self.subject_id,
            "subjectName": self.subject_name,
            "date": self.date.isoformat(),
            "status": self.status.value,
            "classType": self.class_type.value,
            "scheduleClassId": self.schedule_class_id,
            "isAutoMarked": self.is_auto_marked,
            "hasPreparatoryTag": self.has_preparatory_tag,
            "timeDuration": {"startTime": self.start_time, "endTime": self.end_time},
        }
