from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import ClassType


def empty_class_type_stats() -> dict[str, dict[str, int]]:
    return {t.value: {"total": 0, "attended": 0} for t in ClassType.tracked()}


@dataclass(frozen=True)
class Subject:
    """Domain entity: a subject with its derived attendance counters.

    Counters are bumped as records are created and never recomputed from the
    attendance table.
    """

    subject_id: int
    user_id: int
    name: str
    code: str
    class_type: ClassType
    semester: int
    total_classes: int = 0
    attended_classes: int = 0
    class_type_stats: dict[str, dict[str, int]] = field(default_factory=empty_class_type_stats)
    created_at: Optional[datetime] = None

    @property
    def attendance_percentage(self) -> float:
        if self.total_classes == 0:
            return 100.0
        return self.attended_classes / self.total_classes * 100

    @property
    def is_preparatory(self) -> bool:
        return self.class_type == ClassType.PREPARATORY

    def to_dict(self) -> dict:
        return {
            "id": self.subject_id,
            "name": self.name,
            "code": self.code,
            "classType": self.class_type.value,
            "semester": self.semester,
            "totalClasses": self.total_classes,
            "attendedClasses": self.attended_classes,
            "classTypeStats": self.class_type_stats,
            "attendancePercentage": round(self.attendance_percentage, 2),
        }
