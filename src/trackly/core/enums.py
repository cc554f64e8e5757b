from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance outcome stored for a single class occurrence."""

    PRESENT = "present"
    ABSENT = "absent"


class ClassType(str, Enum):
    """Subject/class kinds that carry their own counters on a Subject."""

    LECTURE = "lecture"
    LAB = "lab"
    TUTORIAL = "tutorial"
    SEMINAR = "seminar"
    WORKSHOP = "workshop"
    SPORTS = "sports"
    YOGA = "yoga"
    PREPARATORY = "preparatory"
    NONE = "none"

    @classmethod
    def tracked(cls) -> tuple["ClassType", ...]:
        """Types that get a per-type counter on Subject.class_type_stats."""
        return (cls.LECTURE, cls.LAB, cls.TUTORIAL, cls.SEMINAR, cls.WORKSHOP, cls.SPORTS, cls.YOGA)

    @classmethod
    def normalize(cls, value: str | None) -> "ClassType":
        v = (value or "").strip().lower()
        aliases = {
            "laboratory": cls.LAB,
            "practical": cls.LAB,
            "tut": cls.TUTORIAL,
            "lec": cls.LECTURE,
            "theory": cls.LECTURE,
        }
        if v in aliases:
            return aliases[v]
        try:
            return cls(v)
        except ValueError:
            return cls.NONE


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ALERT = "alert"
    REMINDER = "reminder"


class NotificationCategory(str, Enum):
    SYSTEM = "system"
    ATTENDANCE = "attendance"
    TODO = "todo"
    POINTS = "points"
    ACHIEVEMENT = "achievement"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DigestFrequency(str, Enum):
    """How a user wants email notifications delivered."""

    INSTANT = "instant"
    DAILY = "daily"
    WEEKLY = "weekly"
