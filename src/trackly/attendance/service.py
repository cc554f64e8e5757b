from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local, parse_hhmm, parse_iso_date
from ..common.validators import require_fields
from ..core.constants import DEFAULT_HISTORY_LIMIT, REMINDER_INACTIVITY_DAYS
from ..core.enums import AttendanceStatus, ClassType, NotificationCategory, NotificationType, Priority
from ..core.exceptions import NotFoundError, ValidationError
from ..notifications.service import NotificationService
from ..subjects.model import Subject
from ..subjects.service import SubjectService
from ..users.service import UserService
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]
    overall: dict


@dataclass(frozen=True)
class StatsData:
    overall: dict
    subjects: list[dict]

    def to_dict(self) -> dict:
        return {"overall": self.overall, "subjects": self.subjects}


def parse_status(value: Any) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("status must be present or absent", [{"field": "status", "msg": "invalid choice"}])


class AttendanceService:
    """Use case: write attendance records and keep subject counters in step."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        subjects: SubjectService,
        users: UserService,
        notifications: NotificationService,
    ):
        self._attendance = attendance
        self._subjects = subjects
        self._users = users
        self._notifications = notifications

    def record_if_absent(self, record: AttendanceRecord, *, subject: Subject, semester: int) -> Optional[AttendanceRecord]:
        """Insert one record and bump counters. Returns None for a duplicate slot.

        Preparatory-tagged records count against the user's Preparatory subject
        (no per-type stats); everything else counts against its own subject.
        """

        attendance_id = self._attendance.create_if_absent(record)
        if attendance_id is None:
            return None

        if record.has_preparatory_tag:
            prep = self._subjects.ensure_preparatory(record.user_id, semester)
            self._subjects.apply_attendance(prep, status=record.status, class_type=None)
        else:
            self._subjects.apply_attendance(subject, status=record.status, class_type=record.class_type.value)

        return replace(record, attendance_id=attendance_id)

    def mark(self, user_id: int, payload: Mapping[str, Any]) -> AttendanceRecord:
        require_fields(payload, ["subjectId", "date", "status"])
        user = self._users.get(user_id)
        subject = self._subjects.find(user.user_id, payload["subjectId"])
        if not subject:
            raise NotFoundError("Subject not found")
        status = parse_status(payload["status"])
        start_time = parse_hhmm(payload["startTime"]).strftime("%H:%M") if payload.get("startTime") else ""
        end_time = parse_hhmm(payload["endTime"]).strftime("%H:%M") if payload.get("endTime") else ""

        record = AttendanceRecord(
            user_id=user.user_id,
            subject_id=subject.subject_id,
            subject_name=subject.name,
            date=parse_iso_date(payload["date"]),
            status=status,
            class_type=ClassType.normalize(payload.get("classType") or subject.class_type.value),
            schedule_class_id=str(payload.get("scheduleClassId") or ""),
            has_preparatory_tag=bool(payload.get("hasPreparatoryTag")),
            start_time=start_time,
            end_time=end_time,
        )

        created = self.record_if_absent(record, subject=subject, semester=user.current_semester)
        if created is None:
            raise ValidationError("Attendance already marked for this class on this date")

        if not created.has_preparatory_tag:
            self._warn_if_low(user.user_id, subject.subject_id, user.preferences.attendance_threshold)
        return created

    def _warn_if_low(self, user_id: int, subject_id: int, threshold: int) -> None:
        subject = self._subjects.get(user_id, subject_id)
        percentage = subject.attendance_percentage
        if 0 < percentage < threshold:
            self._notifications.create_notification(
                user_id,
                title="Low Attendance Warning",
                message=(
                    f"Your attendance in {subject.name} is {percentage:.1f}%. "
                    f"Attend more classes to maintain {threshold}% attendance."
                ),
                type=NotificationType.ALERT,
                category=NotificationCategory.ATTENDANCE,
                priority=Priority.HIGH,
            )

    def history(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> Sequence[AttendanceRecord]:
        if start and end and start > end:
            raise ValidationError("Start date cannot be after end date")
        return self._attendance.list_range(user_id=int(user_id), start=start, end=end, limit=limit)

    def in_range(self, user_id: int, *, start: Optional[date], end: Optional[date]) -> Sequence[AttendanceRecord]:
        """Every record in [start, end], oldest first."""

        if not start or not end:
            raise ValidationError("Please provide start and end dates")
        records = self.history(user_id, start=start, end=end, limit=10000)
        return sorted(records, key=lambda r: (r.date, r.start_time, r.attendance_id or 0))

    def stats(self, user_id: int) -> StatsData:
        subjects = self._subjects.list(user_id)
        attended = sum(s.attended_classes for s in subjects)
        total = sum(s.total_classes for s in subjects)
        return StatsData(
            overall={
                "percentage": round(attended / total * 100) if total else 0,
                "attendedClasses": attended,
                "totalClasses": total,
            },
            subjects=[
                {
                    "id": s.subject_id,
                    "name": s.name,
                    "code": s.code,
                    "semester": s.semester,
                    "attendedClasses": s.attended_classes,
                    "totalClasses": s.total_classes,
                    "percentage": round(s.attendance_percentage, 2),
                }
                for s in subjects
            ],
        )

    def build_report(self, user_id: int, *, start: date, end: date) -> ReportData:
        """Records in [start, end] plus lifetime per-subject counters."""

        records = self.history(user_id, start=start, end=end, limit=10000)
        rows = [
            {
                "date": r.date.strftime("%Y-%m-%d"),
                "subject": r.subject_name,
                "class_type": r.class_type.value,
                "status": r.status.value,
                "start_time": r.start_time or "-",
                "end_time": r.end_time or "-",
                "auto_marked": "yes" if r.is_auto_marked else "no",
            }
            for r in sorted(records, key=lambda r: (r.date, r.start_time))
        ]

        summary = []
        total = attended = 0
        for s in self._subjects.list(user_id):
            total += s.total_classes
            attended += s.attended_classes
            summary.append(
                {
                    "subject": s.name,
                    "code": s.code,
                    "attended": s.attended_classes,
                    "total": s.total_classes,
                    "percentage": round(s.attendance_percentage, 2),
                }
            )

        overall = {
            "attended": attended,
            "total": total,
            "percentage": round(attended / total * 100) if total else 0,
        }
        return ReportData(rows=rows, summary=summary, overall=overall)

    def send_attendance_reminders(self, *, today: Optional[date] = None) -> int:
        today = today or now_local().date()
        cutoff = today - timedelta(days=REMINDER_INACTIVITY_DAYS)
        user_ids = self._attendance.list_users_inactive_since(cutoff)
        for user_id in user_ids:
            self._notifications.create_notification(
                user_id,
                title="Attendance Reminder",
                message=(
                    f"Please update your attendance record. "
                    f"It has been {REMINDER_INACTIVITY_DAYS} days since your last update."
                ),
                type=NotificationType.REMINDER,
                category=NotificationCategory.ATTENDANCE,
                priority=Priority.MEDIUM,
            )
        logger.info("Attendance reminder sent to %d users", len(user_ids))
        return len(user_ids)
