from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..academic_periods.service import AcademicPeriodService
from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceService, parse_status
from ..common.datetime_utils import format_hhmm, iter_days, now_local, parse_iso_date, weekday_name
from ..core.enums import AttendanceStatus, ClassType, NotificationCategory, NotificationType, Priority
from ..core.exceptions import ValidationError
from ..holidays.service import HolidayService
from ..notifications.service import NotificationService
from ..schedules.repository import ScheduleRepository
from ..subjects.service import SubjectService
from ..users.service import UserService

logger = logging.getLogger(__name__)

NO_SCHEDULE_MESSAGE = "No schedule found"
PERIOD_ENDED_MESSAGE = "Academic period has ended. Schedule is no longer active."


@dataclass(frozen=True)
class BackfillResult:
    records: list[AttendanceRecord] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.records)


class AutoAttendanceService:
    """Use case: mark scheduled classes as attended without user input.

    Two entry points: a backfill over every past class since the semester
    started, and an end-of-day batch pushed by the client.
    """

    def __init__(
        self,
        *,
        users: UserService,
        schedules: ScheduleRepository,
        periods: AcademicPeriodService,
        holidays: HolidayService,
        subjects: SubjectService,
        attendance: AttendanceService,
        notifications: NotificationService,
    ):
        self._users = users
        self._schedules = schedules
        self._periods = periods
        self._holidays = holidays
        self._subjects = subjects
        self._attendance = attendance
        self._notifications = notifications

    def toggle(self, user_id: int, enabled: Any) -> bool:
        return self._users.set_auto_attendance(user_id, enabled=enabled)

    def status(self, user_id: int) -> bool:
        return self._users.is_auto_attendance_enabled(user_id)

    def mark_past_classes(self, user_id: int, *, now: Optional[datetime] = None) -> BackfillResult:
        now = now or now_local()
        today = now.date()
        current_hhmm = format_hhmm(now.time())
        user = self._users.get(user_id)

        schedule = self._schedules.get_latest(user_id=user.user_id, semester=user.current_semester)
        if not schedule or not schedule.classes:
            logger.info("No schedule for user %s semester %s", user.user_id, user.current_semester)
            return BackfillResult(message=NO_SCHEDULE_MESSAGE)

        period = self._periods.get_by_id(schedule.academic_period_id)
        if period:
            if period.has_ended(today):
                logger.info("Academic period %s ended on %s", period.academic_period_id, period.end_date)
                return BackfillResult(message=PERIOD_ENDED_MESSAGE)
            start = period.start_date
        else:
            start = (schedule.created_at or now).date()

        holidays = self._holidays.holiday_dates(user.user_id)
        logger.info("Backfilling user %s from %s to %s", user.user_id, start, today)

        created: list[AttendanceRecord] = []
        for day in iter_days(start, today):
            day_name = weekday_name(day)
            if day in holidays or day_name in schedule.off_days:
                continue

            for cls in schedule.classes_on(day_name):
                # only classes that have already finished today
                if day == today and format_hhmm(cls.end_time) >= current_hhmm:
                    continue

                subject = self._subjects.find(user.user_id, cls.subject_id)
                if not subject:
                    logger.warning("Subject %s for class %s not found; skipping", cls.subject_id, cls.class_id)
                    continue

                record = self._attendance.record_if_absent(
                    AttendanceRecord(
                        user_id=user.user_id,
                        subject_id=subject.subject_id,
                        subject_name=subject.name,
                        date=day,
                        status=AttendanceStatus.PRESENT,
                        class_type=cls.class_type,
                        schedule_class_id=cls.class_id,
                        is_auto_marked=True,
                        start_time=format_hhmm(cls.start_time),
                        end_time=format_hhmm(cls.end_time),
                    ),
                    subject=subject,
                    semester=user.current_semester,
                )
                if record:
                    created.append(record)

        if created:
            noun = "class" if len(created) == 1 else "classes"
            self._notifications.create_notification(
                user.user_id,
                title="Past Classes Auto-Marked",
                message=(
                    f"Auto-marked {len(created)} past {noun} as present from "
                    f"{start.isoformat()} to {today.isoformat()}.\n\n"
                    "Check your attendance history for details."
                ),
                type=NotificationType.INFO,
                category=NotificationCategory.ATTENDANCE,
                priority=Priority.MEDIUM,
            )

        logger.info("Backfill for user %s created %d records", user.user_id, len(created))
        return BackfillResult(records=created)

    def upload_day_records(self, user_id: int, records: Any) -> list[AttendanceRecord]:
        """Store a client-side batch of the day's classes, skipping slots already recorded."""

        if not isinstance(records, list):
            raise ValidationError("Invalid attendance records")

        user = self._users.get(user_id)
        parsed = [self._parse_upload(user.user_id, index, raw) for index, raw in enumerate(records)]

        uploaded: list[AttendanceRecord] = []
        for subject_id, record in parsed:
            subject = self._subjects.find(user.user_id, subject_id)
            if not subject:
                logger.warning("Bulk upload for user %s: subject %s not found", user.user_id, subject_id)
                continue

            created = self._attendance.record_if_absent(
                replace(record, subject_id=subject.subject_id, subject_name=subject.name),
                subject=subject,
                semester=user.current_semester,
            )
            if created:
                uploaded.append(created)

        if uploaded:
            self._notifications.create_notification(
                user.user_id,
                title="End of Day Auto-Upload Complete",
                message=self._upload_summary(uploaded),
                type=NotificationType.SUCCESS,
                category=NotificationCategory.ATTENDANCE,
                priority=Priority.MEDIUM,
            )

        logger.info("Bulk upload for user %s stored %d of %d records", user.user_id, len(uploaded), len(records))
        return uploaded

    @staticmethod
    def _parse_upload(user_id: int, index: int, raw: Any) -> tuple[Any, AttendanceRecord]:
        if not isinstance(raw, Mapping):
            raise ValidationError(f"attendanceRecords[{index}] must be an object")
        missing = [f for f in ("subjectId", "date", "status") if raw.get(f) in (None, "")]
        if missing:
            raise ValidationError(
                f"attendanceRecords[{index}] is missing: {', '.join(missing)}",
                [{"field": f"attendanceRecords[{index}].{f}", "msg": "required"} for f in missing],
            )

        return raw["subjectId"], AttendanceRecord(
            user_id=user_id,
            subject_id=0,
            date=parse_iso_date(raw["date"]),
            status=parse_status(raw["status"]),
            class_type=ClassType.normalize(raw.get("classType")),
            schedule_class_id=str(raw.get("scheduleClassId") or ""),
            is_auto_marked=True,
            has_preparatory_tag=bool(raw.get("hasPreparatoryTag")),
            start_time=str(raw.get("startTime") or ""),
            end_time=str(raw.get("endTime") or ""),
        )

    @staticmethod
    def _upload_summary(records: Sequence[AttendanceRecord]) -> str:
        noun = "record" if len(records) == 1 else "records"
        lines = [f"End of day: Auto-uploaded {len(records)} attendance {noun}:", ""]

        by_date: dict[str, list[AttendanceRecord]] = {}
        for r in records:
            by_date.setdefault(r.date.isoformat(), []).append(r)

        for day, items in by_date.items():
            lines.append(f"📅 {day}")
            for r in items:
                lines.append(f"  📚 {r.subject_name} ({r.class_type.value}) - {r.status.value}")
                lines.append(f"  ⏰ {r.start_time} - {r.end_time}")
            lines.append("")

        return "\n".join(lines).strip()
