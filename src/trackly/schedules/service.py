from __future__ import annotations

import logging
import uuid
from typing import Any, Mapping, Optional

from ..academic_periods.service import AcademicPeriodService
from ..common.datetime_utils import parse_hhmm, parse_time_range, standardize_day
from ..core.enums import ClassType
from ..core.exceptions import ValidationError
from ..subjects.service import SubjectService
from ..users.service import UserService
from .model import Schedule, ScheduledClass
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


class ScheduleService:
    """Use case: store confirmed timetables and serve the current one."""

    def __init__(
        self,
        schedules: ScheduleRepository,
        *,
        users: UserService,
        subjects: SubjectService,
        periods: AcademicPeriodService,
    ):
        self._schedules = schedules
        self._users = users
        self._subjects = subjects
        self._periods = periods

    def current(self, user_id: int) -> Optional[Schedule]:
        user = self._users.get(user_id)
        return self._schedules.get_latest(user_id=user.user_id, semester=user.current_semester)

    def create(self, user_id: int, payload: Mapping[str, Any]) -> Schedule:
        user = self._users.get(user_id)
        items = payload.get("classes")
        if not isinstance(items, list) or not items:
            raise ValidationError("classes must be a non-empty list", [{"field": "classes", "msg": "required"}])

        semester = int(payload.get("semester") or user.current_semester)

        classes: list[ScheduledClass] = []
        for index, item in enumerate(items):
            if not isinstance(item, Mapping):
                raise ValidationError(f"classes[{index}] must be an object")
            classes.append(self._build_class(user.user_id, semester, index, item))

        off_days = set()
        for raw in payload.get("offDays") or []:
            day = standardize_day(raw)
            if not day:
                raise ValidationError(f"Invalid off day: {raw!r}", [{"field": "offDays", "msg": "invalid day"}])
            off_days.add(day)

        period = self._periods.find(user.user_id, semester)
        schedule_id = self._schedules.create(
            user_id=user.user_id,
            semester=semester,
            academic_period_id=period.academic_period_id if period else None,
            classes=classes,
            off_days=off_days,
        )
        logger.info("Saved schedule %s with %d classes for user %s", schedule_id, len(classes), user.user_id)
        return self._schedules.get_latest(user_id=user.user_id, semester=semester)

    def _build_class(self, user_id: int, semester: int, index: int, item: Mapping[str, Any]) -> ScheduledClass:
        day = standardize_day(item.get("day"))
        if not day:
            raise ValidationError(f"classes[{index}].day is invalid", [{"field": f"classes[{index}].day", "msg": "invalid day"}])

        if item.get("startTime") and item.get("endTime"):
            start, end = parse_hhmm(item["startTime"]), parse_hhmm(item["endTime"])
        else:
            start, end = parse_time_range(item.get("time") or "")
        if start >= end:
            raise ValidationError(f"classes[{index}] must end after it starts")

        class_type = ClassType.normalize(item.get("classType"))
        subject = self._subjects.find(user_id, item["subjectId"]) if item.get("subjectId") else None
        if subject is None:
            name = str(item.get("subject") or item.get("subjectName") or "").strip()
            if not name:
                raise ValidationError(f"classes[{index}] needs subjectId or subject")
            subject = self._subjects.resolve_or_create(user_id, name=name, semester=semester, class_type=class_type)

        return ScheduledClass(
            class_id=str(item.get("id") or uuid.uuid4().hex),
            day=day,
            subject_id=subject.subject_id,
            subject_name=subject.name,
            class_type=class_type,
            start_time=start,
            end_time=end,
            room=str(item.get("room") or "").strip(),
        )

    def delete(self, user_id: int) -> int:
        return self._schedules.delete_for_user(user_id=int(user_id))
