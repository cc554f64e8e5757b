from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_fields
from ..core.exceptions import NotFoundError, ValidationError
from ..subjects.service import SubjectService
from .model import AcademicPeriod, ArchivedPeriod
from .repository import AcademicPeriodRepository

logger = logging.getLogger(__name__)


class AcademicPeriodService:
    def __init__(self, periods: AcademicPeriodRepository, *, subjects: SubjectService):
        self._periods = periods
        self._subjects = subjects

    def _complete_if_ended(self, period: AcademicPeriod, today: date) -> AcademicPeriod:
        if period.has_ended(today) and not period.is_completed:
            self._periods.mark_completed(period.academic_period_id)
            return replace(period, is_completed=True)
        return period

    def list(self, user_id: int, *, today: Optional[date] = None) -> Sequence[AcademicPeriod]:
        today = today or date.today()
        return [self._complete_if_ended(p, today) for p in self._periods.list_for_user(user_id=int(user_id))]

    def get(self, user_id: int, semester: str, *, today: Optional[date] = None) -> AcademicPeriod:
        period = self.find(user_id, semester)
        if not period:
            raise NotFoundError("Academic period not found")
        return self._complete_if_ended(period, today or date.today())

    def find(self, user_id: int, semester: Any) -> Optional[AcademicPeriod]:
        return self._periods.get_by_semester(user_id=int(user_id), semester=str(semester))

    def get_by_id(self, period_id: Optional[int]) -> Optional[AcademicPeriod]:
        if not period_id:
            return None
        return self._periods.get_by_id(int(period_id))

    def save(self, user_id: int, payload: Mapping[str, Any]) -> AcademicPeriod:
        require_fields(payload, ["semester", "startDate", "endDate"])
        start = parse_iso_date(payload["startDate"])
        end = parse_iso_date(payload["endDate"])
        if start > end:
            raise ValidationError(
                "Start date cannot be after end date",
                [{"field": "startDate", "msg": "must be on or before endDate"}],
            )

        semester = str(payload["semester"]).strip()
        self._periods.upsert(user_id=int(user_id), semester=semester, start_date=start, end_date=end)
        return self.get(user_id, semester)

    def delete(self, user_id: int, semester: str) -> None:
        if not self._periods.delete(user_id=int(user_id), semester=str(semester)):
            raise NotFoundError("Academic period not found")
        logger.info("Deleted academic period %s for user %s", semester, user_id)

    def archived(self, user_id: int, *, today: Optional[date] = None) -> Sequence[ArchivedPeriod]:
        """Completed periods, latest semester first, with their subjects' totals."""

        completed = [p for p in self.list(user_id, today=today) if p.is_completed]
        completed.sort(key=lambda p: int(p.semester) if p.semester.isdigit() else 0, reverse=True)
        archive = []
        for period in completed:
            subjects = self._subjects.list(user_id, semester=int(period.semester)) if period.semester.isdigit() else []
            archive.append(ArchivedPeriod(period=period, subjects=tuple(subjects)))
        return archive
