from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Sequence

from ..academic_periods.service import AcademicPeriodService
from ..common.datetime_utils import iter_days, parse_iso_date
from ..common.validators import require_fields, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    def __init__(self, holidays: HolidayRepository, periods: AcademicPeriodService):
        self._holidays = holidays
        self._periods = periods

    def _period_for(self, user_id: int, semester: Any):
        period = self._periods.find(user_id, semester)
        if not period:
            raise NotFoundError("Academic period not found for this semester")
        return period

    def add(self, user_id: int, payload: Mapping[str, Any]) -> Holiday:
        require_fields(payload, ["day", "month", "year", "semester"])
        try:
            holiday_date = date(int(payload["year"]), int(payload["month"]), int(payload["day"]))
        except (TypeError, ValueError):
            raise ValidationError("day, month and year must form a valid date")

        period = self._period_for(user_id, payload["semester"])
        reason = str(payload.get("reason") or "").strip()

        holiday_id = self._holidays.create_if_absent(
            user_id=int(user_id),
            academic_period_id=period.academic_period_id,
            holiday_date=holiday_date,
            reason=reason,
        )
        if holiday_id is None:
            raise ValidationError("Holiday already exists for this date")

        return Holiday(
            holiday_id=holiday_id,
            user_id=int(user_id),
            academic_period_id=period.academic_period_id,
            date=holiday_date,
            reason=reason,
        )

    def add_range(self, user_id: int, payload: Mapping[str, Any]) -> list[Holiday]:
        """Add one holiday per day in [startDate, endDate]; existing dates are skipped."""

        require_fields(payload, ["startDate", "semester"])
        reason = require_non_empty(payload.get("reason"), "reason")
        start = parse_iso_date(payload["startDate"])
        end = parse_iso_date(payload["endDate"]) if payload.get("endDate") else start
        if start > end:
            raise ValidationError("Start date cannot be after end date")

        period = self._period_for(user_id, payload["semester"])

        created: list[Holiday] = []
        for day in iter_days(start, end):
            holiday_id = self._holidays.create_if_absent(
                user_id=int(user_id),
                academic_period_id=period.academic_period_id,
                holiday_date=day,
                reason=reason,
            )
            if holiday_id is None:
                logger.debug("Skipping duplicate holiday %s for user %s", day, user_id)
                continue
            created.append(
                Holiday(
                    holiday_id=holiday_id,
                    user_id=int(user_id),
                    academic_period_id=period.academic_period_id,
                    date=day,
                    reason=reason,
                )
            )

        logger.info("Created %d holidays for user %s (%s..%s)", len(created), user_id, start, end)
        return created

    def list(self, user_id: int) -> Sequence[Holiday]:
        return self._holidays.list_for_user(user_id=int(user_id))

    def list_for_semester(self, user_id: int, semester: Any) -> Sequence[Holiday]:
        period = self._periods.find(user_id, semester)
        if not period:
            return []
        return self._holidays.list_for_period(academic_period_id=period.academic_period_id)

    def holiday_dates(self, user_id: int) -> set[date]:
        return {h.date for h in self._holidays.list_for_user(user_id=int(user_id))}

    def delete(self, user_id: int, holiday_id: int) -> None:
        if not self._holidays.delete(user_id=int(user_id), holiday_id=int(holiday_id)):
            raise NotFoundError("Holiday not found")
