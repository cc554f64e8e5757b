from datetime import date

import pytest

from trackly.core.exceptions import NotFoundError, ValidationError


def test_add_single_holiday(container, student, spring_period):
    holiday = container.holiday_service.add(
        student.user_id, {"day": 9, "month": 3, "year": 2026, "semester": 3, "reason": "Founders Day"}
    )

    assert holiday.date == date(2026, 3, 9)
    assert holiday.academic_period_id == spring_period.academic_period_id
    assert holiday.to_dict()["day"] == 9


def test_duplicate_date_is_rejected(container, student, spring_period):
    payload = {"day": 9, "month": 3, "year": 2026, "semester": 3}
    container.holiday_service.add(student.user_id, payload)

    with pytest.raises(ValidationError, match="Holiday already exists for this date"):
        container.holiday_service.add(student.user_id, payload)


def test_invalid_calendar_date(container, student, spring_period):
    with pytest.raises(ValidationError):
        container.holiday_service.add(student.user_id, {"day": 30, "month": 2, "year": 2026, "semester": 3})


def test_holiday_needs_a_period(container, student):
    with pytest.raises(NotFoundError, match="Academic period not found for this semester"):
        container.holiday_service.add(student.user_id, {"day": 9, "month": 3, "year": 2026, "semester": 3})


def test_range_skips_existing_dates(container, student, spring_period):
    container.holiday_service.add(student.user_id, {"day": 2, "month": 4, "year": 2026, "semester": 3})

    created = container.holiday_service.add_range(
        student.user_id, {"startDate": "2026-04-01", "endDate": "2026-04-03", "semester": 3, "reason": "Spring break"}
    )

    assert [h.date for h in created] == [date(2026, 4, 1), date(2026, 4, 3)]
    assert len(container.holiday_service.holiday_dates(student.user_id)) == 3


def test_range_without_end_date_is_one_day(container, student, spring_period):
    created = container.holiday_service.add_range(
        student.user_id, {"startDate": "2026-04-01", "semester": 3, "reason": "Exam prep"}
    )

    assert [h.date for h in created] == [date(2026, 4, 1)]


def test_range_requires_reason_and_order(container, student, spring_period):
    with pytest.raises(ValidationError):
        container.holiday_service.add_range(student.user_id, {"startDate": "2026-04-01", "semester": 3})
    with pytest.raises(ValidationError):
        container.holiday_service.add_range(
            student.user_id, {"startDate": "2026-04-03", "endDate": "2026-04-01", "semester": 3, "reason": "x"}
        )


def test_list_for_semester_and_delete(container, student, spring_period):
    holiday = container.holiday_service.add(student.user_id, {"day": 9, "month": 3, "year": 2026, "semester": 3})

    assert [h.holiday_id for h in container.holiday_service.list_for_semester(student.user_id, 3)] == [holiday.holiday_id]
    assert container.holiday_service.list_for_semester(student.user_id, 5) == []

    container.holiday_service.delete(student.user_id, holiday.holiday_id)
    with pytest.raises(NotFoundError):
        container.holiday_service.delete(student.user_id, holiday.holiday_id)
