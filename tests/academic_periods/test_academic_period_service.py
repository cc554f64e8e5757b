from datetime import date

import pytest

from trackly.core.enums import AttendanceStatus
from trackly.core.exceptions import NotFoundError, ValidationError


def test_save_then_update_same_semester(container, student, spring_period):
    updated = container.academic_period_service.save(
        student.user_id, {"semester": "3", "startDate": "2026-03-09", "endDate": "2026-07-15"}
    )

    assert updated.academic_period_id == spring_period.academic_period_id
    assert (updated.start_date, updated.end_date) == (date(2026, 3, 9), date(2026, 7, 15))
    assert len(container.academic_period_service.list(student.user_id, today=date(2026, 4, 1))) == 1


def test_start_after_end_is_rejected(container, student):
    with pytest.raises(ValidationError, match="Start date cannot be after end date"):
        container.academic_period_service.save(
            student.user_id, {"semester": 3, "startDate": "2026-06-30", "endDate": "2026-03-02"}
        )


def test_single_day_period_is_allowed(container, student):
    period = container.academic_period_service.save(
        student.user_id, {"semester": 4, "startDate": "2026-08-01", "endDate": "2026-08-01"}
    )

    assert period.start_date == period.end_date


def test_period_is_completed_once_ended(container, student, spring_period):
    on_last_day = container.academic_period_service.get(student.user_id, "3", today=date(2026, 6, 30))
    after = container.academic_period_service.get(student.user_id, "3", today=date(2026, 7, 1))

    assert on_last_day.is_completed is False
    assert after.is_completed is True
    assert container.periods_repo.get_by_id(spring_period.academic_period_id).is_completed is True


def test_missing_period(container, student):
    with pytest.raises(NotFoundError):
        container.academic_period_service.get(student.user_id, "9")


def test_delete_period(container, student, spring_period):
    container.academic_period_service.delete(student.user_id, "3")

    assert container.academic_period_service.find(student.user_id, 3) is None
    with pytest.raises(NotFoundError, match="Academic period not found"):
        container.academic_period_service.delete(student.user_id, "3")


def test_archived_lists_completed_periods_latest_first(container, student, spring_period, physics):
    container.academic_period_service.save(
        student.user_id, {"semester": 2, "startDate": "2025-09-01", "endDate": "2025-12-20"}
    )
    container.academic_period_service.save(
        student.user_id, {"semester": 4, "startDate": "2026-08-01", "endDate": "2026-12-20"}
    )
    for status in ("present", "present", "absent"):
        container.subject_service.apply_attendance(physics, status=AttendanceStatus(status), class_type="lecture")

    archive = container.academic_period_service.archived(student.user_id, today=date(2026, 7, 15))

    assert [a.period.semester for a in archive] == ["3", "2"]
    latest = archive[0].to_dict()
    assert (latest["totalAttended"], latest["totalClasses"], latest["overallPercentage"]) == (2, 3, 67)
    assert {s["name"]: s["percentage"] for s in latest["subjects"]} == {"Preparatory": 0, "Physics": 67}
    assert archive[1].to_dict()["overallPercentage"] == 0
