from __future__ import annotations

from datetime import date, datetime

from trackly.auto_attendance.service import NO_SCHEDULE_MESSAGE, PERIOD_ENDED_MESSAGE
from trackly.core.enums import AttendanceStatus


def _save_schedule(container, user_id, *, off_days=()):
    return container.schedule_service.create(
        user_id,
        {
            "classes": [
                {"day": "Monday", "time": "09:00 - 10:00", "subject": "Physics", "classType": "lecture", "id": "mon-phy"},
                {"day": "Wed", "startTime": "14:00", "endTime": "15:00", "subject": "Chemistry", "classType": "lab", "id": "wed-chem"},
            ],
            "offDays": list(off_days),
        },
    )


def test_backfill_marks_finished_classes_since_period_start(container, student, spring_period):
    _save_schedule(container, student.user_id)

    # Wednesday 2026-03-11 at noon: the 14:00 chemistry class has not ended yet
    result = container.auto_attendance_service.mark_past_classes(student.user_id, now=datetime(2026, 3, 11, 12, 0))

    assert result.message is None
    assert [(r.date, r.schedule_class_id) for r in result.records] == [
        (date(2026, 3, 2), "mon-phy"),
        (date(2026, 3, 4), "wed-chem"),
        (date(2026, 3, 9), "mon-phy"),
    ]
    assert all(r.is_auto_marked and r.status == AttendanceStatus.PRESENT for r in result.records)

    physics = container.subjects_repo.find_by_name(user_id=student.user_id, name="Physics")
    assert physics.total_classes == 2
    assert physics.attended_classes == 2
    assert physics.class_type_stats["lecture"] == {"total": 2, "attended": 2}


def test_backfill_is_idempotent_and_notifies_once(container, student, spring_period):
    _save_schedule(container, student.user_id)
    now = datetime(2026, 3, 11, 12, 0)

    first = container.auto_attendance_service.mark_past_classes(student.user_id, now=now)
    second = container.auto_attendance_service.mark_past_classes(student.user_id, now=now)

    assert first.count == 3
    assert second.count == 0
    assert len(container.attendance_repo.records) == 3
    assert container.notifications_repo.titles(student.user_id) == ["Past Classes Auto-Marked"]

    note = next(iter(container.notifications_repo.items.values()))
    assert note.message.startswith("Auto-marked 3 past classes as present from 2026-03-02 to 2026-03-11.")

    physics = container.subjects_repo.find_by_name(user_id=student.user_id, name="Physics")
    assert physics.total_classes == 2


def test_class_counts_only_after_it_ends_today(container, student, spring_period):
    container.schedule_service.create(
        student.user_id, {"classes": [{"day": "Monday", "time": "09:00 - 10:00", "subject": "Physics"}]}
    )

    during = container.auto_attendance_service.mark_past_classes(student.user_id, now=datetime(2026, 3, 2, 9, 30))
    after = container.auto_attendance_service.mark_past_classes(student.user_id, now=datetime(2026, 3, 2, 10, 30))

    assert during.count == 0
    assert after.count == 1
    assert after.records[0].time_range == "09:00 - 10:00"


def test_holidays_and_off_days_are_skipped(container, student, spring_period):
    _save_schedule(container, student.user_id, off_days=["Wednesday"])
    container.holiday_service.add(student.user_id, {"day": 9, "month": 3, "year": 2026, "semester": 3, "reason": "Fest"})

    result = container.auto_attendance_service.mark_past_classes(student.user_id, now=datetime(2026, 3, 11, 18, 0))

    assert [(r.date, r.subject_name) for r in result.records] == [(date(2026, 3, 2), "Physics")]


def test_ended_period_stops_backfill(container, student):
    container.academic_period_service.save(
        student.user_id, {"semester": 3, "startDate": "2026-03-02", "endDate": "2026-03-05"}
    )
    _save_schedule(container, student.user_id)

    result = container.auto_attendance_service.mark_past_classes(student.user_id, now=datetime(2026, 3, 10, 12, 0))

    assert result.count == 0
    assert result.message == PERIOD_ENDED_MESSAGE
    assert container.attendance_repo.records == {}


def test_last_day_of_period_is_still_active(container, student):
    container.academic_period_service.save(
        student.user_id, {"semester": 3, "startDate": "2026-03-02", "endDate": "2026-03-02"}
    )
    _save_schedule(container, student.user_id)

    result = container.auto_attendance_service.mark_past_classes(student.user_id, now=datetime(2026, 3, 2, 20, 0))

    assert result.count == 1


def test_no_schedule(container, student):
    result = container.auto_attendance_service.mark_past_classes(student.user_id, now=datetime(2026, 3, 11, 12, 0))

    assert result.count == 0
    assert result.message == NO_SCHEDULE_MESSAGE


def test_missing_subject_is_skipped(container, student, spring_period):
    schedule = _save_schedule(container, student.user_id)
    chemistry_id = next(c.subject_id for c in schedule.classes if c.subject_name == "Chemistry")
    container.subject_service.delete(student.user_id, chemistry_id)

    result = container.auto_attendance_service.mark_past_classes(student.user_id, now=datetime(2026, 3, 11, 18, 0))

    assert {r.subject_name for r in result.records} == {"Physics"}
    assert result.count == 2


def test_toggle_and_status(container, student):
    assert container.auto_attendance_service.status(student.user_id) is False
    assert container.auto_attendance_service.toggle(student.user_id, True) is True
    assert container.auto_attendance_service.status(student.user_id) is True
