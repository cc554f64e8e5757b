from __future__ import annotations

from datetime import date

import pytest

from trackly.attendance.model import AttendanceRecord
from trackly.core.enums import AttendanceStatus, NotificationType
from trackly.core.exceptions import NotFoundError, ValidationError


def _mark(container, user_id, subject_id, day, status="present", **extra):
    payload = {"subjectId": subject_id, "date": day, "status": status}
    payload.update(extra)
    return container.attendance_service.mark(user_id, payload)


def test_mark_updates_counters(container, student, physics):
    record = _mark(container, student.user_id, physics.subject_id, "2026-03-02", startTime="09:00", endTime="10:00")

    assert record.attendance_id is not None
    assert record.subject_name == "Physics"
    assert record.to_dict()["timeDuration"] == {"startTime": "09:00", "endTime": "10:00"}

    subject = container.subject_service.get(student.user_id, physics.subject_id)
    assert (subject.total_classes, subject.attended_classes) == (1, 1)
    assert subject.class_type_stats["lecture"]["total"] == 1


def test_same_slot_twice_is_rejected(container, student, physics):
    _mark(container, student.user_id, physics.subject_id, "2026-03-02", scheduleClassId="c1")

    with pytest.raises(ValidationError, match="Attendance already marked"):
        _mark(container, student.user_id, physics.subject_id, "2026-03-02", scheduleClassId="c1")

    assert container.subject_service.get(student.user_id, physics.subject_id).total_classes == 1


def test_mark_validates_payload(container, student, physics):
    with pytest.raises(ValidationError):
        container.attendance_service.mark(student.user_id, {"subjectId": physics.subject_id, "date": "2026-03-02"})
    with pytest.raises(ValidationError):
        _mark(container, student.user_id, physics.subject_id, "2026-03-02", status="late")
    with pytest.raises(NotFoundError):
        _mark(container, student.user_id, 999, "2026-03-02")


def test_low_attendance_warning(container, student, physics):
    _mark(container, student.user_id, physics.subject_id, "2026-03-02", status="absent")
    assert container.notifications_repo.titles(student.user_id) == []

    _mark(container, student.user_id, physics.subject_id, "2026-03-03", status="present")

    warnings = [n for n in container.notifications_repo.items.values() if n.title == "Low Attendance Warning"]
    assert len(warnings) == 1
    assert warnings[0].type == NotificationType.ALERT
    assert "50.0%" in warnings[0].message


def test_history_range(container, student, physics):
    for day in ("2026-03-02", "2026-03-09", "2026-03-16"):
        _mark(container, student.user_id, physics.subject_id, day)

    records = container.attendance_service.history(student.user_id, start=date(2026, 3, 5), end=date(2026, 3, 20))

    assert [r.date for r in records] == [date(2026, 3, 16), date(2026, 3, 9)]
    with pytest.raises(ValidationError):
        container.attendance_service.history(student.user_id, start=date(2026, 3, 20), end=date(2026, 3, 1))


def test_report_rows_and_overall(container, student, physics):
    _mark(container, student.user_id, physics.subject_id, "2026-03-02", startTime="09:00", endTime="10:00")
    _mark(container, student.user_id, physics.subject_id, "2026-03-09", status="absent")
    _mark(container, student.user_id, physics.subject_id, "2026-03-16")

    report = container.attendance_service.build_report(student.user_id, start=date(2026, 3, 1), end=date(2026, 3, 10))

    assert report.rows == [
        {
            "date": "2026-03-02",
            "subject": "Physics",
            "class_type": "lecture",
            "status": "present",
            "start_time": "09:00",
            "end_time": "10:00",
            "auto_marked": "no",
        },
        {
            "date": "2026-03-09",
            "subject": "Physics",
            "class_type": "lecture",
            "status": "absent",
            "start_time": "-",
            "end_time": "-",
            "auto_marked": "no",
        },
    ]
    assert report.overall == {"attended": 2, "total": 3, "percentage": 67}


def test_reminders_go_to_inactive_users_only(container, student, physics):
    other = container.auth_service.register(name="Ben", email="ben@example.com", password="secret1", current_semester=3)
    chemistry = container.subject_service.create(other.user_id, {"name": "Chemistry", "code": "CH1", "semester": 3})
    container.attendance_repo.create_if_absent(
        AttendanceRecord(user_id=student.user_id, subject_id=physics.subject_id, date=date(2026, 3, 1), status=AttendanceStatus.PRESENT)
    )
    container.attendance_repo.create_if_absent(
        AttendanceRecord(user_id=other.user_id, subject_id=chemistry.subject_id, date=date(2026, 3, 9), status=AttendanceStatus.PRESENT)
    )

    reminded = container.attendance_service.send_attendance_reminders(today=date(2026, 3, 10))

    assert reminded == 1
    assert container.notifications_repo.titles(student.user_id) == ["Attendance Reminder"]
    assert container.notifications_repo.titles(other.user_id) == []


def test_in_range_is_oldest_first_and_needs_both_dates(container, student, physics):
    for day in ("2026-03-16", "2026-03-02", "2026-03-09", "2026-03-23"):
        _mark(container, student.user_id, physics.subject_id, day)

    records = container.attendance_service.in_range(student.user_id, start=date(2026, 3, 2), end=date(2026, 3, 16))

    assert [r.date for r in records] == [date(2026, 3, 2), date(2026, 3, 9), date(2026, 3, 16)]
    with pytest.raises(ValidationError, match="Please provide start and end dates"):
        container.attendance_service.in_range(student.user_id, start=date(2026, 3, 2), end=None)


def test_stats_overall_and_per_subject(container, student, physics):
    _mark(container, student.user_id, physics.subject_id, "2026-03-02")
    _mark(container, student.user_id, physics.subject_id, "2026-03-09", status="absent")
    _mark(container, student.user_id, physics.subject_id, "2026-03-16")

    stats = container.attendance_service.stats(student.user_id).to_dict()

    assert stats["overall"] == {"percentage": 67, "attendedClasses": 2, "totalClasses": 3}
    by_name = {s["name"]: s for s in stats["subjects"]}
    assert by_name["Physics"]["percentage"] == 66.67
    assert by_name["Preparatory"]["percentage"] == 100.0
