from __future__ import annotations

import pytest

from fakes import (
    InMemoryAttendance,
    InMemoryHolidays,
    InMemoryNotifications,
    InMemoryPeriods,
    InMemorySchedules,
    InMemorySubjects,
    InMemoryTodos,
    InMemoryUsers,
    RecordingEmail,
)
from trackly.container import wire_container


@pytest.fixture
def email():
    return RecordingEmail()


@pytest.fixture
def container(tmp_path, email):
    return wire_container(
        conn=None,
        users_repo=InMemoryUsers(),
        subjects_repo=InMemorySubjects(),
        periods_repo=InMemoryPeriods(),
        holidays_repo=InMemoryHolidays(),
        schedules_repo=InMemorySchedules(),
        attendance_repo=InMemoryAttendance(),
        notifications_repo=InMemoryNotifications(),
        todos_repo=InMemoryTodos(),
        email_service=email,
        upload_dir=tmp_path / "uploads",
        max_upload_bytes=1024,
    )


@pytest.fixture
def student(container):
    """A registered semester-3 student; registration also creates the Preparatory subject."""

    return container.auth_service.register(
        name="Asha", email="asha@example.com", password="secret1", current_semester=3
    )


@pytest.fixture
def spring_period(container, student):
    return container.academic_period_service.save(
        student.user_id, {"semester": 3, "startDate": "2026-03-02", "endDate": "2026-06-30"}
    )


@pytest.fixture
def physics(container, student):
    return container.subject_service.create(
        student.user_id, {"name": "Physics", "code": "PHY101", "semester": 3, "classType": "lecture"}
    )
