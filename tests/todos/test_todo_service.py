from datetime import date

import pytest

from trackly.core.enums import NotificationCategory, Priority
from trackly.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def essay(container, student, physics):
    return container.todo_service.create(
        student.user_id,
        {"title": "Lab report", "date": "2026-03-10", "time": "18:30", "subject": physics.subject_id},
    )


def test_create_requires_title_and_date(container, student):
    with pytest.raises(ValidationError, match="Title is required") as exc:
        container.todo_service.create(student.user_id, {"description": "no title"})

    assert [e["msg"] for e in exc.value.errors] == ["Title is required", "Date is required"]


def test_create_and_filter(container, student, physics, essay):
    container.todo_service.create(student.user_id, {"title": "Buy notebook", "date": "2026-03-10", "time": "09:00"})
    container.todo_service.create(student.user_id, {"title": "Revise", "date": "2026-03-09"})

    assert essay.subject_id == physics.subject_id
    assert essay.time == "18:30"
    assert [t.title for t in container.todo_service.list(student.user_id)] == ["Revise", "Buy notebook", "Lab report"]
    assert [t.title for t in container.todo_service.list_for_date(student.user_id, "2026-03-10")] == [
        "Buy notebook",
        "Lab report",
    ]
    assert [t.title for t in container.todo_service.list_for_subject(student.user_id, physics.subject_id)] == [
        "Lab report"
    ]


def test_create_with_unknown_subject(container, student):
    with pytest.raises(NotFoundError, match="Subject not found"):
        container.todo_service.create(student.user_id, {"title": "Read", "date": "2026-03-10", "subject": 999})


def test_update_is_partial_and_empty_subject_unlinks(container, student, essay):
    updated = container.todo_service.update(student.user_id, essay.todo_id, {"completed": True, "subject": ""})

    assert updated.completed is True
    assert updated.subject_id is None
    assert updated.title == "Lab report"
    assert container.todo_service.get(student.user_id, essay.todo_id) == updated


def test_update_rejects_non_boolean_completed(container, student, essay):
    with pytest.raises(ValidationError):
        container.todo_service.update(student.user_id, essay.todo_id, {"completed": "yes"})


def test_other_users_todo_is_not_found(container, student, essay):
    other = container.auth_service.register(name="Ben", email="ben@example.com", password="secret1")

    with pytest.raises(NotFoundError, match="Todo not found"):
        container.todo_service.get(other.user_id, essay.todo_id)
    with pytest.raises(NotFoundError):
        container.todo_service.delete(other.user_id, essay.todo_id)


def test_reminders_for_due_and_overdue_todos(container, student, essay):
    container.todo_service.create(student.user_id, {"title": "Pay fees", "date": "2026-03-05"})
    container.todo_service.create(student.user_id, {"title": "Far away", "date": "2026-04-30"})

    sent = container.todo_service.send_todo_reminders(today=date(2026, 3, 9))

    assert sent == 2
    notifications = container.notification_service.list(student.user_id)
    assert {n.message: n.priority for n in notifications} == {
        'Task "Pay fees" is 4 day(s) overdue!': Priority.HIGH,
        'Task "Lab report" is due tomorrow!': Priority.MEDIUM,
    }
    assert all(n.category == NotificationCategory.TODO for n in notifications)
    assert [t.title for t in container.todo_service.list(student.user_id) if t.is_overdue] == ["Pay fees"]


def test_reminders_are_sent_once_per_day(container, student, essay):
    assert container.todo_service.send_todo_reminders(today=date(2026, 3, 10)) == 1
    assert container.todo_service.send_todo_reminders(today=date(2026, 3, 10)) == 0
    assert container.notifications_repo.titles(student.user_id) == ["Task Reminder"]

    assert container.todo_service.send_todo_reminders(today=date(2026, 3, 11)) == 1
    assert container.notifications_repo.titles(student.user_id) == ["Task Reminder", "Overdue Task"]


def test_completed_todos_are_not_reminded(container, student, essay):
    container.todo_service.update(student.user_id, essay.todo_id, {"completed": True})

    assert container.todo_service.send_todo_reminders(today=date(2026, 3, 10)) == 0
