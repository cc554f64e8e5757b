from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from trackly.core.enums import DigestFrequency, NotificationCategory
from trackly.core.exceptions import NotFoundError, ValidationError


def _opt_in(container, user_id, frequency, muted=()):
    container.user_service.update_notification_preferences(
        user_id, {"emailNotifications": {"enabled": True, "frequency": frequency, "mutedTypes": list(muted)}}
    )


def test_long_title_and_message_are_truncated(container, student):
    note = container.notification_service.create_notification(student.user_id, title="T" * 150, message="m" * 600)

    assert len(note.title) == 100
    assert note.title.endswith("...")
    assert len(note.message) == 500


def test_title_and_message_required(container, student):
    with pytest.raises(ValidationError):
        container.notification_service.create_notification(student.user_id, title="", message="hello")


def test_instant_email_respects_muted_categories(container, student, email):
    _opt_in(container, student.user_id, "instant", muted=["todo"])

    container.notification_service.create_notification(
        student.user_id, title="Heads up", message="Class moved", category=NotificationCategory.ATTENDANCE
    )
    container.notification_service.create_notification(
        student.user_id, title="Todo", message="Buy notebook", category=NotificationCategory.TODO
    )

    assert email.sent == [("asha@example.com", "Heads up", "Class moved")]


def test_daily_users_get_no_instant_email(container, student, email):
    _opt_in(container, student.user_id, "daily")

    container.notification_service.create_notification(student.user_id, title="Heads up", message="Class moved")

    assert email.sent == []


def test_read_state(container, student):
    first = container.notification_service.create_notification(student.user_id, title="A", message="a")
    container.notification_service.create_notification(student.user_id, title="B", message="b")

    assert container.notification_service.unread_count(student.user_id) == 2
    assert container.notification_service.mark_read(student.user_id, first.notification_id).read is True
    assert [n.title for n in container.notification_service.list(student.user_id, unread_only=True)] == ["B"]
    assert container.notification_service.mark_all_read(student.user_id) == 1
    assert container.notification_service.unread_count(student.user_id) == 0


def test_missing_notification(container, student):
    with pytest.raises(NotFoundError):
        container.notification_service.mark_read(student.user_id, 404)
    with pytest.raises(NotFoundError):
        container.notification_service.delete(student.user_id, 404)


def test_clear_read_keeps_unread(container, student):
    first = container.notification_service.create_notification(student.user_id, title="A", message="a")
    container.notification_service.create_notification(student.user_id, title="B", message="b")
    container.notification_service.mark_read(student.user_id, first.notification_id)

    assert container.notification_service.clear_read(student.user_id) == 1
    assert container.notifications_repo.titles(student.user_id) == ["B"]


def test_daily_digest(container, student, email):
    other = container.auth_service.register(name="Ben", email="ben@example.com", password="secret1")
    _opt_in(container, student.user_id, "daily")
    _opt_in(container, other.user_id, "daily")
    container.notification_service.create_notification(student.user_id, title="A", message="a")

    now = datetime.now() + timedelta(minutes=1)
    summary = container.notification_service.send_digests(DigestFrequency.DAILY, now=now)

    assert (summary.sent, summary.errors) == (1, 0)
    assert summary.message == "Sent 1 digest(s), 0 error(s)"
    recipient, notes, frequency = email.digests[0]
    assert recipient == "asha@example.com"
    assert [n.title for n in notes] == ["A"]
    assert frequency == DigestFrequency.DAILY
    assert container.user_service.get(student.user_id).preferences.last_digest_sent == now


def test_digest_window_excludes_old_notifications(container, student, email):
    _opt_in(container, student.user_id, "daily")
    container.notification_service.create_notification(student.user_id, title="A", message="a")

    summary = container.notification_service.send_digests(DigestFrequency.DAILY, now=datetime.now() + timedelta(days=2))

    assert summary.sent == 0
    assert email.digests == []


def test_failed_digest_is_counted(container, student, email):
    email.fail = True
    _opt_in(container, student.user_id, "weekly")
    container.notification_service.create_notification(student.user_id, title="A", message="a")

    summary = container.notification_service.send_digests(DigestFrequency.WEEKLY)

    assert (summary.sent, summary.errors) == (0, 1)
    assert container.user_service.get(student.user_id).preferences.last_digest_sent is None


def test_instant_is_not_a_digest(container):
    with pytest.raises(ValidationError):
        container.notification_service.send_digests(DigestFrequency.INSTANT)
