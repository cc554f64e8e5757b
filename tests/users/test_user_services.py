from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from trackly.core.enums import ClassType, DigestFrequency
from trackly.core.exceptions import AuthenticationError, NotFoundError, ValidationError


def test_register_creates_preparatory_subject(container, student):
    prep = container.subjects_repo.find_preparatory(user_id=student.user_id)

    assert prep is not None
    assert prep.class_type == ClassType.PREPARATORY
    assert prep.semester == 3


def test_register_rejects_duplicate_email(container, student):
    with pytest.raises(ValidationError, match="User already exists"):
        container.auth_service.register(name="Other", email="ASHA@example.com", password="secret1")


@pytest.mark.parametrize(
    "name, email, password",
    [("", "a@example.com", "secret1"), ("A", "not-an-email", "secret1"), ("A", "a@example.com", "123")],
)
def test_register_validates_input(container, name, email, password):
    with pytest.raises(ValidationError):
        container.auth_service.register(name=name, email=email, password=password)


def test_authenticate(container, student):
    assert container.auth_service.authenticate("asha@example.com", "secret1").user_id == student.user_id

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("asha@example.com", "wrong")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("nobody@example.com", "secret1")


def test_update_notification_preferences_merges_partial_payload(container, student):
    user = container.user_service.update_notification_preferences(
        student.user_id,
        {"emailNotifications": {"enabled": True, "mutedTypes": ["todo", "bogus"]}, "attendanceThreshold": 80},
    )

    assert user.preferences.email_enabled is True
    assert user.preferences.frequency == DigestFrequency.DAILY
    assert user.preferences.muted_categories == ("todo",)
    assert container.user_service.get(student.user_id).preferences.attendance_threshold == 80


@pytest.mark.parametrize(
    "payload",
    [
        {"emailNotifications": {"frequency": "hourly"}},
        {"attendanceThreshold": 120},
        {"attendanceThreshold": "lots"},
    ],
)
def test_update_notification_preferences_rejects_bad_values(container, student, payload):
    with pytest.raises(ValidationError):
        container.user_service.update_notification_preferences(student.user_id, payload)


def test_auto_attendance_flag_must_be_boolean(container, student):
    with pytest.raises(ValidationError):
        container.user_service.set_auto_attendance(student.user_id, enabled="yes")


def test_unknown_user(container):
    with pytest.raises(NotFoundError):
        container.user_service.get(42)


def test_update_profile(container, student):
    user = container.user_service.update_profile(student.user_id, {"name": "Asha R", "currentSemester": "4"})

    assert (user.name, user.current_semester) == ("Asha R", 4)
    assert container.user_service.get(student.user_id).current_semester == 4


@pytest.mark.parametrize("payload", [{"name": " "}, {"currentSemester": "fourth"}, {"currentSemester": 0}])
def test_update_profile_rejects_bad_values(container, student, payload):
    with pytest.raises(ValidationError):
        container.user_service.update_profile(student.user_id, payload)


def test_change_password(container, student):
    with pytest.raises(AuthenticationError, match="Current password is incorrect"):
        container.auth_service.change_password(student.user_id, current_password="wrong", new_password="newpass1")
    with pytest.raises(ValidationError):
        container.auth_service.change_password(student.user_id, current_password="secret1", new_password="123")

    container.auth_service.change_password(student.user_id, current_password="secret1", new_password="newpass1")

    assert container.auth_service.authenticate("asha@example.com", "newpass1").user_id == student.user_id
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("asha@example.com", "secret1")


def test_password_reset_flow(container, student, email):
    requested_at = datetime(2026, 3, 2, 10, 0)
    result = container.password_reset_service.request_reset("Asha@example.com", now=requested_at)

    assert result.success
    recipient, subject, body = email.sent[-1]
    assert (recipient, subject) == ("asha@example.com", "Password Reset Request")
    token = container.users_repo.get_by_id(student.user_id).reset_token
    assert f"http://localhost:3000/reset-password?token={token}" in body

    container.password_reset_service.reset_password(token, "brandnew", now=requested_at + timedelta(minutes=30))

    assert container.auth_service.authenticate("asha@example.com", "brandnew").user_id == student.user_id
    with pytest.raises(ValidationError, match="Invalid or expired token"):
        container.password_reset_service.reset_password(token, "another1", now=requested_at)


def test_password_reset_token_expires(container, student):
    requested_at = datetime(2026, 3, 2, 10, 0)
    container.password_reset_service.request_reset("asha@example.com", now=requested_at)
    token = container.users_repo.get_by_id(student.user_id).reset_token

    with pytest.raises(ValidationError, match="Invalid or expired token"):
        container.password_reset_service.reset_password(token, "brandnew", now=requested_at + timedelta(hours=2))


def test_password_reset_for_unknown_email(container):
    with pytest.raises(NotFoundError, match="No user found with that email"):
        container.password_reset_service.request_reset("nobody@example.com")
