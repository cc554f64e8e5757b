from __future__ import annotations

import smtplib
from datetime import datetime

import pytest

from trackly.core.enums import DigestFrequency
from trackly.notifications import email_service as email_module
from trackly.notifications.email_service import EmailService
from trackly.notifications.model import Notification

SMTP_CONFIG = {
    "host": "smtp.example.com",
    "port": 587,
    "user": "trackly@example.com",
    "password": "app-password",
    "use_tls": True,
    "sender_name": "TrackLy",
}


class FakeSMTP:
    instances: list["FakeSMTP"] = []
    refuse_login = False

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.tls = False
        self.logged_in = None
        self.messages = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.tls = True

    def login(self, user, password):
        if FakeSMTP.refuse_login:
            raise smtplib.SMTPAuthenticationError(535, b"bad credentials")
        self.logged_in = (user, password)

    def send_message(self, message):
        self.messages.append(message)


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.refuse_login = False
    monkeypatch.setattr(email_module.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


def test_send_email(fake_smtp):
    result = EmailService(SMTP_CONFIG).send_email("asha@example.com", "Hello", "Body text")

    assert result.success is True
    server = fake_smtp.instances[0]
    assert (server.host, server.port, server.tls) == ("smtp.example.com", 587, True)
    assert server.logged_in == ("trackly@example.com", "app-password")
    message = server.messages[0]
    assert message["To"] == "asha@example.com"
    assert message["Subject"] == "Hello"
    assert "TrackLy" in message["From"]


def test_unconfigured_service_does_not_connect(fake_smtp):
    result = EmailService({"host": "smtp.example.com"}).send_email("asha@example.com", "Hello", "Body")

    assert result.success is False
    assert result.error == "Email service not configured"
    assert fake_smtp.instances == []


def test_smtp_failure_is_reported_not_raised(fake_smtp):
    fake_smtp.refuse_login = True

    result = EmailService(SMTP_CONFIG).send_email("asha@example.com", "Hello", "Body")

    assert result.success is False
    assert "bad credentials" in result.error


def test_weekly_digest_body(fake_smtp):
    notes = [
        Notification(
            notification_id=1,
            user_id=1,
            title="Attendance Reminder",
            message="Please update your attendance record.",
            created_at=datetime(2026, 3, 10, 8, 0),
        )
    ]

    result = EmailService(SMTP_CONFIG).send_digest("asha@example.com", notes, DigestFrequency.WEEKLY)

    assert result.success is True
    message = fake_smtp.instances[0].messages[0]
    assert message["Subject"] == "TrackLy Weekly Digest"
    body = message.get_content()
    assert body.startswith("Here's a summary of your notifications from This Week:")
    assert "Attendance Reminder" in body
    assert "2026-03-10 08:00" in body


def test_empty_digest_is_not_sent(fake_smtp):
    result = EmailService(SMTP_CONFIG).send_digest("asha@example.com", [], DigestFrequency.DAILY)

    assert result.success is False
    assert fake_smtp.instances == []
