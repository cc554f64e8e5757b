from trackly.core.enums import DigestFrequency
from trackly.scheduler import _run_digest, _run_reminders, _run_todo_reminders, build_scheduler


def test_jobs_are_registered(container):
    scheduler = build_scheduler(container)

    jobs = {job.id: job for job in scheduler.get_jobs()}

    assert set(jobs) == {"attendance_reminder", "todo_reminder", "daily_digest", "weekly_digest"}
    assert jobs["weekly_digest"].args == (container, DigestFrequency.WEEKLY)
    assert "hour='8'" in str(jobs["attendance_reminder"].trigger)
    assert "hour='9'" in str(jobs["todo_reminder"].trigger)


def test_job_failures_are_logged_not_raised(container, monkeypatch, caplog):
    def boom(*args, **kwargs):
        raise RuntimeError("db down")

    monkeypatch.setattr(container.attendance_service, "send_attendance_reminders", boom)
    monkeypatch.setattr(container.notification_service, "send_digests", boom)
    monkeypatch.setattr(container.todo_service, "send_todo_reminders", boom)

    _run_reminders(container)
    _run_todo_reminders(container)
    _run_digest(container, DigestFrequency.DAILY)

    assert "Attendance reminder job failed" in caplog.text
    assert "Todo reminder job failed" in caplog.text
    assert "daily digest job failed" in caplog.text
