from __future__ import annotations

import atexit
import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from .container import Container
from .core.enums import DigestFrequency

logger = logging.getLogger(__name__)


def _run_reminders(container: Container) -> None:
    try:
        container.attendance_service.send_attendance_reminders()
    except Exception:
        logger.exception("Attendance reminder job failed")


def _run_todo_reminders(container: Container) -> None:
    try:
        container.todo_service.send_todo_reminders()
    except Exception:
        logger.exception("Todo reminder job failed")


def _run_digest(container: Container, frequency: DigestFrequency) -> None:
    try:
        container.notification_service.send_digests(frequency)
    except Exception:
        logger.exception("%s digest job failed", frequency.value)


def build_scheduler(container: Container) -> BackgroundScheduler:
    """Attendance reminder 08:00, todo reminder 09:00, daily digest 18:00, weekly digest Sunday 17:00."""

    scheduler = BackgroundScheduler()
    scheduler.add_job(
        _run_reminders,
        CronTrigger(hour=8, minute=0),
        args=[container],
        id="attendance_reminder",
        name="Attendance reminder",
        replace_existing=True,
    )
    scheduler.add_job(
        _run_todo_reminders,
        CronTrigger(hour=9, minute=0),
        args=[container],
        id="todo_reminder",
        name="Todo due-date reminder",
        replace_existing=True,
    )
    scheduler.add_job(
        _run_digest,
        CronTrigger(hour=18, minute=0),
        args=[container, DigestFrequency.DAILY],
        id="daily_digest",
        name="Daily email digest",
        replace_existing=True,
    )
    scheduler.add_job(
        _run_digest,
        CronTrigger(day_of_week="sun", hour=17, minute=0),
        args=[container, DigestFrequency.WEEKLY],
        id="weekly_digest",
        name="Weekly email digest",
        replace_existing=True,
    )
    return scheduler


def start_scheduler(container: Container) -> BackgroundScheduler:
    scheduler = build_scheduler(container)
    scheduler.start()
    atexit.register(lambda: scheduler.shutdown(wait=False))
    logger.info("Background scheduler started with %d jobs", len(scheduler.get_jobs()))
    return scheduler
