from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local, parse_hhmm, parse_iso_date
from ..common.validators import require_non_empty
from ..core.constants import TODO_REMINDER_DAYS
from ..core.enums import NotificationCategory, NotificationType, Priority
from ..core.exceptions import NotFoundError, ValidationError
from ..notifications.service import NotificationService
from ..subjects.service import SubjectService
from .model import Todo
from .repository import TodoRepository

logger = logging.getLogger(__name__)


def _due_phrase(days: int) -> str:
    if days == 0:
        return "today"
    if days == 1:
        return "tomorrow"
    return f"in {days} days"


class TodoService:
    """Use case: per-user task list with due-date reminders."""

    def __init__(self, todos: TodoRepository, *, subjects: SubjectService, notifications: NotificationService):
        self._todos = todos
        self._subjects = subjects
        self._notifications = notifications

    def _subject_id(self, user_id: int, value: Any) -> Optional[int]:
        if not value:
            return None
        subject = self._subjects.find(user_id, value)
        if not subject:
            raise NotFoundError("Subject not found")
        return subject.subject_id

    @staticmethod
    def _time(value: Any) -> str:
        return parse_hhmm(value).strftime("%H:%M") if value else ""

    def list(self, user_id: int) -> Sequence[Todo]:
        return self._todos.list_for_user(user_id=int(user_id))

    def list_for_date(self, user_id: int, value: str) -> Sequence[Todo]:
        return self._todos.list_for_user(user_id=int(user_id), due_date=parse_iso_date(value))

    def list_for_subject(self, user_id: int, subject_id: int) -> Sequence[Todo]:
        return self._todos.list_for_user(user_id=int(user_id), subject_id=int(subject_id))

    def get(self, user_id: int, todo_id: int) -> Todo:
        todo = self._todos.get_for_user(user_id=int(user_id), todo_id=int(todo_id))
        if not todo:
            raise NotFoundError("Todo not found")
        return todo

    def create(self, user_id: int, payload: Mapping[str, Any]) -> Todo:
        errors = []
        if not str(payload.get("title") or "").strip():
            errors.append({"field": "title", "msg": "Title is required"})
        if not payload.get("date"):
            errors.append({"field": "date", "msg": "Date is required"})
        if errors:
            raise ValidationError(errors[0]["msg"], errors)

        todo_id = self._todos.create(
            user_id=int(user_id),
            title=str(payload["title"]).strip(),
            description=str(payload.get("description") or "").strip(),
            due_date=parse_iso_date(payload["date"]),
            time=self._time(payload.get("time")),
            subject_id=self._subject_id(user_id, payload.get("subject")),
        )
        return self.get(user_id, todo_id)

    def update(self, user_id: int, todo_id: int, payload: Mapping[str, Any]) -> Todo:
        """Apply the fields present in payload; an empty subject unlinks it."""

        todo = self.get(user_id, todo_id)
        changes: dict[str, Any] = {}
        if "title" in payload:
            changes["title"] = require_non_empty(payload["title"], "title")
        if "description" in payload:
            changes["description"] = str(payload["description"] or "").strip()
        if "date" in payload:
            due = parse_iso_date(payload["date"])
            if due != todo.due_date:
                changes.update(due_date=due, is_overdue=False, last_reminded_on=None)
        if "time" in payload:
            changes["time"] = self._time(payload["time"])
        if "subject" in payload:
            changes["subject_id"] = self._subject_id(user_id, payload["subject"])
        if "completed" in payload:
            if not isinstance(payload["completed"], bool):
                raise ValidationError("completed must be a boolean", [{"field": "completed", "msg": "must be boolean"}])
            changes["completed"] = payload["completed"]

        updated = replace(todo, **changes)
        self._todos.update(updated)
        return updated

    def delete(self, user_id: int, todo_id: int) -> None:
        if not self._todos.delete(user_id=int(user_id), todo_id=int(todo_id)):
            raise NotFoundError("Todo not found")

    def send_todo_reminders(self, *, today: Optional[date] = None) -> int:
        """Notify about open todos that are overdue or due within the reminder window.

        Each todo is notified at most once per day.
        """

        today = today or now_local().date()
        sent = 0
        for todo in self._todos.list_open_due_by(today + timedelta(days=TODO_REMINDER_DAYS)):
            if todo.last_reminded_on == today:
                continue

            overdue = todo.due_date < today
            if overdue:
                days = (today - todo.due_date).days
                self._notifications.create_notification(
                    todo.user_id,
                    title="Overdue Task",
                    message=f'Task "{todo.title}" is {days} day(s) overdue!',
                    type=NotificationType.ALERT,
                    category=NotificationCategory.TODO,
                    priority=Priority.HIGH,
                )
            else:
                self._notifications.create_notification(
                    todo.user_id,
                    title="Task Reminder",
                    message=f'Task "{todo.title}" is due {_due_phrase((todo.due_date - today).days)}!',
                    type=NotificationType.REMINDER,
                    category=NotificationCategory.TODO,
                    priority=Priority.MEDIUM,
                )
            self._todos.mark_reminded(todo.todo_id, on=today, overdue=overdue)
            sent += 1

        logger.info("Todo reminders sent: %d", sent)
        return sent
