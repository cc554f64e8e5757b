from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Todo:
    """A dated task, optionally tied to a subject."""

    todo_id: int
    user_id: int
    title: str
    due_date: date
    description: str = ""
    time: str = ""
    subject_id: Optional[int] = None
    completed: bool = False
    is_overdue: bool = False
    last_reminded_on: Optional[date] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.todo_id,
            "title": self.title,
            "description": self.description,
            "date": self.due_date.isoformat(),
            "time": self.time,
            "subject": self.subject_id,
            "completed": self.completed,
            "isOverdue": self.is_overdue,
        }
