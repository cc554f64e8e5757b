from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Todo


class TodoRepository(Protocol):
    def get_for_user(self, *, user_id: int, todo_id: int) -> Optional[Todo]:
        raise NotImplementedError

    def list_for_user(
        self, *, user_id: int, due_date: Optional[date] = None, subject_id: Optional[int] = None
    ) -> Sequence[Todo]:
        """Ordered by date, time, then open before completed."""

        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        title: str,
        description: str,
        due_date: date,
        time: str,
        subject_id: Optional[int],
    ) -> int:
        raise NotImplementedError

    def update(self, todo: Todo) -> bool:
        raise NotImplementedError

    def delete(self, *, user_id: int, todo_id: int) -> bool:
        raise NotImplementedError

    def list_open_due_by(self, due_by: date) -> Sequence[Todo]:
        """Incomplete todos of every user due on or before due_by."""

        raise NotImplementedError

    def mark_reminded(self, todo_id: int, *, on: date, overdue: bool) -> bool:
        raise NotImplementedError
