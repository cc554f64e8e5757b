from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import Todo
from .repository import TodoRepository

_COLUMNS = """
    todo_id, user_id, subject_id, title, description, due_date, due_time,
    completed, is_overdue, last_reminded_on, created_at
"""

_ORDER = "ORDER BY due_date, due_time, completed, todo_id"


def _to_todo(row: dict) -> Todo:
    return Todo(
        todo_id=int(row["todo_id"]),
        user_id=int(row["user_id"]),
        title=row["title"],
        description=row.get("description") or "",
        due_date=normalize_mysql_date(row["due_date"]),
        time=row.get("due_time") or "",
        subject_id=int(row["subject_id"]) if row.get("subject_id") is not None else None,
        completed=bool(row.get("completed")),
        is_overdue=bool(row.get("is_overdue")),
        last_reminded_on=normalize_mysql_date(row.get("last_reminded_on")),
        created_at=row.get("created_at"),
    )


class MySQLTodoRepository(TodoRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user(self, *, user_id: int, todo_id: int) -> Optional[Todo]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM todos WHERE todo_id=%s AND user_id=%s",
                (int(todo_id), int(user_id)),
            )
            row = fetchone(cur)
            return _to_todo(row) if row else None

    def list_for_user(
        self, *, user_id: int, due_date: Optional[date] = None, subject_id: Optional[int] = None
    ) -> Sequence[Todo]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]
        if due_date is not None:
            clauses.append("due_date=%s")
            params.append(due_date)
        if subject_id is not None:
            clauses.append("subject_id=%s")
            params.append(int(subject_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM todos WHERE {' AND '.join(clauses)} {_ORDER}", tuple(params))
            return [_to_todo(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO todos(user_id, subject_id, title, description, due_date, due_time)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), subject_id, title, description, due_date, time),
            )
            return int(cur.lastrowid)

    def update(self, todo: Todo) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE todos
                SET subject_id=%s, title=%s, description=%s, due_date=%s, due_time=%s,
                    completed=%s, is_overdue=%s, last_reminded_on=%s
                WHERE todo_id=%s AND user_id=%s
                """,
                (
                    todo.subject_id,
                    todo.title,
                    todo.description,
                    todo.due_date,
                    todo.time,
                    1 if todo.completed else 0,
                    1 if todo.is_overdue else 0,
                    todo.last_reminded_on,
                    int(todo.todo_id),
                    int(todo.user_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, *, user_id: int, todo_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM todos WHERE todo_id=%s AND user_id=%s", (int(todo_id), int(user_id)))
            return cur.rowcount > 0

    def list_open_due_by(self, due_by: date) -> Sequence[Todo]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM todos WHERE completed=0 AND due_date<=%s {_ORDER}", (due_by,))
            return [_to_todo(r) for r in fetchall(cur)]

    def mark_reminded(self, todo_id: int, *, on: date, overdue: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE todos SET last_reminded_on=%s, is_overdue=%s WHERE todo_id=%s",
                (on, 1 if overdue else 0, int(todo_id)),
            )
            return cur.rowcount > 0
