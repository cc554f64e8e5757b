from __future__ import annotations

import json
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import DigestFrequency
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_column
from .model import NotificationPreferences, User
from .repository import UserRepository

_COLUMNS = """
    user_id, name, email, password_hash, current_semester, auto_attendance_enabled,
    pdf_schedule_path, email_enabled, email_frequency, muted_categories,
    attendance_threshold, last_digest_sent, reset_token, reset_token_expires, created_at
"""


def _to_user(row: dict) -> User:
    prefs = NotificationPreferences(
        email_enabled=bool(row.get("email_enabled")),
        frequency=DigestFrequency(row.get("email_frequency") or DigestFrequency.DAILY.value),
        muted_categories=tuple(load_json_column(row.get("muted_categories"), [])),
        attendance_threshold=int(row.get("attendance_threshold") or 75),
        last_digest_sent=row.get("last_digest_sent"),
    )
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        current_semester=int(row.get("current_semester") or 1),
        auto_attendance_enabled=bool(row.get("auto_attendance_enabled")),
        pdf_schedule_path=row.get("pdf_schedule_path"),
        preferences=prefs,
        reset_token=row.get("reset_token"),
        reset_token_expires=row.get("reset_token_expires"),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, *, name: str, email: str, password_hash: str, current_semester: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(name, email, password_hash, current_semester, muted_categories)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, email, password_hash, int(current_semester), json.dumps([])),
            )
            return int(cur.lastrowid)

    def set_auto_attendance(self, user_id: int, *, enabled: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET auto_attendance_enabled=%s WHERE user_id=%s",
                (1 if enabled else 0, int(user_id)),
            )
            return cur.rowcount > 0

    def set_pdf_schedule_path(self, user_id: int, *, path: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET pdf_schedule_path=%s WHERE user_id=%s", (path, int(user_id)))
            return cur.rowcount > 0

    def update_profile(self, user_id: int, *, name: str, current_semester: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET name=%s, current_semester=%s WHERE user_id=%s",
                (name, int(current_semester), int(user_id)),
            )
            return cur.rowcount > 0

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users SET password_hash=%s, reset_token=NULL, reset_token_expires=NULL
                WHERE user_id=%s
                """,
                (password_hash, int(user_id)),
            )
            return cur.rowcount > 0

    def set_reset_token(self, user_id: int, *, token: str, expires_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET reset_token=%s, reset_token_expires=%s WHERE user_id=%s",
                (token, expires_at, int(user_id)),
            )
            return cur.rowcount > 0

    def get_by_reset_token(self, token: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE reset_token=%s", (token,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def update_preferences(self, user_id: int, prefs: NotificationPreferences) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET email_enabled=%s, email_frequency=%s, muted_categories=%s, attendance_threshold=%s
                WHERE user_id=%s
                """,
                (
                    1 if prefs.email_enabled else 0,
                    prefs.frequency.value,
                    json.dumps(list(prefs.muted_categories)),
                    int(prefs.attendance_threshold),
                    int(user_id),
                ),
            )
            return cur.rowcount > 0

    def mark_digest_sent(self, user_id: int, *, sent_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET last_digest_sent=%s WHERE user_id=%s", (sent_at, int(user_id)))
            return cur.rowcount > 0

    def list_by_digest_frequency(self, frequency: DigestFrequency) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE email_enabled=1 AND email_frequency=%s",
                (frequency.value,),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY user_id")
            return [_to_user(r) for r in fetchall(cur)]
