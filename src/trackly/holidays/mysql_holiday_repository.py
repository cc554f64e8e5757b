from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import Holiday
from .repository import HolidayRepository

_COLUMNS = "holiday_id, user_id, academic_period_id, holiday_date, reason"


def _to_holiday(row: dict) -> Holiday:
    return Holiday(
        holiday_id=int(row["holiday_id"]),
        user_id=int(row["user_id"]),
        academic_period_id=int(row["academic_period_id"]),
        date=normalize_mysql_date(row["holiday_date"]),
        reason=row.get("reason") or "",
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, *, user_id: int) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM holidays WHERE user_id=%s ORDER BY holiday_date",
                (int(user_id),),
            )
            return [_to_holiday(r) for r in fetchall(cur)]

    def list_for_period(self, *, academic_period_id: int) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM holidays WHERE academic_period_id=%s ORDER BY holiday_date",
                (int(academic_period_id),),
            )
            return [_to_holiday(r) for r in fetchall(cur)]

    def create_if_absent(self, *, user_id: int, academic_period_id: int, holiday_date: date, reason: str) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO holidays(user_id, academic_period_id, holiday_date, reason)
                VALUES(%s,%s,%s,%s)
                """,
                (int(user_id), int(academic_period_id), holiday_date, reason),
            )
            if cur.rowcount == 0:
                return None
            return int(cur.lastrowid)

    def get_for_user(self, *, user_id: int, holiday_id: int) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM holidays WHERE holiday_id=%s AND user_id=%s",
                (int(holiday_id), int(user_id)),
            )
            row = fetchone(cur)
            return _to_holiday(row) if row else None

    def delete(self, *, user_id: int, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE holiday_id=%s AND user_id=%s", (int(holiday_id), int(user_id)))
            return cur.rowcount > 0
