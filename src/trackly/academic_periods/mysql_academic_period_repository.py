from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import AcademicPeriod
from .repository import AcademicPeriodRepository

_COLUMNS = "academic_period_id, user_id, semester, start_date, end_date, is_completed, created_at"


def _to_period(row: dict) -> AcademicPeriod:
    return AcademicPeriod(
        academic_period_id=int(row["academic_period_id"]),
        user_id=int(row["user_id"]),
        semester=str(row["semester"]),
        start_date=normalize_mysql_date(row["start_date"]),
        end_date=normalize_mysql_date(row["end_date"]),
        is_completed=bool(row.get("is_completed")),
        created_at=row.get("created_at"),
    )


class MySQLAcademicPeriodRepository(AcademicPeriodRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, period_id: int) -> Optional[AcademicPeriod]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM academic_periods WHERE academic_period_id=%s", (int(period_id),))
            row = fetchone(cur)
            return _to_period(row) if row else None

    def get_by_semester(self, *, user_id: int, semester: str) -> Optional[AcademicPeriod]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM academic_periods WHERE user_id=%s AND semester=%s",
                (int(user_id), str(semester)),
            )
            row = fetchone(cur)
            return _to_period(row) if row else None

    def list_for_user(self, *, user_id: int) -> Sequence[AcademicPeriod]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM academic_periods WHERE user_id=%s ORDER BY semester",
                (int(user_id),),
            )
            return [_to_period(r) for r in fetchall(cur)]

    def upsert(self, *, user_id: int, semester: str, start_date: date, end_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO academic_periods(user_id, semester, start_date, end_date)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE start_date=VALUES(start_date), end_date=VALUES(end_date), is_completed=0
                """,
                (int(user_id), str(semester), start_date, end_date),
            )

            # If it was an update, lastrowid can be 0; fetch the id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT academic_period_id FROM academic_periods WHERE user_id=%s AND semester=%s",
                (int(user_id), str(semester)),
            )
            r = fetchone(cur)
            return int(r["academic_period_id"]) if r else 0

    def mark_completed(self, period_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE academic_periods SET is_completed=1 WHERE academic_period_id=%s", (int(period_id),))
            return cur.rowcount > 0

    def delete(self, *, user_id: int, semester: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM academic_periods WHERE user_id=%s AND semester=%s",
                (int(user_id), str(semester)),
            )
            return cur.rowcount > 0
