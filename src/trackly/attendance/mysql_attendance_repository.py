from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, ClassType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, user_id, subject_id, subject_name, attendance_date, status, class_type,
    schedule_class_id, is_auto_marked, has_preparatory_tag, start_time, end_time, created_at
"""


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(row["attendance_id"]),
        user_id=int(row["user_id"]),
        subject_id=int(row["subject_id"]),
        subject_name=row.get("subject_name") or "",
        date=normalize_mysql_date(row["attendance_date"]),
        status=AttendanceStatus(row["status"]),
        class_type=ClassType.normalize(row.get("class_type")),
        schedule_class_id=row.get("schedule_class_id") or "",
        is_auto_marked=bool(row.get("is_auto_marked")),
        has_preparatory_tag=bool(row.get("has_preparatory_tag")),
        start_time=row.get("start_time") or "",
        end_time=row.get("end_time") or "",
        created_at=row.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_if_absent(self, record: AttendanceRecord) -> Optional[int]:
        # uq_attendance_slot turns a concurrent duplicate into a no-op
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO attendances(
                    user_id, subject_id, subject_name, attendance_date, status, class_type,
                    schedule_class_id, is_auto_marked, has_preparatory_tag, start_time, end_time
                ) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(record.user_id),
                    int(record.subject_id),
                    record.subject_name,
                    record.date,
                    record.status.value,
                    record.class_type.value,
                    record.schedule_class_id or "",
                    1 if record.is_auto_marked else 0,
                    1 if record.has_preparatory_tag else 0,
                    record.start_time,
                    record.end_time,
                ),
            )
            if cur.rowcount == 0:
                return None
            return int(cur.lastrowid)

    def list_range(
        self,
        *,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: int = 200,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]
        if start is not None:
            clauses.append("attendance_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("attendance_date <= %s")
            params.append(end)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendances
                WHERE {' AND '.join(clauses)}
                ORDER BY attendance_date DESC, start_time DESC, attendance_id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_users_inactive_since(self, cutoff: date) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id FROM attendances
                GROUP BY user_id
                HAVING MAX(attendance_date) < %s
                """,
                (cutoff,),
            )
            return [int(r["user_id"]) for r in fetchall(cur)]
