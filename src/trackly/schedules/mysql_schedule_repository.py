from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import ClassType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Schedule, ScheduledClass
from .repository import ScheduleRepository


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_latest(self, *, user_id: int, semester: int) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT schedule_id, user_id, academic_period_id, semester, created_at
                FROM schedules
                WHERE user_id=%s AND semester=%s
                ORDER BY created_at DESC, schedule_id DESC
                LIMIT 1
                """,
                (int(user_id), int(semester)),
            )
            r = fetchone(cur)
            if not r:
                return None
            schedule_id = int(r["schedule_id"])

            cur.execute(
                """
                SELECT class_id, day, subject_id, subject_name, class_type, start_time, end_time, room
                FROM schedule_classes
                WHERE schedule_id=%s
                ORDER BY position
                """,
                (schedule_id,),
            )
            classes = tuple(
                ScheduledClass(
                    class_id=c["class_id"],
                    day=c["day"],
                    subject_id=int(c["subject_id"]) if c.get("subject_id") is not None else None,
                    subject_name=c["subject_name"],
                    class_type=ClassType.normalize(c.get("class_type")),
                    start_time=normalize_mysql_time(c["start_time"]),
                    end_time=normalize_mysql_time(c["end_time"]),
                    room=c.get("room") or "",
                )
                for c in fetchall(cur)
            )

            cur.execute("SELECT day FROM schedule_off_days WHERE schedule_id=%s", (schedule_id,))
            off_days = frozenset(d["day"] for d in fetchall(cur))

            return Schedule(
                schedule_id=schedule_id,
                user_id=int(r["user_id"]),
                semester=int(r["semester"]),
                academic_period_id=int(r["academic_period_id"]) if r.get("academic_period_id") else None,
                classes=classes,
                off_days=off_days,
                created_at=r.get("created_at"),
            )

    def create(
        self,
        *,
        user_id: int,
        semester: int,
        academic_period_id: Optional[int],
        classes: Sequence[ScheduledClass],
        off_days: Iterable[str],
    ) -> int:
        # One transaction: a schedule is never visible without its classes.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO schedules(user_id, academic_period_id, semester) VALUES(%s,%s,%s)",
                (int(user_id), academic_period_id, int(semester)),
            )
            schedule_id = int(cur.lastrowid)

            if classes:
                cur.executemany(
                    """
                    INSERT INTO schedule_classes(
                        schedule_id, position, class_id, day, subject_id, subject_name,
                        class_type, start_time, end_time, room
                    ) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (
                            schedule_id,
                            position,
                            c.class_id,
                            c.day,
                            c.subject_id,
                            c.subject_name,
                            c.class_type.value,
                            c.start_time,
                            c.end_time,
                            c.room,
                        )
                        for position, c in enumerate(classes)
                    ],
                )

            days = sorted(set(off_days))
            if days:
                cur.executemany(
                    "INSERT INTO schedule_off_days(schedule_id, day) VALUES(%s,%s)",
                    [(schedule_id, d) for d in days],
                )
            return schedule_id

    def delete_for_user(self, *, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedules WHERE user_id=%s", (int(user_id),))
            return cur.rowcount
