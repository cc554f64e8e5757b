from __future__ import annotations

import json
from typing import Optional, Sequence

from ..core.enums import ClassType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_column
from .model import Subject, empty_class_type_stats
from .repository import SubjectRepository

_COLUMNS = """
    subject_id, user_id, name, code, class_type, semester,
    total_classes, attended_classes, class_type_stats, created_at
"""


def _to_subject(row: dict) -> Subject:
    stats = empty_class_type_stats()
    stats.update(load_json_column(row.get("class_type_stats"), {}))
    return Subject(
        subject_id=int(row["subject_id"]),
        user_id=int(row["user_id"]),
        name=row["name"],
        code=row["code"],
        class_type=ClassType.normalize(row.get("class_type")),
        semester=int(row["semester"]),
        total_classes=int(row.get("total_classes") or 0),
        attended_classes=int(row.get("attended_classes") or 0),
        class_type_stats=stats,
        created_at=row.get("created_at"),
    )


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user(self, *, user_id: int, subject_id: int) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM subjects WHERE subject_id=%s AND user_id=%s",
                (int(subject_id), int(user_id)),
            )
            row = fetchone(cur)
            return _to_subject(row) if row else None

    def find_by_name(self, *, user_id: int, name: str, semester: Optional[int] = None) -> Optional[Subject]:
        clauses = ["user_id=%s", "LOWER(name)=LOWER(%s)"]
        params: list[object] = [int(user_id), name]
        if semester is not None:
            clauses.append("semester=%s")
            params.append(int(semester))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM subjects WHERE {' AND '.join(clauses)} ORDER BY subject_id LIMIT 1",
                tuple(params),
            )
            row = fetchone(cur)
            return _to_subject(row) if row else None

    def find_preparatory(self, *, user_id: int) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM subjects
                WHERE user_id=%s AND class_type=%s
                ORDER BY subject_id LIMIT 1
                """,
                (int(user_id), ClassType.PREPARATORY.value),
            )
            row = fetchone(cur)
            return _to_subject(row) if row else None

    def list_for_user(self, *, user_id: int, semester: Optional[int] = None) -> Sequence[Subject]:
        sql = f"SELECT {_COLUMNS} FROM subjects WHERE user_id=%s"
        params: list[object] = [int(user_id)]
        if semester is not None:
            sql += " AND semester=%s"
            params.append(int(semester))
        sql += " ORDER BY name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_subject(r) for r in fetchall(cur)]

    def create(self, *, user_id: int, name: str, code: str, class_type: ClassType, semester: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO subjects(user_id, name, code, class_type, semester, class_type_stats)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), name, code, class_type.value, int(semester), json.dumps(empty_class_type_stats())),
            )
            return int(cur.lastrowid)

    def update(self, subject: Subject) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE subjects SET name=%s, code=%s, class_type=%s, semester=%s
                WHERE subject_id=%s AND user_id=%s
                """,
                (
                    subject.name,
                    subject.code,
                    subject.class_type.value,
                    int(subject.semester),
                    int(subject.subject_id),
                    int(subject.user_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, *, user_id: int, subject_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM subjects WHERE subject_id=%s AND user_id=%s", (int(subject_id), int(user_id)))
            return cur.rowcount > 0

    def increment_counters(self, *, subject_id: int, attended: bool, class_type: Optional[ClassType] = None) -> bool:
        bump = 1 if attended else 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE subjects
                SET total_classes = total_classes + 1, attended_classes = attended_classes + %s
                WHERE subject_id=%s
                """,
                (bump, int(subject_id)),
            )
            updated = cur.rowcount > 0

            if updated and class_type is not None and class_type in ClassType.tracked():
                total_path = f"$.{class_type.value}.total"
                attended_path = f"$.{class_type.value}.attended"
                cur.execute(
                    """
                    UPDATE subjects
                    SET class_type_stats = JSON_SET(
                        class_type_stats,
                        %s, COALESCE(JSON_EXTRACT(class_type_stats, %s), 0) + 1,
                        %s, COALESCE(JSON_EXTRACT(class_type_stats, %s), 0) + %s
                    )
                    WHERE subject_id=%s AND JSON_CONTAINS_PATH(class_type_stats, 'one', %s)
                    """,
                    (
                        total_path,
                        total_path,
                        attended_path,
                        attended_path,
                        bump,
                        int(subject_id),
                        f"$.{class_type.value}",
                    ),
                )
            return updated
