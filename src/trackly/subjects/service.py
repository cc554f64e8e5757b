from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_fields, require_non_empty
from ..core.constants import PREPARATORY_SUBJECT_CODE, PREPARATORY_SUBJECT_NAME
from ..core.enums import AttendanceStatus, ClassType
from ..core.exceptions import NotFoundError, ValidationError
from .model import Subject
from .repository import SubjectRepository

logger = logging.getLogger(__name__)


class SubjectService:
    def __init__(self, subjects: SubjectRepository):
        self._subjects = subjects

    @staticmethod
    def _name(value: Any) -> str:
        name = require_non_empty(value, "name")
        if len(name) > 100:
            raise ValidationError("Subject name cannot exceed 100 characters")
        return name

    @staticmethod
    def _semester(value: Any) -> int:
        try:
            semester = int(value)
        except (TypeError, ValueError):
            raise ValidationError("semester must be a number", [{"field": "semester", "msg": "invalid"}])
        if semester < 1:
            raise ValidationError("semester must be >= 1", [{"field": "semester", "msg": "min 1"}])
        return semester

    def create(self, user_id: int, payload: Mapping[str, Any]) -> Subject:
        require_fields(payload, ["name", "code", "semester"])
        name = self._name(payload["name"])
        code = require_non_empty(payload["code"], "code")
        semester = self._semester(payload["semester"])

        class_type = ClassType.normalize(payload.get("classType"))
        subject_id = self._subjects.create(
            user_id=int(user_id), name=name, code=code, class_type=class_type, semester=semester
        )
        return self.get(user_id, subject_id)

    def update(self, user_id: int, subject_id: int, payload: Mapping[str, Any]) -> Subject:
        """Apply the fields present in payload; attendance counters are left alone."""

        subject = self.get(user_id, subject_id)
        changes: dict[str, Any] = {}
        if "name" in payload:
            changes["name"] = self._name(payload["name"])
        if "code" in payload:
            changes["code"] = require_non_empty(payload["code"], "code")
        if "classType" in payload:
            changes["class_type"] = ClassType.normalize(payload["classType"])
        if "semester" in payload:
            changes["semester"] = self._semester(payload["semester"])

        updated = replace(subject, **changes)
        self._subjects.update(updated)
        return updated

    def get(self, user_id: int, subject_id: int) -> Subject:
        subject = self._subjects.get_for_user(user_id=int(user_id), subject_id=int(subject_id))
        if not subject:
            raise NotFoundError("Subject not found")
        return subject

    def find(self, user_id: int, subject_id: Any) -> Optional[Subject]:
        """Soft lookup used inside batch loops: bad ids simply yield None."""

        try:
            sid = int(subject_id)
        except (TypeError, ValueError):
            return None
        return self._subjects.get_for_user(user_id=int(user_id), subject_id=sid)

    def list(self, user_id: int, *, semester: Optional[int] = None) -> Sequence[Subject]:
        return self._subjects.list_for_user(user_id=int(user_id), semester=semester)

    def delete(self, user_id: int, subject_id: int) -> None:
        if not self._subjects.delete(user_id=int(user_id), subject_id=int(subject_id)):
            raise NotFoundError("Subject not found")

    def ensure_preparatory(self, user_id: int, semester: int) -> Subject:
        existing = self._subjects.find_preparatory(user_id=int(user_id))
        if existing:
            return existing
        subject_id = self._subjects.create(
            user_id=int(user_id),
            name=PREPARATORY_SUBJECT_NAME,
            code=PREPARATORY_SUBJECT_CODE,
            class_type=ClassType.PREPARATORY,
            semester=int(semester),
        )
        logger.info("Created Preparatory subject %s for user %s", subject_id, user_id)
        return self.get(user_id, subject_id)

    def resolve_or_create(self, user_id: int, *, name: str, semester: int, class_type: ClassType) -> Subject:
        """Match a schedule entry to a subject by name, creating one when missing."""

        existing = self._subjects.find_by_name(user_id=int(user_id), name=name, semester=int(semester))
        if existing:
            return existing
        code = re.sub(r"[^A-Z0-9]", "", name.upper())[:8] or "SUBJ"
        subject_id = self._subjects.create(
            user_id=int(user_id), name=name, code=code, class_type=class_type, semester=int(semester)
        )
        return self.get(user_id, subject_id)

    def apply_attendance(self, subject: Subject, *, status: AttendanceStatus, class_type: Optional[str]) -> None:
        ct = ClassType.normalize(class_type)
        self._subjects.increment_counters(
            subject_id=subject.subject_id,
            attended=status == AttendanceStatus.PRESENT,
            class_type=ct if ct in ClassType.tracked() else None,
        )
