from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ClassType
from .model import Subject


class SubjectRepository(Protocol):
    def get_for_user(self, *, user_id: int, subject_id: int) -> Optional[Subject]:
        raise NotImplementedError

    def find_by_name(self, *, user_id: int, name: str, semester: Optional[int] = None) -> Optional[Subject]:
        raise NotImplementedError

    def find_preparatory(self, *, user_id: int) -> Optional[Subject]:
        raise NotImplementedError

    def list_for_user(self, *, user_id: int, semester: Optional[int] = None) -> Sequence[Subject]:
        raise NotImplementedError

    def create(self, *, user_id: int, name: str, code: str, class_type: ClassType, semester: int) -> int:
        raise NotImplementedError

    def update(self, subject: Subject) -> bool:
        raise NotImplementedError

    def delete(self, *, user_id: int, subject_id: int) -> bool:
        raise NotImplementedError

    def increment_counters(self, *, subject_id: int, attended: bool, class_type: Optional[ClassType] = None) -> bool:
        """Atomically bump total (and attended) counters.

        When class_type is given, the matching class_type_stats entry is bumped too.
        """

        raise NotImplementedError
