from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Schedule, ScheduledClass


class ScheduleRepository(Protocol):
    def get_latest(self, *, user_id: int, semester: int) -> Optional[Schedule]:
        """Most recently created schedule for the user and semester."""

        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        semester: int,
        academic_period_id: Optional[int],
        classes: Sequence[ScheduledClass],
        off_days: Iterable[str],
    ) -> int:
        """Persist a schedule with its classes. Returns schedule_id."""

        raise NotImplementedError

    def delete_for_user(self, *, user_id: int) -> int:
        raise NotImplementedError
