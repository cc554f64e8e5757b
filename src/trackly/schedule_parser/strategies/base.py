from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..pdf_source import PdfDocument


@dataclass(frozen=True)
class ScheduleItem:
    """One proposed class slot, shown to the user for confirmation before saving."""

    day: str
    time: str
    subject: str
    room: str = ""
    class_type: str = ""
    is_fallback: bool = False

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "time": self.time,
            "subject": self.subject,
            "room": self.room,
            "classType": self.class_type,
            "isFallback": self.is_fallback,
        }


class ExtractionStrategy(ABC):
    """Strategy Pattern: one way of reading a timetable out of a PDF."""

    name = "base"

    @abstractmethod
    def try_extract(self, document: PdfDocument) -> list[ScheduleItem]:
        """Return the items found, or an empty list when the layout does not fit."""

        raise NotImplementedError
