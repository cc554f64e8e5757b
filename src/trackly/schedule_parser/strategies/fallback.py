from __future__ import annotations

import re

from ...core.constants import FALLBACK_MAX_SUBJECTS, FALLBACK_TIME_SLOTS
from ..pdf_source import PdfDocument
from ..text_utils import NUMERIC_ONLY_RE, clean_subject
from .base import ExtractionStrategy, ScheduleItem

_HEADER_WORDS_RE = re.compile(r"\b(time|day|date|room|schedule|table|pdf|page)\b", re.IGNORECASE)
_FALLBACK_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")


class FallbackScheduleStrategy(ExtractionStrategy):
    """Last resort: spread subject-looking lines over a placeholder week.

    Items are flagged is_fallback so the client can ask the user to fix them.
    """

    name = "fallback"

    def try_extract(self, document: PdfDocument) -> list[ScheduleItem]:
        subjects: list[str] = []
        for raw in document.lines:
            line = raw.strip()
            if len(line) < 4 or NUMERIC_ONLY_RE.match(line):
                continue
            if _HEADER_WORDS_RE.search(line) or len(line) >= 60 or not re.search(r"[A-Za-z]", line):
                continue
            subject = clean_subject(line)[:50]
            if subject not in subjects:
                subjects.append(subject)

        items = []
        for index, subject in enumerate(subjects[:FALLBACK_MAX_SUBJECTS]):
            slot = FALLBACK_TIME_SLOTS[index // len(_FALLBACK_DAYS) % len(FALLBACK_TIME_SLOTS)]
            items.append(
                ScheduleItem(
                    day=_FALLBACK_DAYS[index % len(_FALLBACK_DAYS)],
                    time=slot,
                    subject=subject,
                    room="Room TBD",
                    class_type="Class",
                    is_fallback=True,
                )
            )
        return items
