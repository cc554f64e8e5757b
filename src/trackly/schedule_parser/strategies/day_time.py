from __future__ import annotations

import re

from ...common.datetime_utils import standardize_day
from ..pdf_source import PdfDocument
from ..text_utils import DAY_RE, clean_subject, extract_class_type, extract_room, normalize_time
from .base import ExtractionStrategy, ScheduleItem

# Tried in order; the first that matches wins.
_TIME_FORMATS = (
    re.compile(r"(\d{1,2}:\d{2}\s*[AP]M)\s*-\s*(\d{1,2}:\d{2}\s*[AP]M)", re.IGNORECASE),
    re.compile(r"(\d{1,2}:\d{2})\s*-\s*(\d{1,2}:\d{2})"),
    re.compile(r"(\d{1,2})\s*-\s*(\d{1,2}:\d{2})"),
    re.compile(r"(\d{1,2})\s*-\s*(\d{1,2})"),
    re.compile(r"(\d{1,2}\.\d{2})\s*-\s*(\d{1,2}\.\d{2})"),
)

_MAX_SUBJECT = 50


class DayTimePatternStrategy(ExtractionStrategy):
    """Line-oriented timetables: "Monday 09:00 - 10:30 Physics Room 101"."""

    name = "day_time"

    def try_extract(self, document: PdfDocument) -> list[ScheduleItem]:
        lines = document.lines
        items: list[ScheduleItem] = []
        for i, line in enumerate(lines):
            combined = f"{line} {lines[i + 1]}" if i + 1 < len(lines) else line
            day_match = DAY_RE.search(combined)
            if not day_match:
                continue

            time_match = None
            for pattern in _TIME_FORMATS:
                time_match = pattern.search(combined)
                if time_match:
                    break
            if not time_match:
                continue

            after = combined[time_match.end() :]
            next_day = DAY_RE.search(after)
            if next_day:
                after = after[: next_day.start()]

            room, rest = extract_room(after.strip())
            class_type, rest = extract_class_type(rest)
            subject = _shorten(clean_subject(rest))
            if subject:
                items.append(
                    ScheduleItem(
                        day=standardize_day(day_match.group(1)),
                        time=normalize_time(f"{time_match.group(1)} - {time_match.group(2)}"),
                        subject=subject,
                        room=room,
                        class_type=class_type,
                    )
                )
        return items


def _shorten(subject: str) -> str:
    if len(subject) <= _MAX_SUBJECT:
        return subject
    cut = re.search(r"[.,;:]|\s\s", subject)
    if cut:
        return subject[: cut.start()].strip()
    return subject[:30].strip() + "..."
