from __future__ import annotations

import re

from ...common.datetime_utils import standardize_day
from ..pdf_source import PdfDocument
from ..text_utils import DAY_RE, clean_subject, normalize_time
from .base import ExtractionStrategy, ScheduleItem

_TIME_TOKEN_RE = re.compile(r"\b\d{1,2}[:.]\d{2}\b|\d{1,2}\s*-\s*\d{1,2}")
_TIME_RANGE_RE = re.compile(r"(\d{1,2}[:.]\d{2})\s*-\s*(\d{1,2}[:.]\d{2})|(\d{1,2})\s*-\s*(\d{1,2})")


class ParagraphBlockStrategy(ExtractionStrategy):
    """Blank-line separated blocks where a day heading is followed by time / subject line pairs."""

    name = "paragraph"

    def try_extract(self, document: PdfDocument) -> list[ScheduleItem]:
        items: list[ScheduleItem] = []
        for block in re.split(r"\n\s*\n", document.text):
            lines = [line.strip() for line in block.split("\n") if line.strip()]
            if len(lines) < 2:
                continue
            if not any(DAY_RE.search(l) for l in lines) or not any(_TIME_TOKEN_RE.search(l) for l in lines):
                continue

            current_day = None
            for i, line in enumerate(lines):
                day_match = DAY_RE.search(line)
                if day_match:
                    current_day = standardize_day(day_match.group(1))
                    continue
                if not current_day or i + 1 >= len(lines):
                    continue

                time_match = _TIME_RANGE_RE.search(line)
                if not time_match:
                    continue
                subject = clean_subject(lines[i + 1])
                if len(subject) > 2 and not subject[0].isdigit():
                    items.append(ScheduleItem(day=current_day, time=normalize_time(time_match.group(0)), subject=subject))
        return items
