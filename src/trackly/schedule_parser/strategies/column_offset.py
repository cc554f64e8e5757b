from __future__ import annotations

import re
from dataclasses import dataclass

from ...common.datetime_utils import standardize_day
from ..pdf_source import PdfDocument
from ..text_utils import DAY_RE, NUMERIC_ONLY_RE, normalize_time, split_cell
from .base import ExtractionStrategy, ScheduleItem

_TIME_PATTERNS = (
    re.compile(r"(\d{1,2}[:.]\d{2})\s*-\s*(\d{1,2}[:.]\d{2})"),
    re.compile(r"(\d{1,2})\s*-\s*(\d{1,2})"),
    re.compile(r"(\d{1,2}[:.]\d{2})"),
)


@dataclass(frozen=True)
class _Column:
    day: str
    start: int
    end: int


class ColumnOffsetStrategy(ExtractionStrategy):
    """Treat the character offsets of a weekday header line as table columns.

    A time row owns its own cells and those of up to two following lines,
    stopping early at the next time row.
    """

    name = "column_offset"
    header_search_lines = 15
    min_header_days = 3

    def try_extract(self, document: PdfDocument) -> list[ScheduleItem]:
        lines = document.lines
        header_index, columns = self._find_header(lines)
        if header_index is None:
            return []

        items: list[ScheduleItem] = []
        for i in range(header_index + 1, len(lines)):
            time_text = self._time_for(lines, i)
            if not time_text:
                continue

            for offset, row in enumerate(lines[i : i + 3]):
                # the next time row starts its own slot
                if offset and self._time_for(lines, i + offset):
                    break
                for col in columns:
                    if len(row) <= col.start:
                        continue
                    content = row[col.start : col.end].strip()
                    if not content or DAY_RE.search(content) or any(p.search(content) for p in _TIME_PATTERNS):
                        continue
                    if len(content) < 2 or NUMERIC_ONLY_RE.match(content):
                        continue
                    subject, room, class_type = split_cell(content)
                    if len(subject) >= 2:
                        items.append(
                            ScheduleItem(day=col.day, time=time_text, subject=subject, room=room, class_type=class_type)
                        )
        return items

    def _find_header(self, lines: list[str]):
        for i, line in enumerate(lines[: self.header_search_lines]):
            matches = list(DAY_RE.finditer(line))
            if len(matches) < self.min_header_days:
                continue
            columns = []
            for n, m in enumerate(matches):
                end = matches[n + 1].start() if n + 1 < len(matches) else 100000
                columns.append(_Column(day=standardize_day(m.group(1)), start=m.start(), end=end))
            return i, columns
        return None, []

    @staticmethod
    def _time_for(lines: list[str], index: int) -> str:
        line = lines[index]
        for pattern in _TIME_PATTERNS:
            m = pattern.search(line)
            if not m:
                continue
            if m.lastindex == 1:
                # A lone start time: pair it with the next time within two lines.
                for following in lines[index + 1 : index + 3]:
                    nxt = pattern.search(following)
                    if nxt:
                        return normalize_time(f"{m.group(0)} - {nxt.group(0)}")
                return m.group(0)
            return normalize_time(m.group(0))
        return ""
