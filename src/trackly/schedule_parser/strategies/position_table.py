from __future__ import annotations

import logging
from collections import defaultdict
from typing import Optional, Sequence

from ..pdf_source import PdfDocument, TextElement
from ..text_utils import TIME_RANGE_RE, cell_day, is_day_name, normalize_time, split_cell
from .base import ExtractionStrategy, ScheduleItem

logger = logging.getLogger(__name__)

Row = tuple[float, list[TextElement]]


class PositionTableStrategy(ExtractionStrategy):
    """Rebuild a weekday-column table from word coordinates.

    Words whose y lies within `row_tolerance` points of a row's first word
    share that row. The header is the row naming the most weekdays (at least
    three). A cell below it belongs to the nearest day column when it sits
    within half the narrowest column gap, and the time of a row is the latest
    time-range cell seen on or above it.

    Pages without such a header are walked top to bottom instead, carrying
    the last day heading and time range seen.
    """

    name = "position"
    min_header_days = 3
    row_tolerance = 3.0

    def try_extract(self, document: PdfDocument) -> list[ScheduleItem]:
        pages: dict[int, list[TextElement]] = defaultdict(list)
        for word in document.words:
            if word.text.strip():
                pages[word.page].append(word)

        items: list[ScheduleItem] = []
        for page in sorted(pages):
            items.extend(self._extract_page(pages[page]))
        return items

    def _group_rows(self, words: Sequence[TextElement]) -> list[Row]:
        rows: list[Row] = []
        for w in sorted(words, key=lambda w: (w.y, w.x)):
            if rows and w.y - rows[-1][0] <= self.row_tolerance:
                rows[-1][1].append(w)
            else:
                rows.append((w.y, [w]))
        return [(y, sorted(cells, key=lambda c: c.x)) for y, cells in rows]

    def _extract_page(self, words: Sequence[TextElement]) -> list[ScheduleItem]:
        rows = self._group_rows(words)

        header_index = None
        header_days = 0
        for index, (_, row) in enumerate(rows):
            count = sum(1 for cell in row if cell_day(cell.text))
            if count >= self.min_header_days and count > header_days:
                header_index, header_days = index, count
        if header_index is None:
            return self._extract_without_header(rows)

        columns = sorted((cell.x, cell_day(cell.text)) for cell in rows[header_index][1] if cell_day(cell.text))
        max_distance = min(b[0] - a[0] for a, b in zip(columns, columns[1:])) / 2
        logger.debug("Header at y=%s with columns %s", rows[header_index][0], columns)

        items: list[ScheduleItem] = []
        current_time = None
        for _, row in rows[header_index + 1 :]:
            current_time = self._row_time(row) or current_time
            if not current_time:
                continue

            for cell in row:
                x, day = min(columns, key=lambda col: abs(col[0] - cell.x))
                if abs(x - cell.x) > max_distance:
                    continue
                item = self._cell_item(cell.text, day=day, time=current_time)
                if item:
                    items.append(item)
        return items

    def _extract_without_header(self, rows: list[Row]) -> list[ScheduleItem]:
        items: list[ScheduleItem] = []
        current_day = current_time = None
        next_row_used = False
        for index, (_, row) in enumerate(rows):
            for cell in row:
                current_day = cell_day(cell.text) or current_day
            current_time = self._row_time(row) or current_time
            if next_row_used or not (current_day and current_time):
                next_row_used = False
                continue

            # the subject often sits on the line under its time
            following = rows[index + 1][1] if index + 1 < len(rows) else []
            for n, cell in enumerate([*row, *following]):
                item = self._cell_item(cell.text, day=current_day, time=current_time)
                if item:
                    items.append(item)
                    next_row_used = n >= len(row)
                    break
        return items

    @staticmethod
    def _row_time(row: Sequence[TextElement]) -> Optional[str]:
        for cell in row:
            m = TIME_RANGE_RE.search(cell.text)
            if m:
                return normalize_time(m.group(0))
        return None

    @staticmethod
    def _cell_item(text: str, *, day: str, time: str) -> Optional[ScheduleItem]:
        text = text.strip()
        if TIME_RANGE_RE.search(text) or len(text) <= 2 or is_day_name(text):
            return None
        subject, room, class_type = split_cell(text)
        if len(subject) < 2:
            return None
        return ScheduleItem(day=day, time=time, subject=subject, room=room, class_type=class_type)
