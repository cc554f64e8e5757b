from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Iterator

from ..core.constants import WEEKDAYS
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    Longer ISO timestamps ("2026-02-01T00:00:00.000Z") are accepted and cut to
    the calendar date, which is what browsers send for date pickers.
    """
    try:
        return datetime.strptime(str(value).strip()[:10], "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_hhmm(value: str) -> time:
    v = (value or "").strip()
    try:
        return datetime.strptime(v[:5], "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time: {value!r} (expected HH:MM)")


def format_hhmm(value: time | None) -> str:
    return value.strftime("%H:%M") if value else ""


def weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


_RANGE_PART_RE = re.compile(r"^\s*(\d{1,2})(?:[:.](\d{2}))?\s*([ap]\.?m\.?)?\s*$", re.IGNORECASE)


def _parse_clock(part: str, meridiem_hint: str | None = None) -> time:
    m = _RANGE_PART_RE.match(part)
    if not m:
        raise ValidationError(f"Invalid time: {part!r}")
    hour = int(m.group(1))
    minute = int(m.group(2) or 0)
    meridiem = (m.group(3) or meridiem_hint or "").lower().replace(".", "")
    if meridiem == "pm" and hour < 12:
        hour += 12
    elif meridiem == "am" and hour == 12:
        hour = 0
    if hour > 23 or minute > 59:
        raise ValidationError(f"Invalid time: {part!r}")
    return time(hour=hour, minute=minute)


def parse_time_range(value: str) -> tuple[time, time]:
    """Parse "09:00 - 10:00", "9-10", "9.00-10.30" or "9:00 AM - 10:30 AM"."""

    parts = str(value or "").split("-")
    if len(parts) != 2:
        raise ValidationError(f"Invalid time range: {value!r} (expected HH:MM - HH:MM)")
    end = _parse_clock(parts[1])
    if re.search(r"[ap]\.?m", parts[0], re.IGNORECASE) or not re.search(r"[ap]\.?m", parts[1], re.IGNORECASE):
        return _parse_clock(parts[0]), end
    # "9 - 10:30 AM": the start borrows the end's meridiem unless that puts it after the end
    hint = "pm" if end.hour >= 12 else "am"
    start = _parse_clock(parts[0], hint)
    if start > end:
        start = _parse_clock(parts[0])
    return start, end


def standardize_day(value: str | None) -> str | None:
    """Map "mon", "Tues", "WEDNESDAY" etc. to the full weekday name."""

    v = (value or "").strip().lower()
    if len(v) < 3:
        return None
    for name in WEEKDAYS:
        if name.lower().startswith(v[:3]):
            return name
    return None
