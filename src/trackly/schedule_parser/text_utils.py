"""Regexes and cleaners shared by the extraction strategies."""

from __future__ import annotations

import re
from typing import Optional

from ..common.datetime_utils import parse_time_range, standardize_day
from ..core.exceptions import ValidationError

DAY_TOKENS = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
    "mon", "tue", "wed", "thu", "fri", "sat", "sun",
)

DAY_RE = re.compile(r"\b(" + "|".join(DAY_TOKENS) + r")\b", re.IGNORECASE)

# Either "9:00 - 10:30" / "9.00-10.30" or a bare hour range "9 - 10".
TIME_RANGE_RE = re.compile(r"\b\d{1,2}[:.]\d{2}\s*-\s*\d{1,2}[:.]\d{2}\b|\b\d{1,2}\s*-\s*\d{1,2}\b")

ROOM_RE = re.compile(
    r"\b(?:room|rm)\s*([a-z0-9-]+)\b|\b([a-z][-]?[0-9]{1,3}|[a-z]{1,3}[-]?[0-9]{1,3})\b",
    re.IGNORECASE,
)

CLASS_TYPE_RE = re.compile(
    r"\b(lecture|lec|theory|laboratory|lab|tutorial|tut|practical|prac|seminar|workshop)\b",
    re.IGNORECASE,
)

CLASS_TYPES = {
    "lecture": "Lecture",
    "lec": "Lecture",
    "theory": "Lecture",
    "lab": "Lab",
    "laboratory": "Lab",
    "tutorial": "Tutorial",
    "tut": "Tutorial",
    "practical": "Practical",
    "prac": "Practical",
    "seminar": "Seminar",
    "workshop": "Workshop",
}


def cell_day(text: str) -> Optional[str]:
    """Full weekday name when a table cell is a day heading ("Mon", "monday", "Day Tuesday")."""

    t = (text or "").strip().lower().rstrip(":")
    for token in DAY_TOKENS:
        if t == token or t.startswith(token + " ") or t.endswith(" " + token):
            return standardize_day(token)
    return None


def is_day_name(text: str) -> bool:
    return (text or "").strip().lower() in DAY_TOKENS


def normalize_time(text: str) -> str:
    """Render a time range as "HH:MM - HH:MM"; unparseable input is returned trimmed."""

    try:
        start, end = parse_time_range(text)
    except ValidationError:
        return " ".join((text or "").split())
    return f"{start:%H:%M} - {end:%H:%M}"


def extract_room(text: str) -> tuple[str, str]:
    m = ROOM_RE.search(text)
    if not m:
        return "", text
    room = (m.group(1) or m.group(2)).upper()
    return room, (text[: m.start()] + text[m.end() :]).strip()


def extract_class_type(text: str) -> tuple[str, str]:
    m = CLASS_TYPE_RE.search(text)
    if not m:
        return "", text
    return CLASS_TYPES[m.group(1).lower()], (text[: m.start()] + text[m.end() :]).strip()


def clean_subject(text: str) -> str:
    return re.sub(r"[.,;:]+$", "", re.sub(r"\s+", " ", text or "")).strip()


def split_cell(text: str) -> tuple[str, str, str]:
    """Split a timetable cell like "Physics Lab B12" into (subject, room, class_type)."""

    room, rest = extract_room(text.strip())
    class_type, rest = extract_class_type(rest)
    return clean_subject(rest), room, class_type


NUMERIC_ONLY_RE = re.compile(r"^[\d\s.,:-]+$")
