from datetime import date, time

import pytest

from trackly.common.datetime_utils import iter_days, parse_iso_date, parse_time_range, standardize_day
from trackly.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "value, expected",
    [
        ("09:00 - 10:00", (time(9, 0), time(10, 0))),
        ("9-10", (time(9, 0), time(10, 0))),
        ("9.00-10.30", (time(9, 0), time(10, 30))),
        ("9:00 AM - 10:30 AM", (time(9, 0), time(10, 30))),
        ("1:00 - 2:30 PM", (time(13, 0), time(14, 30))),
        ("11 - 1 PM", (time(11, 0), time(13, 0))),
    ],
)
def test_parse_time_range(value, expected):
    assert parse_time_range(value) == expected


@pytest.mark.parametrize("value", ["", "nine to ten", "25:00 - 26:00", "9-10-11"])
def test_parse_time_range_rejects_garbage(value):
    with pytest.raises(ValidationError):
        parse_time_range(value)


def test_standardize_day():
    assert standardize_day("mon") == "Monday"
    assert standardize_day("Tues") == "Tuesday"
    assert standardize_day("SUNDAY") == "Sunday"
    assert standardize_day("xy") is None
    assert standardize_day("holiday") is None


def test_parse_iso_date_accepts_timestamps():
    assert parse_iso_date("2026-02-01T00:00:00.000Z") == date(2026, 2, 1)
    with pytest.raises(ValidationError):
        parse_iso_date("01/02/2026")


def test_iter_days_is_inclusive():
    assert list(iter_days(date(2026, 3, 1), date(2026, 3, 3))) == [date(2026, 3, 1), date(2026, 3, 2), date(2026, 3, 3)]
    assert list(iter_days(date(2026, 3, 3), date(2026, 3, 1))) == []
