import pytest

from trackly.schedule_parser.text_utils import cell_day, normalize_time, split_cell


@pytest.mark.parametrize(
    "cell, expected",
    [
        ("Physics Lab B12", ("Physics", "B12", "Lab")),
        ("Data Structures Room 204", ("Data Structures", "204", "")),
        ("Organic Chemistry Tutorial", ("Organic Chemistry", "", "Tutorial")),
        ("Economics", ("Economics", "", "")),
    ],
)
def test_split_cell(cell, expected):
    assert split_cell(cell) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("9-10", "09:00 - 10:00"),
        ("9.00-10.30", "09:00 - 10:30"),
        ("13:00 - 14:30", "13:00 - 14:30"),
        ("tba", "tba"),
    ],
)
def test_normalize_time(text, expected):
    assert normalize_time(text) == expected


def test_cell_day():
    assert cell_day("Mon") == "Monday"
    assert cell_day("THURSDAY:") == "Thursday"
    assert cell_day("Physics") is None
