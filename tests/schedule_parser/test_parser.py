from __future__ import annotations

import pytest

from trackly.core.exceptions import NoExtractableTextError, PdfNotFoundError, ScheduleParseError
from trackly.schedule_parser import pdf_source
from trackly.schedule_parser.parser import ScheduleParser, default_strategies
from trackly.schedule_parser.pdf_source import PdfDocument, TextElement, read_pdf
from trackly.schedule_parser.strategies.base import ExtractionStrategy, ScheduleItem


class Boom(ExtractionStrategy):
    name = "boom"

    def try_extract(self, document):
        raise RuntimeError("layout confused me")


class Fixed(ExtractionStrategy):
    name = "fixed"

    def __init__(self, items):
        self.items = items
        self.calls = 0

    def try_extract(self, document):
        self.calls += 1
        return list(self.items)


def test_default_chain_order():
    assert [s.name for s in default_strategies()] == ["position", "column_offset", "day_time", "paragraph", "fallback"]


def test_failing_strategy_is_skipped():
    item = ScheduleItem(day="Monday", time="09:00 - 10:00", subject="Physics")
    parser = ScheduleParser([Boom(), Fixed([item])])

    assert parser.parse(PdfDocument(text="anything")) == [item]


def test_first_non_empty_strategy_wins():
    later = Fixed([ScheduleItem(day="Friday", time="09:00 - 10:00", subject="Art")])
    parser = ScheduleParser([Fixed([]), Fixed([ScheduleItem(day="Monday", time="09:00 - 10:00", subject="Maths")]), later])

    items = parser.parse(PdfDocument(text="anything"))

    assert [i.subject for i in items] == ["Maths"]
    assert later.calls == 0


def test_duplicates_are_dropped_case_insensitively():
    items = [
        ScheduleItem(day="Monday", time="09:00 - 10:00", subject="Physics"),
        ScheduleItem(day="Monday", time="09:00 - 10:00", subject="PHYSICS", room="B12"),
        ScheduleItem(day="Tuesday", time="09:00 - 10:00", subject="Physics"),
    ]

    parsed = ScheduleParser([Fixed(items)]).parse(PdfDocument(text="x"))

    assert [(i.day, i.subject) for i in parsed] == [("Monday", "Physics"), ("Tuesday", "Physics")]


def test_missing_file(tmp_path):
    with pytest.raises(PdfNotFoundError, match="PDF file not found on server"):
        ScheduleParser().parse_file(tmp_path / "missing.pdf")


def test_pdf_without_text_layer(tmp_path):
    pdf = tmp_path / "scan.pdf"
    pdf.write_bytes(b"%PDF-1.4 image only")
    parser = ScheduleParser(reader=lambda path: PdfDocument(text="   \n  "))

    with pytest.raises(NoExtractableTextError):
        parser.parse_file(pdf)


def test_parse_file_uses_positioned_words(tmp_path):
    pdf = tmp_path / "timetable.pdf"
    pdf.write_bytes(b"%PDF-1.4")
    words = (
        TextElement("Mon", x=100, y=50),
        TextElement("Tue", x=200, y=50),
        TextElement("Wed", x=300, y=50),
        TextElement("9-10", x=20, y=80),
        TextElement("Physics Lab B12", x=100, y=80),
    )
    parser = ScheduleParser(reader=lambda path: PdfDocument(text="Mon Tue Wed", words=words))

    items = parser.parse_file(pdf)

    assert [i.to_dict() for i in items] == [
        {
            "day": "Monday",
            "time": "09:00 - 10:00",
            "subject": "Physics",
            "room": "B12",
            "classType": "Lab",
            "isFallback": False,
        }
    ]


class _FakePage:
    def __init__(self, text, words):
        self._text = text
        self._words = words

    def extract_text(self, layout=False):
        return self._text

    def extract_words(self, keep_blank_chars=False):
        return self._words


class _FakePdf:
    def __init__(self, pages):
        self.pages = pages

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_read_pdf_collects_text_and_positioned_words(monkeypatch, tmp_path):
    pages = [
        _FakePage("Monday Tuesday", [{"text": "Monday", "x0": 10.0, "top": 20.5}]),
        _FakePage(None, [{"text": "Physics", "x0": 12.0, "top": 40.0}]),
    ]
    monkeypatch.setattr(pdf_source.pdfplumber, "open", lambda path: _FakePdf(pages))

    document = read_pdf(tmp_path / "timetable.pdf")

    assert document.text == "Monday Tuesday\n"
    assert document.words == (
        TextElement("Monday", x=10.0, y=20.5, page=0),
        TextElement("Physics", x=12.0, y=40.0, page=1),
    )


def test_unreadable_pdf_raises_parse_error(monkeypatch, tmp_path):
    def broken(path):
        raise ValueError("No /Root object! - Is this really a PDF?")

    monkeypatch.setattr(pdf_source.pdfplumber, "open", broken)

    with pytest.raises(ScheduleParseError, match="Failed to parse schedule PDF"):
        read_pdf(tmp_path / "broken.pdf")
