from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import pdfplumber

from ..core.exceptions import ScheduleParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextElement:
    """A run of text at a position on a page (PDF points, origin top-left)."""

    text: str
    x: float
    y: float
    page: int = 0


@dataclass(frozen=True)
class PdfDocument:
    text: str
    words: tuple[TextElement, ...] = ()

    @property
    def lines(self) -> list[str]:
        return [line.rstrip("\r") for line in self.text.split("\n") if line.strip()]

    @property
    def has_content(self) -> bool:
        return bool(self.text.strip()) or any(w.text.strip() for w in self.words)


def read_pdf(path: Union[str, Path]) -> PdfDocument:
    """Pull the text layer and positioned words out of a PDF."""

    texts: list[str] = []
    words: list[TextElement] = []
    try:
        with pdfplumber.open(str(path)) as pdf:
            for page_no, page in enumerate(pdf.pages):
                texts.append(page.extract_text(layout=True) or "")
                for w in page.extract_words(keep_blank_chars=True):
                    words.append(TextElement(text=w["text"], x=float(w["x0"]), y=float(w["top"]), page=page_no))
    except Exception as exc:
        logger.exception("Could not read PDF %s", path)
        raise ScheduleParseError(f"Failed to parse schedule PDF: {exc}") from exc

    logger.debug("Read %s: %d pages, %d words", path, len(texts), len(words))
    return PdfDocument(text="\n".join(texts), words=tuple(words))
