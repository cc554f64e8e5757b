from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from ..core.exceptions import NoExtractableTextError, PdfNotFoundError
from .pdf_source import PdfDocument, read_pdf
from .strategies.base import ExtractionStrategy, ScheduleItem
from .strategies.column_offset import ColumnOffsetStrategy
from .strategies.day_time import DayTimePatternStrategy
from .strategies.fallback import FallbackScheduleStrategy
from .strategies.paragraph import ParagraphBlockStrategy
from .strategies.position_table import PositionTableStrategy

logger = logging.getLogger(__name__)


def default_strategies() -> list[ExtractionStrategy]:
    """Most structured layout first, placeholder week last."""

    return [
        PositionTableStrategy(),
        ColumnOffsetStrategy(),
        DayTimePatternStrategy(),
        ParagraphBlockStrategy(),
        FallbackScheduleStrategy(),
    ]


class ScheduleParser:
    """Chain of Responsibility over ExtractionStrategy objects.

    The first strategy to return items wins. A strategy that raises is
    logged and skipped; it never fails the whole parse.
    """

    def __init__(
        self,
        strategies: Optional[Sequence[ExtractionStrategy]] = None,
        *,
        reader: Callable[[Union[str, Path]], PdfDocument] = read_pdf,
    ):
        self.strategies = list(strategies) if strategies is not None else default_strategies()
        self._reader = reader

    def parse(self, document: PdfDocument) -> list[ScheduleItem]:
        for strategy in self.strategies:
            try:
                items = strategy.try_extract(document)
            except Exception:
                logger.exception("Extraction strategy %s failed", strategy.name)
                continue
            logger.info("Strategy %s found %d items", strategy.name, len(items))
            if items:
                return _dedupe(items)
        return []

    def parse_file(self, path: Union[str, Path]) -> list[ScheduleItem]:
        if not Path(path).is_file():
            logger.error("PDF file not found at path: %s", path)
            raise PdfNotFoundError("PDF file not found on server")

        document = self._reader(path)
        if not document.has_content:
            raise NoExtractableTextError(
                "The PDF contains no extractable text. "
                "It may be empty, password protected, or contain only images"
            )
        return self.parse(document)


def _dedupe(items: Sequence[ScheduleItem]) -> list[ScheduleItem]:
    seen = set()
    out = []
    for item in items:
        key = (item.day, item.time, item.subject.lower())
        if key not in seen:
            seen.add(key)
            out.append(item)
    return out


def parse_schedule_pdf(path: Union[str, Path]) -> list[ScheduleItem]:
    return ScheduleParser().parse_file(path)
