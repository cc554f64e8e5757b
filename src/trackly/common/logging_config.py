from __future__ import annotations

import logging

_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Root logging for the app process. Safe to call more than once."""

    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=_FORMAT)
    logging.getLogger().setLevel(getattr(logging, str(level).upper(), logging.INFO))

    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("pdfminer").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
    logging.getLogger("apscheduler.executors.default").setLevel(logging.ERROR)
