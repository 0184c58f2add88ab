"""Package logger.

The TUI owns the terminal, so log records go to a file under the data
directory once :func:`setup_logging` has run and are otherwise dropped.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger("branchdeck")
logger.addHandler(logging.NullHandler())

_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: str | int = "INFO", path: Path | None = None) -> None:
    """Attach a file handler to the package logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    if path is None:
        return
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        logger.debug("cannot open log file %s", path, exc_info=True)
        return
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
