"""Structured JSON logging for keyresponder.

The library itself only creates loggers; applications call
``setup_logging`` when they want the records written somewhere.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if hasattr(record, "data"):
            entry["data"] = record.data  # type: ignore[attr-defined]
        if record.exc_info and record.exc_info[1]:
            entry["error"] = str(record.exc_info[1])
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(
    level: int = logging.WARNING,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure structured logging for keyresponder.

    Args:
        level: Logging level for the ``keyresponder`` logger.
        log_file: File to append JSON lines to. Stderr only gets warnings.

    Returns:
        The ``keyresponder`` logger.
    """
    logger = logging.getLogger("keyresponder")
    logger.setLevel(level)

    if logger.handlers:
        return logger

    fmt = JSONFormatter()

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        fh.setLevel(level)
        logger.addHandler(fh)

    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    sh.setLevel(logging.WARNING)
    logger.addHandler(sh)

    return logger
