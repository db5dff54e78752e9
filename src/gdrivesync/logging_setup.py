"""Logging configuration for gdrivesync runs."""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Optional

_DATEFMT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """Single-line JSON formatter.

    Produces one JSON object per log record with fields: ts, level, logger, msg.
    Exception info is included as an "exc" field when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _make_formatter(fmt: str, *, with_name: bool) -> logging.Formatter:
    if fmt == "json":
        return JsonFormatter(datefmt=_DATEFMT)
    pattern = "[%(asctime)s] [%(levelname)s] %(name)s %(message)s" if with_name else (
        "[%(asctime)s] [%(levelname)s] %(message)s"
    )
    return logging.Formatter(pattern, datefmt=_DATEFMT)


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    fmt: str = "text",
) -> None:
    """
    Configure root logging to stderr and, optionally, a file.

    Args:
        level: Level name. Falls back to the LOG_LEVEL env var, then INFO.
        log_file: Optional file that receives the same records.
        fmt: "text" (default) or "json".
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    handlers: list[logging.Handler] = []
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(_make_formatter(fmt, with_name=False))
    handlers.append(stderr_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(_make_formatter(fmt, with_name=True))
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    # googleapiclient logs every discovery/request at INFO
    if log_level != logging.DEBUG:
        logging.getLogger("googleapiclient").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)
