"""Structured JSON logging for the dispatch layer.

Context goes in ``extra={...}``; every extra field becomes a top-level key
of the emitted JSON line. Fields whose name ends in ``phone`` are masked
down to their last four digits.
"""

import json
import logging
import sys
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord has; anything else came from `extra`.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
    | {"message", "asctime"}
)

_QUIET_BY_DEFAULT = ("httpx", "httpcore", "sqlalchemy.engine")
_VISIBLE_DIGITS = 4


def mask_phone(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    digits = [c for c in value if c.isdigit()]
    if len(digits) <= _VISIBLE_DIGITS:
        return value
    return "*" * (len(digits) - _VISIBLE_DIGITS) + "".join(digits[-_VISIBLE_DIGITS:])


class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "thread": record.threadName,
        }
        entry.update(self._extras(record))

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)

    @staticmethod
    def _extras(record: logging.LogRecord) -> dict[str, object]:
        extras: dict[str, object] = {}
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS:
                continue
            extras[key] = mask_phone(value) if key.endswith("phone") else value
        return extras


def setup_logging(level: str = "INFO", quiet: Sequence[str] = _QUIET_BY_DEFAULT) -> None:
    """Send JSON lines to stdout at *level*.

    Loggers named in *quiet* (HTTP client and SQL echo by default) are
    raised to WARNING.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
