"""Centralized logging setup for the device UI runtime.

Protocol traffic owns stdout, so log records are written to stderr as
JSON lines.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional, TextIO


class JsonFormatter(logging.Formatter):
    """Logging formatter that renders each record as one JSON object."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Attributes every LogRecord carries; anything else came in via `extra`.
        template = logging.LogRecord("template", logging.INFO, "path", 1, "msg", None, None)
        self._reserved_attrs = set(template.__dict__.keys())
        self._reserved_attrs.update({"message", "asctime", "stack_info"})

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in self._reserved_attrs:
                continue
            if key == "extra_fields" and isinstance(value, dict):
                entry.update(value)
            else:
                entry[key] = value

        return json.dumps(entry, default=str)


def setup_logging(level: Optional[str] = None, stream: Optional[TextIO] = None):
    """Initializes the root logger.

    Args:
        level: Optional log level override. Defaults to the LOG_LEVEL
            environment variable, or INFO.
        stream: Where records are written. Defaults to stderr.
    """
    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()

    logger = logging.getLogger()
    logger.setLevel(log_level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter())

    for h in logger.handlers[:]:
        logger.removeHandler(h)

    logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Retrieves a logger with the given name (typically __name__)."""
    return logging.getLogger(name)
