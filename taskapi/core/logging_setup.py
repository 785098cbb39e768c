"""Structured logging: JSON formatter in production, plain text elsewhere."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

_EXTRA_KEYS = ("task_id", "path", "error_code", "count")
_HANDLER_NAME = "taskapi"


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = str(val) if key == "path" else val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "text") -> logging.Handler:
    """Install the application handler on the root logger (once)."""
    for existing in logging.root.handlers:
        if existing.get_name() == _HANDLER_NAME:
            handler = existing
            break
    else:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        logging.root.addHandler(handler)

    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
