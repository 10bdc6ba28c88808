"""Logging setup for the work-report tool.

Engine modules log through ``get_logger`` with structured ``extra=`` fields.
Nothing is configured on import; the CLI and the API call
``configure_logging`` once at startup.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

__all__ = ["get_logger", "configure_logging", "JSONFormatter"]

_LOGGER_PREFIX = "worklog_tool"
LOG_LEVEL_ENV = "WORKLOG_LOG_LEVEL"

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName"}


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the worklog_tool namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, datetime):
        return obj.isoformat()
    return str(obj)


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with ``extra=`` fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, val in vars(record).items():
            if key not in _STDLIB_KEYS and key not in payload:
                payload[key] = val
        if record.exc_info and record.exc_info[1] is not None:
            payload["traceback"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_json_default)


def configure_logging(level: str | None = None, json_format: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    ``level`` falls back to the WORKLOG_LOG_LEVEL environment variable and
    then to WARNING. Calling this again replaces the previous handler.
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    root = logging.getLogger(_LOGGER_PREFIX)
    root.setLevel(getattr(logging, level_name, logging.WARNING))

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    return root
