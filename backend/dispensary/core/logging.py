"""
Structured logging setup for the API.

Configures a JSON formatter on the root logger with the level taken from
settings (LOG_LEVEL). Call init_logging() once during application startup;
CLI tools call it too.

Usage:
    from dispensary.core.logging import init_logging, get_logger
    init_logging()
    log = get_logger(__name__)
    log.warning("store query failed", extra={"listing": "eps"})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dispensary.core.config import get_settings

__all__ = ["JsonFormatter", "init_logging", "get_logger"]

# Standard LogRecord attributes; anything else on a record came from `extra`
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """One JSON object per line with stable keys."""

    default_time_format = "%Y-%m-%dT%H:%M:%S%z"

    def __init__(self, app_env: Optional[str] = None) -> None:
        super().__init__()
        self.app_env = app_env

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        payload: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                self.default_time_format
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if self.app_env:
            payload["env"] = self.app_env

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except (TypeError, ValueError):
                payload[key] = str(value)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


_configured: bool = False


def _to_log_level(level: str) -> int:
    mapping = {
        "CRITICAL": logging.CRITICAL,
        "ERROR": logging.ERROR,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
        "NOTSET": logging.NOTSET,
    }
    return mapping.get((level or "INFO").upper(), logging.INFO)


def init_logging() -> None:
    """
    Install the JSON handler on the root logger. Idempotent.
    """
    global _configured
    if _configured:
        return

    settings = get_settings()
    level = _to_log_level(settings.log_level)

    root = logging.getLogger()
    root.setLevel(level)

    # Replace existing handlers to avoid duplicate lines under uvicorn --reload
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter(app_env=settings.app_env))
    root.addHandler(handler)

    _configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a named logger (root configuration applies)."""
    return logging.getLogger(name if name else "dispensary")
