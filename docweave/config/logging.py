"""Root logger setup for the docweave CLI.

Library code only ever calls ``logging.getLogger(__name__)``; handlers are
attached here, once, by the entry point.
"""

from __future__ import annotations

import json
import logging
import os

from rich.logging import RichHandler

LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def resolve_env_log_level() -> int | None:
    """Return a logging level from DOCWEAVE_LOG_LEVEL, or None if unset or unknown."""
    val = os.environ.get("DOCWEAVE_LOG_LEVEL")
    if not val:
        return None
    v = val.strip().lower()
    if v.isdigit():
        return int(v)
    return LEVELS.get(v)


def setup_logging(level: str | int | None = None, fmt: str = "text") -> None:
    """Configure the root logger.

    ``level`` accepts a config name (``"info"``) or a numeric level. When it is
    None the environment is consulted, then INFO is used.
    """
    if isinstance(level, str):
        resolved = LEVELS.get(level.lower(), logging.INFO)
    elif level is None:
        resolved = resolve_env_log_level() or logging.INFO
    else:
        resolved = level

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)

    # Remove existing handlers to prevent duplicate log messages
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if fmt == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
    else:
        handler = RichHandler(show_path=resolved <= logging.DEBUG, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
