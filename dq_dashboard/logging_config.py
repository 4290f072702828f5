from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT_ENV = "DQ_DASHBOARD_LOG_FORMAT"
LOG_LEVEL_ENV = "DQ_DASHBOARD_LOG_LEVEL"

# Dash serves through werkzeug, which logs one line per callback request
NOISY_LOGGERS = ("werkzeug",)


def _level_from_env(default: int) -> int:
    name = os.getenv(LOG_LEVEL_ENV)
    if not name:
        return default
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def configure_logging(
        level: int = logging.INFO,
        force_format: Optional[str] = None,
) -> None:
    """
    Set up the root logger for the dashboard process.

    Output is JSON (python-json-logger) unless plain text is asked for,
    either with force_format="plain" or DQ_DASHBOARD_LOG_FORMAT=plain.
    DQ_DASHBOARD_LOG_LEVEL, when set to a level name, replaces `level`.
    Structured fields passed via extra={...} end up as JSON keys.
    """
    format_mode = force_format or os.getenv(LOG_FORMAT_ENV, "json")

    root = logging.getLogger()
    root.setLevel(_level_from_env(level))

    handler = logging.StreamHandler()
    if format_mode.lower() == "plain":
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    else:
        handler.setFormatter(jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

    # One handler only, repeated calls must not duplicate output
    root.handlers.clear()
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
