from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger.json import JsonFormatter

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Third-party loggers that drown out ours at INFO
QUIET_LOGGERS = ("werkzeug", "dash.dash")


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.getenv("SALARY_EXPLORER_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level '{level}'")
        return resolved
    return level


def build_formatter(format_mode: str) -> logging.Formatter:
    """
    "plain" gives one human-readable line per record. Anything else gives JSON
    with the record's `extra` fields merged into the object.
    """
    if format_mode == "plain":
        return logging.Formatter(PLAIN_FORMAT)
    return JsonFormatter(JSON_FIELDS, rename_fields={"levelname": "level", "name": "logger"})


def configure_logging(
        level: Optional[Union[int, str]] = None,
        force_format: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the root logger for the app.

    Format selection:
        1) force_format argument ("json" or "plain") if provided
        2) env var SALARY_EXPLORER_LOG_FORMAT
        3) default = "json"

    Level selection:
        1) level argument (int or name)
        2) env var SALARY_EXPLORER_LOG_LEVEL
        3) default = INFO
    """
    format_mode = (force_format or os.getenv("SALARY_EXPLORER_LOG_FORMAT", "json")).lower()

    root = logging.getLogger()
    root.setLevel(_resolve_level(level))

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(format_mode))

    # Replace any existing handlers to avoid duplicate logs
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root.level))

    return root
