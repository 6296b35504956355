"""Logging configuration for Legosigno.

Everything goes to stderr: stdout carries the folder printed for ``cd``.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

LOGGER_NAME = "legosigno"


class _StderrHandler(logging.StreamHandler):
    """Marker type so repeated setup replaces rather than stacks handlers."""


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured output."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(
                record.exc_info,
            )
        return json.dumps(log_entry)


def verbosity_to_level(verbosity: int) -> int:
    """Map the ``--verbose`` count (-1 to 3) onto a logging level."""
    if verbosity >= 3:
        return logging.DEBUG
    if verbosity == 2:
        return logging.INFO
    if verbosity == 1:
        return logging.WARNING
    return logging.ERROR


def setup_logging(
    level: int | str = logging.ERROR,
    json_output: bool = False,
) -> logging.Logger:
    """Configure and return the ``legosigno`` logger.

    Args:
        level: Logging level, numeric or a name (DEBUG, INFO, WARNING, ERROR).
        json_output: If True, use JSON formatter.
    """
    root = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.ERROR)
    root.setLevel(level)

    for existing in list(root.handlers):
        if isinstance(existing, _StderrHandler):
            root.removeHandler(existing)

    handler = _StderrHandler(sys.stderr)

    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root.addHandler(handler)
    return root
