"""
Structured Logging — JSON Output for Production

Log setup for the "mailgrade" namespace. JSON lines carry the
record's own creation time, its level, logger and message, plus
whichever analysis context fields the call site passed in `extra`.

Usage:
    from mailgrade.logging import get_logger
    logger = get_logger("engine")
    logger.info("Fixes applied", extra={"category": "security", "fixed_count": 2})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import IO, Optional


LOG_LEVEL = os.getenv("MAILGRADE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("MAILGRADE_LOG_FORMAT", "json")  # "json" or "text"

NAMESPACE = "mailgrade"

# Context a record may carry through `extra`, in output order
CONTEXT_FIELDS = (
    "rule_id", "category", "score", "fixed_count", "rules_evaluated",
    "duration_ms", "error", "error_type",
)


def _context(record: logging.LogRecord) -> dict:
    return {
        key: getattr(record, key)
        for key in CONTEXT_FIELDS
        if getattr(record, key, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable format for development. Context goes in trailing key=value pairs."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


def setup_logging(
    level: Optional[str] = None,
    fmt: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Configure the mailgrade logger. Call once at host startup.

    Replaces any handler installed by an earlier call, so repeated
    setup never duplicates output. Unknown level names fall back to INFO.
    """
    logger = logging.getLogger(NAMESPACE)
    level_name = (level or LOG_LEVEL).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter() if (fmt or LOG_FORMAT) == "json" else TextFormatter())
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the mailgrade namespace."""
    return logging.getLogger(f"{NAMESPACE}.{name}")
