"""Structured logging for the streak engine.

Call sites attach request context as ``streak_*`` extras
(``extra={"streak_user_id": ..., "streak_duration_ms": ...}``). Both
formatters collect those extras into one context mapping with the prefix
stripped: the JSON formatter nests it under ``"context"``, the text formatter
appends it as ``key=value`` pairs.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import Config

CONTEXT_PREFIX = "streak_"


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Return the record's ``streak_*`` extras keyed without the prefix."""
    return {
        key[len(CONTEXT_PREFIX):]: value
        for key, value in sorted(record.__dict__.items())
        if key.startswith(CONTEXT_PREFIX)
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line: level, logger, message, optional context/exception."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = record_context(record)
        if context:
            entry["context"] = context
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ContextTextFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


def setup_logging(config: Config) -> None:
    """Install a single stderr handler using the configured format and level."""
    level = logging.getLevelNamesMapping()[config.log_level]

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if config.log_format == "json" else ContextTextFormatter())
    root.addHandler(handler)
