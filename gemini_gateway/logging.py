"""
Structured Logging — JSON Output for Production

Configures Python logging to emit structured JSON logs.
Each log entry includes timestamp, level, module, and
any additional context fields.

Usage:
    from gemini_gateway.logging import get_logger
    logger = get_logger("gemini")
    logger.info("Chat call done", extra={"model": "gemini-2.5-flash", "duration_ms": 412})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone


LOG_LEVEL = os.getenv("GATEWAY_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("GATEWAY_LOG_FORMAT", "json")  # "json" or "text"

# Never include credentials here.
_EXTRA_FIELDS = (
    "model", "fallback_model", "filepath", "mime_type", "parts_count",
    "history_count", "attempt", "duration_ms", "error", "error_type",
)


class JSONFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable format for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(level: str = LOG_LEVEL, fmt: str = LOG_FORMAT):
    """Configure the gateway logger tree. Call once at app startup."""
    root = logging.getLogger("gemini_gateway")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root.addHandler(handler)

    # Suppress noisy third-party loggers
    for noisy in ("httpx", "httpcore", "google_genai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the gemini_gateway namespace."""
    return logging.getLogger(f"gemini_gateway.{name}")
