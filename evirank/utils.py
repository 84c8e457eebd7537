"""
Evirank Utilities
===================

Shared helpers for logging, hashing and run identification used across
all modules.
"""

from __future__ import annotations

import hashlib
import json
import logging
import sys
import time
import uuid


def generate_run_id() -> str:
    """
    Generate a unique run ID for tracking pipeline runs.

    Format: evirank-{timestamp}-{short_uuid}
    Example: evirank-20250209-143022-a1b2c3d4
    """
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    short_id = uuid.uuid4().hex[:8]
    return f"evirank-{timestamp}-{short_id}"


# ── Hashing ────────────────────────────────────────────────────────

def compute_hash(data: str | bytes | dict, length: int = 16) -> str:
    """
    Compute a truncated SHA-256 hash.

    Args:
        data: String, bytes, or dict to hash.
        length: Number of hex characters to return (max 64).

    Returns:
        Hex digest string of specified length.
    """
    if isinstance(data, dict):
        data = json.dumps(data, sort_keys=True, default=str)
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()[:length]


# ── Logging ────────────────────────────────────────────────────────

def setup_logging(
    level: str = "INFO",
    format_style: str = "text",
    run_id: str | None = None
) -> logging.Logger:
    """
    Configure structured logging for the ``evirank`` logger tree.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format_style: "json" for structured logs, "text" for human-readable.
        run_id: Optional run ID to include in all log entries.

    Returns:
        Configured Logger instance.
    """
    logger = logging.getLogger("evirank")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)

    if format_style == "json":
        class JsonFormatter(logging.Formatter):
            def format(self, record):
                log_entry = {
                    "timestamp": self.formatTime(record),
                    "level": record.levelname,
                    "logger": record.name,
                    "message": record.getMessage(),
                }
                if run_id:
                    log_entry["run_id"] = run_id
                if record.exc_info:
                    log_entry["exception"] = self.formatException(record.exc_info)
                return json.dumps(log_entry, ensure_ascii=False)

        handler.setFormatter(JsonFormatter())
    else:
        fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        if run_id:
            fmt = f"%(asctime)s | %(levelname)-8s | {run_id} | %(name)s | %(message)s"
        handler.setFormatter(logging.Formatter(fmt, datefmt="%H:%M:%S"))

    logger.addHandler(handler)
    return logger


def normalize_whitespace(text: str) -> str:
    """Collapse multiple whitespace characters into single spaces and strip."""
    return " ".join(text.split())
