"""Structured JSON logging configuration.

Configures Python logging to emit JSON-formatted log entries with required
fields: level, timestamp, logger, message. Request-specific fields are added
contextually (method, url, status_code, duration_ms for requests; attempt,
max_attempts, error_type for retries).

SECURITY: API keys and bearer tokens are redacted from every entry.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone

# Secret API keys and Authorization header values
_SENSITIVE_PATTERNS = re.compile(
    r"\b(?:sk|rk|pk)_(?:live|test)_[A-Za-z0-9]+|Bearer\s+\S+",
)

_CONTEXT_FIELDS = (
    "method",
    "url",
    "status_code",
    "duration_ms",
    "attempt",
    "max_attempts",
    "error_type",
)


def mask_api_key(key: str) -> str:
    """Keep the key prefix and last 4 characters, e.g. ``sk_test_...abcd``.

    Any string is accepted. The prefix is dropped unless the masked form
    stays shorter than the key.
    """
    if len(key) <= 8:
        return "[REDACTED]"
    end = key.find("_", 3)
    prefix = key[: end + 1] if end != -1 else ""
    if len(prefix) + 7 >= len(key):
        prefix = ""
    return f"{prefix}...{key[-4:]}"


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON with structured fields.

    Additional fields can be attached via the ``extra`` dict on log calls.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self._sanitize(record.getMessage()),
        }

        for name in _CONTEXT_FIELDS:
            if hasattr(record, name):
                value = getattr(record, name)
                entry[name] = self._sanitize(value) if isinstance(value, str) else value

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self._sanitize(self.formatException(record.exc_info))

        return json.dumps(entry, default=str)

    @staticmethod
    def _sanitize(text: str) -> str:
        """Remove sensitive values from log text."""
        return _SENSITIVE_PATTERNS.sub("[REDACTED]", text)


def configure_logging(level: str = "INFO") -> None:
    """Configure the ``stripe_client`` logger with JSON formatting.

    Parameters
    ----------
    level:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    logger = logging.getLogger("stripe_client")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
