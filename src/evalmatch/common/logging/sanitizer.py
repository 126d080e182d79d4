"""
Log Sanitization

Debug traces dump expected and actual tool arguments and model output, which
routinely carry credentials the model was handed. Everything written through
the debug trace passes through sanitize_payload() first.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from re import Pattern
from typing import Any

# Patterns for secrets embedded in free text
SENSITIVE_PATTERNS: list[tuple[str, Pattern[str]]] = [
    (
        "API_KEY",
        re.compile(r"(api[_-]?key|apikey)\s*[=:]\s*['\"]?[\w\-]{20,}['\"]?", re.IGNORECASE),
    ),
    (
        "SECRET",
        re.compile(
            r"(secret|password|passwd|pwd)\s*[=:]\s*['\"]?[^\s'\"]{8,}['\"]?", re.IGNORECASE
        ),
    ),
    ("ANTHROPIC_KEY", re.compile(r"sk-ant-[a-zA-Z0-9\-_]{20,}", re.IGNORECASE)),
    ("OPENAI_KEY", re.compile(r"sk-[a-zA-Z0-9\-]{20,}", re.IGNORECASE)),
    ("BEARER", re.compile(r"Bearer\s+[a-zA-Z0-9\-_\.]+", re.IGNORECASE)),
    ("URL_CREDENTIALS", re.compile(r"(?<=://)[^/\s:@]+:[^/\s@]+@")),
]

# Mapping keys whose values are redacted wholesale, compared case-insensitively
SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "api_key",
        "apikey",
        "authorization",
        "access_token",
        "refresh_token",
        "token",
        "password",
        "secret",
        "client_secret",
    }
)

REDACTION_PLACEHOLDER = "[REDACTED]"


def sanitize_text(text: str, placeholder: str = REDACTION_PLACEHOLDER) -> str:
    """Redact secret-looking substrings from a string."""
    result = text
    for pattern_name, pattern in SENSITIVE_PATTERNS:
        result = pattern.sub(f"{pattern_name}={placeholder}", result)
    return result


def sanitize_payload(value: Any, placeholder: str = REDACTION_PLACEHOLDER) -> Any:
    """
    Return a redacted copy of a JSON-like payload.

    Strings are scanned for secret patterns, values stored under sensitive
    keys are replaced entirely. The input is not modified.
    """
    if isinstance(value, str):
        return sanitize_text(value, placeholder)
    if isinstance(value, Mapping):
        return {
            key: (
                placeholder
                if isinstance(key, str) and key.lower() in SENSITIVE_KEYS
                else sanitize_payload(item, placeholder)
            )
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [sanitize_payload(item, placeholder) for item in value]
    return value


class SanitizingFilter(logging.Filter):
    """
    A logging filter that redacts sensitive information from log records.

    Sanitizes the message, its arguments and the ``trace`` payload attached
    by the debug trace emitter.

    Usage:
        logger = logging.getLogger(__name__)
        logger.addFilter(SanitizingFilter())
    """

    def __init__(self, name: str = "", redaction_placeholder: str = REDACTION_PLACEHOLDER):
        super().__init__(name)
        self._placeholder = redaction_placeholder

    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize the record in place; always lets it through."""
        if record.msg:
            record.msg = sanitize_text(str(record.msg), self._placeholder)

        if record.args:
            if isinstance(record.args, Mapping):
                record.args = sanitize_payload(record.args, self._placeholder)
            elif isinstance(record.args, tuple):
                record.args = tuple(sanitize_payload(arg, self._placeholder) for arg in record.args)

        trace = getattr(record, "trace", None)
        if trace is not None:
            record.trace = sanitize_payload(trace, self._placeholder)

        return True


def get_sanitized_logger(name: str) -> logging.Logger:
    """
    Get a logger with sanitization filter attached.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger with SanitizingFilter attached
    """
    logger = logging.getLogger(name)

    has_sanitizing_filter = any(isinstance(f, SanitizingFilter) for f in logger.filters)
    if not has_sanitizing_filter:
        logger.addFilter(SanitizingFilter())

    return logger
