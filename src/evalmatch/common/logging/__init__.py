"""
Common Logging Utilities

Provides log sanitization for secrets found in tool arguments and model output.
"""

from src.evalmatch.common.logging.sanitizer import (
    SanitizingFilter,
    get_sanitized_logger,
    sanitize_payload,
    sanitize_text,
)

__all__ = [
    "SanitizingFilter",
    "get_sanitized_logger",
    "sanitize_payload",
    "sanitize_text",
]
