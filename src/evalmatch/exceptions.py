"""
EvalMatch Exception Hierarchy

Provides structured exception types for the matching and scoring engine.
All evalmatch-specific exceptions inherit from EvalMatchError.

Model output that fails to match (including malformed JSON) is never an
exception: it is a score. Exceptions are reserved for mistakes made by the
caller, such as invalid configuration or a custom predicate that raises.

Usage:
    from src.evalmatch.exceptions import InvalidConfigError, PredicateError

    try:
        score = scorer(scorer_input)
    except PredicateError as e:
        logger.error(f"Custom matcher failed: {e}")
"""

from __future__ import annotations

from typing import Any


class EvalMatchError(Exception):
    """
    Base exception for all EvalMatch errors.

    Attributes:
        message: Human-readable error description
        code: Optional machine-readable error code for programmatic handling
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(EvalMatchError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Configuration value is invalid or malformed."""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        super().__init__(
            f"Invalid configuration for '{field}': {value!r}. {reason}",
            code="CONFIG_INVALID",
        )
        self.field = field
        self.value = value
        self.reason = reason


# =============================================================================
# Evaluation Errors
# =============================================================================


class EvaluationError(EvalMatchError):
    """Base class for errors raised while scoring."""

    pass


class PredicateError(EvaluationError):
    """A caller-supplied comparator or validator raised an exception."""

    def __init__(self, predicate: str, reason: str) -> None:
        super().__init__(
            f"Custom predicate '{predicate}' raised: {reason}",
            code="EVAL_PREDICATE",
        )
        self.predicate = predicate
        self.reason = reason


class InvalidExpectationError(EvaluationError):
    """Expectations passed to a matcher have the wrong shape."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid expectation: {reason}", code="EVAL_INVALID_EXPECTATION")
        self.reason = reason


__all__ = [
    "EvalMatchError",
    "ConfigurationError",
    "InvalidConfigError",
    "EvaluationError",
    "PredicateError",
    "InvalidExpectationError",
]
