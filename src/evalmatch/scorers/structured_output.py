"""
Structured Output Matcher

Parses a raw task output as JSON and compares it field by field against the
expected fields. Malformed output is a scoreable failure (0.0 with the parse
error in the rationale), never an exception.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from src.evalmatch.common.logging import get_sanitized_logger
from src.evalmatch.contracts import (
    STRUCTURED_OUTPUT_FUZZY_DEFAULTS,
    Score,
    ScorerInput,
    StructuredOutputMatcherConfig,
)
from src.evalmatch.core.debug import emit_debug_trace
from src.evalmatch.core.strategies import build_strategy
from src.evalmatch.core.values import MISSING, format_value
from src.evalmatch.exceptions import InvalidExpectationError
from src.evalmatch.scorers.base import build_config, calculate_partial_score, make_score

logger = get_sanitized_logger(__name__)

# Error-field values that do not signal a failure
_NO_ERROR_VALUES = (None, "", False)


class StructuredOutputMatcher:
    """
    Compares a JSON document against expected field values.

    Custom predicates receive ``(expected, actual, field_name)``; a field
    absent from the output is passed as MISSING.
    """

    def __init__(
        self,
        config: StructuredOutputMatcherConfig | None = None,
        debug_logger: logging.Logger | None = None,
    ):
        self.config = config or StructuredOutputMatcherConfig()
        self.fuzzy_options = self.config.fuzzy_options or STRUCTURED_OUTPUT_FUZZY_DEFAULTS
        self.strategy = build_strategy(
            self.config.match,
            self.fuzzy_options,
            pass_field_name=True,
            config_field="match",
        )
        self.debug_logger = debug_logger or logger

    def match(self, raw_output: Any, expected_fields: Mapping[str, Any] | None) -> Score:
        """
        Score a raw output against expected fields.

        Args:
            raw_output: Raw task output, expected to be a JSON document
            expected_fields: Field name -> expected value

        Returns:
            Score with rationale

        Raises:
            InvalidExpectationError: If expected_fields is not a mapping
            PredicateError: If a custom predicate or validator raises
        """
        expected = {} if expected_fields is None else expected_fields
        if not isinstance(expected, Mapping):
            raise InvalidExpectationError(
                f"expected fields must be a mapping, got {type(expected).__name__}"
            )

        parsed, parse_failure = _parse_json(raw_output)
        if parse_failure is not None:
            return parse_failure

        if not expected:
            return make_score(1.0, "Valid JSON output (no expected fields specified)")

        if not isinstance(parsed, Mapping):
            return make_score(
                0.0,
                f"Expected a JSON object but got {_json_type_name(parsed)}",
                output=raw_output,
            )

        error_field = self.config.error_field
        if error_field is not None and parsed.get(error_field) not in _NO_ERROR_VALUES:
            return make_score(
                0.0,
                f"Output contains error: {parsed[error_field]}",
                output=raw_output,
            )

        matches: list[str] = []
        mismatches: list[dict[str, Any]] = []
        for key, expected_value in expected.items():
            actual_value = parsed.get(key, MISSING)
            if self.strategy.matches(expected_value, actual_value, key):
                matches.append(key)
            else:
                mismatches.append({"key": key, "expected": expected_value, "actual": actual_value})

        extras = [key for key in parsed.keys() if key not in expected]

        if self.config.debug:
            emit_debug_trace(
                self.debug_logger,
                "StructuredOutputMatcher",
                expected=dict(expected),
                actual=dict(parsed),
                matches=matches,
                mismatches=mismatches,
                extras=extras,
            )

        total = len(expected)
        matched = len(matches)

        if self.config.require_all and mismatches:
            return make_score(
                0.0,
                f"Missing or mismatched required fields: "
                f"{', '.join(m['key'] for m in mismatches)} - {_describe_mismatches(mismatches)}",
                matched=matched,
                total=total,
            )

        if extras and not self.config.allow_extras:
            return make_score(
                0.0,
                f"Unexpected extra fields: {', '.join(extras)}",
                matched=matched,
                total=total,
            )

        if not mismatches:
            extra_info = f" (plus extra fields: {', '.join(extras)})" if extras else ""
            return make_score(
                1.0,
                f"All expected fields match{extra_info}",
                matched=matched,
                total=total,
            )

        return make_score(
            calculate_partial_score(matched, total, self.config.require_all),
            f"Matched {matched}/{total} fields - {_describe_mismatches(mismatches)}",
            matched=matched,
            total=total,
        )


def _parse_json(raw_output: Any) -> tuple[Any, Score | None]:
    """Parse raw output, returning (document, None) or (None, failure score)."""
    if not isinstance(raw_output, (str, bytes, bytearray)):
        return None, make_score(
            0.0,
            f"Failed to parse output as JSON: expected text, got {type(raw_output).__name__}",
            output=raw_output,
        )
    try:
        return json.loads(raw_output), None
    except json.JSONDecodeError as e:
        return None, make_score(
            0.0,
            f"Failed to parse output as JSON: {e}",
            output=raw_output,
            error_position=e.pos,
        )
    except (UnicodeDecodeError, RecursionError) as e:
        return None, make_score(
            0.0,
            f"Failed to parse output as JSON: {e}",
            output=raw_output,
        )


def _json_type_name(value: Any) -> str:
    if isinstance(value, list):
        return "an array"
    if isinstance(value, str):
        return "a string"
    if isinstance(value, bool):
        return "a boolean"
    if isinstance(value, (int, float)):
        return "a number"
    return "null"


def _describe_mismatches(mismatches: list[dict[str, Any]]) -> str:
    return "; ".join(
        f"{m['key']}: expected {format_value(m['expected'])}, got {format_value(m['actual'])}"
        for m in mismatches
    )


def match_structured(
    raw_output: Any,
    expected_fields: Mapping[str, Any] | None,
    config: StructuredOutputMatcherConfig | None = None,
) -> Score:
    """
    Convenience function for matching a structured output.

    Args:
        raw_output: Raw task output
        expected_fields: Expected field values
        config: Matching configuration

    Returns:
        Score
    """
    return StructuredOutputMatcher(config).match(raw_output, expected_fields)


class StructuredOutputScorer:
    """
    Scorer for JSON outputs such as generated API queries or config objects.

    Example:
        # Default: strict field matching
        StructuredOutputScorer()

        # Regex patterns, case-insensitive strings, numeric tolerance
        StructuredOutputScorer(match="fuzzy")

        # Per-field logic
        StructuredOutputScorer(
            match=lambda expected, actual, key: (
                18 <= actual <= 100 if key == "age" else expected == actual
            )
        )
    """

    name = "StructuredOutputScorer"

    def __init__(self, debug_logger: logging.Logger | None = None, **options: Any):
        """
        Args:
            debug_logger: Sink for debug traces
            **options: StructuredOutputMatcherConfig fields

        Raises:
            InvalidConfigError: If an option is invalid
        """
        config = build_config(StructuredOutputMatcherConfig, options)
        self.matcher = StructuredOutputMatcher(config, debug_logger=debug_logger)

    @property
    def config(self) -> StructuredOutputMatcherConfig:
        return self.matcher.config

    def __call__(self, scorer_input: ScorerInput) -> Score:
        return self.matcher.match(scorer_input.output, scorer_input.expected)
