"""
Tool Call Matcher

Reconciles the tool calls a task is expected to make with the calls it
actually made.

- Ordered mode: a single left-to-right scan over the actual calls
- Unordered mode: multiset matching, each actual call satisfies at most one
  expected call (greedy, expected-then-actual scan order)
- Arguments compared with a strict, fuzzy or custom strategy
- Partial credit when require_all is off

Usage:
    from src.evalmatch.scorers.tool_calls import ToolCallScorer

    scorer = ToolCallScorer(ordered=True, params="fuzzy")
    score = scorer(ScorerInput(input="...", expected_tools=[...], tool_calls=[...]))
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from src.evalmatch.common.logging import get_sanitized_logger
from src.evalmatch.contracts import (
    TOOL_CALL_FUZZY_DEFAULTS,
    ExpectedToolCall,
    Score,
    ScorerInput,
    ToolCall,
    ToolCallMatcherConfig,
)
from src.evalmatch.core.debug import emit_debug_trace
from src.evalmatch.core.strategies import build_strategy
from src.evalmatch.exceptions import EvaluationError, InvalidExpectationError
from src.evalmatch.scorers.base import build_config, calculate_partial_score, make_score

logger = get_sanitized_logger(__name__)


@dataclass
class _UnorderedOutcome:
    """Intermediate state of an unordered match."""

    matched_expected: list[int] = field(default_factory=list)
    consumed_actual: list[bool] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)
    mismatches: list[dict[str, Any]] = field(default_factory=list)


class ToolCallMatcher:
    """
    Compares expected tool calls against actual tool calls.

    The configured argument strategy is resolved once at construction time.
    Inputs are never modified; consumed actual calls are tracked in a local
    boolean list.
    """

    def __init__(
        self,
        config: ToolCallMatcherConfig | None = None,
        debug_logger: logging.Logger | None = None,
    ):
        """
        Initialize matcher.

        Args:
            config: Matching configuration (defaults to ToolCallMatcherConfig())
            debug_logger: Sink for debug traces (defaults to this module's logger)
        """
        self.config = config or ToolCallMatcherConfig()
        self.fuzzy_options = self.config.fuzzy_options or TOOL_CALL_FUZZY_DEFAULTS
        self.strategy = build_strategy(
            self.config.params,
            self.fuzzy_options,
            config_field="params",
        )
        self.debug_logger = debug_logger or logger

    def match(
        self,
        expected: Sequence[ExpectedToolCall | Mapping[str, Any]] | None,
        actual: Sequence[ToolCall | Mapping[str, Any]] | None,
    ) -> Score:
        """
        Score actual tool calls against the expected ones.

        Args:
            expected: Expected tool calls (models or mappings)
            actual: Tool calls recorded by the task (models or mappings)

        Returns:
            Score with rationale, plus matched/total counts once matching ran
        """
        expected_calls = _coerce_expected(expected)
        actual_calls = _coerce_actual(actual)

        if not expected_calls:
            return make_score(1.0, "No tool calls expected")

        if not actual_calls:
            return make_score(
                0.0,
                f"Expected {len(expected_calls)} tool(s) but none were called",
                matched=0,
                total=len(expected_calls),
            )

        if self.config.ordered:
            return self._match_ordered(expected_calls, actual_calls)
        return self._match_unordered(expected_calls, actual_calls)

    # =========================================================================
    # Ordered
    # =========================================================================

    def _match_ordered(
        self,
        expected: list[ExpectedToolCall],
        actual: list[ToolCall],
    ) -> Score:
        total = len(expected)
        expected_index = 0
        actual_index = 0
        skipped: list[str] = []

        while expected_index < total and actual_index < len(actual):
            exp = expected[expected_index]
            act = actual[actual_index]

            if exp.name == act.name:
                if exp.arguments is not None and not self.strategy.matches(
                    exp.arguments, act.arguments
                ):
                    self._trace(
                        expected,
                        actual,
                        matches=[e.name for e in expected[:expected_index]],
                        mismatches=[
                            {"key": exp.name, "expected": exp.arguments, "actual": act.arguments}
                        ],
                        extras=skipped,
                    )
                    # Credit only the positions matched before this one
                    return make_score(
                        expected_index / total,
                        f"Tool '{exp.name}' called with incorrect arguments "
                        f"at position {expected_index + 1}",
                        expected=exp.arguments,
                        actual=act.arguments,
                        matched=expected_index,
                        total=total,
                    )
                expected_index += 1
                actual_index += 1
            elif self.config.allow_extras:
                skipped.append(act.name)
                actual_index += 1
            else:
                self._trace(
                    expected,
                    actual,
                    matches=[e.name for e in expected[:expected_index]],
                    extras=[act.name],
                )
                return make_score(
                    0.0,
                    f"Expected '{exp.name}' at position {expected_index + 1} "
                    f"but found '{act.name}'",
                    matched=expected_index,
                    total=total,
                )

        trailing = [call.name for call in actual[actual_index:]]
        self._trace(
            expected,
            actual,
            matches=[e.name for e in expected[:expected_index]],
            extras=skipped + trailing,
        )

        if expected_index < total:
            missing = [call.name for call in expected[expected_index:]]
            if self.config.require_all:
                return make_score(
                    0.0,
                    f"Missing required tools in sequence: {', '.join(missing)}",
                    matched=expected_index,
                    total=total,
                )
            return make_score(
                expected_index / total,
                f"Matched {expected_index}/{total} tools in sequence; "
                f"missing: {', '.join(missing)}",
                matched=expected_index,
                total=total,
            )

        if trailing and not self.config.allow_extras:
            return make_score(
                0.0,
                f"Unexpected extra tools: {', '.join(trailing)}",
                matched=expected_index,
                total=total,
            )

        extras = skipped + trailing
        extra_info = f" (plus extra: {', '.join(extras)})" if extras else ""
        return make_score(
            1.0,
            f"All tools called in expected order with correct arguments{extra_info}",
            matched=total,
            total=total,
        )

    # =========================================================================
    # Unordered
    # =========================================================================

    def _match_unordered(
        self,
        expected: list[ExpectedToolCall],
        actual: list[ToolCall],
    ) -> Score:
        outcome = _UnorderedOutcome(consumed_actual=[False] * len(actual))

        for i, exp in enumerate(expected):
            match_index = self._find_unconsumed_match(exp, actual, outcome.consumed_actual)
            if match_index is not None:
                outcome.consumed_actual[match_index] = True
                outcome.matched_expected.append(i)
                continue

            same_name = [call for call in actual if call.name == exp.name]
            if exp.arguments is not None and same_name:
                outcome.issues.append(f"Tool '{exp.name}' called but with incorrect arguments")
                outcome.mismatches.append(
                    {
                        "key": exp.name,
                        "expected": exp.arguments,
                        "actual": [call.arguments for call in same_name],
                    }
                )
            else:
                outcome.issues.append(f"Missing required tool: {exp.name}")

        extras = [
            call.name for call, consumed in zip(actual, outcome.consumed_actual) if not consumed
        ]
        matched = len(outcome.matched_expected)
        total = len(expected)

        self._trace(
            expected,
            actual,
            matches=[expected[i].name for i in outcome.matched_expected],
            mismatches=outcome.mismatches,
            extras=extras,
        )

        unmatched = matched < total
        rejected_extras = bool(extras) and not self.config.allow_extras
        if rejected_extras:
            outcome.issues.append(f"Unexpected extra tools: {', '.join(extras)}")

        if rejected_extras or (self.config.require_all and unmatched):
            return make_score(0.0, "; ".join(outcome.issues), matched=matched, total=total)

        if not unmatched:
            extra_info = f" (plus extra: {', '.join(extras)})" if extras else ""
            return make_score(
                1.0,
                f"All expected tools were called{extra_info}",
                matched=matched,
                total=total,
            )

        return make_score(
            calculate_partial_score(matched, total, self.config.require_all),
            "; ".join(outcome.issues),
            matched=matched,
            total=total,
        )

    def _find_unconsumed_match(
        self,
        exp: ExpectedToolCall,
        actual: list[ToolCall],
        consumed: list[bool],
    ) -> int | None:
        """Index of the first unconsumed actual call satisfying ``exp``."""
        for j, act in enumerate(actual):
            if consumed[j] or act.name != exp.name:
                continue
            if exp.arguments is not None and not self.strategy.matches(
                exp.arguments, act.arguments
            ):
                continue
            return j
        return None

    def _trace(self, expected: list[ExpectedToolCall], actual: list[ToolCall], **details: Any) -> None:
        if not self.config.debug:
            return
        emit_debug_trace(
            self.debug_logger,
            "ToolCallMatcher",
            expected=[call.model_dump() for call in expected],
            actual=[call.model_dump() for call in actual],
            **details,
        )


def _coerce_expected(
    calls: Sequence[ExpectedToolCall | Mapping[str, Any]] | None,
) -> list[ExpectedToolCall]:
    result: list[ExpectedToolCall] = []
    for i, call in enumerate(calls or ()):
        if isinstance(call, ExpectedToolCall):
            result.append(call)
            continue
        try:
            result.append(ExpectedToolCall.model_validate(call))
        except ValidationError as e:
            raise InvalidExpectationError(f"expected tool call {i} is malformed: {e}") from e
    return result


def _coerce_actual(calls: Sequence[ToolCall | Mapping[str, Any]] | None) -> list[ToolCall]:
    result: list[ToolCall] = []
    for i, call in enumerate(calls or ()):
        if isinstance(call, ToolCall):
            result.append(call)
            continue
        try:
            result.append(ToolCall.model_validate(call))
        except ValidationError as e:
            raise EvaluationError(
                f"Recorded tool call {i} is malformed: {e}",
                code="EVAL_MALFORMED_TOOL_CALL",
            ) from e
    return result


def match_tools(
    expected: Sequence[ExpectedToolCall | Mapping[str, Any]] | None,
    actual: Sequence[ToolCall | Mapping[str, Any]] | None,
    config: ToolCallMatcherConfig | None = None,
) -> Score:
    """
    Convenience function for matching tool calls.

    Args:
        expected: Expected tool calls
        actual: Actual tool calls
        config: Matching configuration

    Returns:
        Score
    """
    return ToolCallMatcher(config).match(expected, actual)


class ToolCallScorer:
    """
    Scorer for the tool calls a task made.

    The test data declares WHICH calls are expected (``expected_tools``);
    the scorer's configuration declares HOW they are compared.

    Example:
        # Default: strict arguments, any order, extras allowed
        ToolCallScorer()

        # Exact sequence, case-insensitive/substring argument matching
        ToolCallScorer(ordered=True, allow_extras=False, params="fuzzy")
    """

    name = "ToolCallScorer"

    def __init__(self, debug_logger: logging.Logger | None = None, **options: Any):
        """
        Args:
            debug_logger: Sink for debug traces
            **options: ToolCallMatcherConfig fields

        Raises:
            InvalidConfigError: If an option is invalid
        """
        config = build_config(ToolCallMatcherConfig, options)
        self.matcher = ToolCallMatcher(config, debug_logger=debug_logger)

    @property
    def config(self) -> ToolCallMatcherConfig:
        return self.matcher.config

    def __call__(self, scorer_input: ScorerInput) -> Score:
        return self.matcher.match(scorer_input.expected_tools, scorer_input.tool_calls)
