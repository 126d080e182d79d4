"""
Score Aggregator

Runs several scorers against one test case and combines their scores into a
single pass/fail decision.

Usage:
    from src.evalmatch.core.aggregator import evaluate
    from src.evalmatch.scorers import StructuredOutputScorer, ToolCallScorer

    result = await evaluate(
        [ToolCallScorer(), StructuredOutputScorer(match="fuzzy")],
        input="Find restaurants",
        output=task_output,
        expected={"dataset": "places"},
        expected_tools=[{"name": "search"}],
        tool_calls=recorded_calls,
        threshold=0.8,
    )
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from opentelemetry import trace

from src.evalmatch.common.telemetry import trace_async
from src.evalmatch.config import load_settings
from src.evalmatch.contracts import AggregateResult, EvalResult, NamedScore, Score, ScorerInput
from src.evalmatch.exceptions import EvaluationError, InvalidConfigError
from src.evalmatch.scorers.base import Scorer

logger = logging.getLogger(__name__)


def _resolve_threshold(threshold: float | None) -> float:
    if threshold is None:
        return load_settings().threshold
    if not 0.0 <= threshold <= 1.0:
        raise InvalidConfigError("threshold", threshold, "Threshold must be within [0, 1]")
    return threshold


def aggregate(scores: Sequence[Score], threshold: float | None = None) -> AggregateResult:
    """
    Average scores and compare against a threshold.

    Scores that were not computed (None) count as 0.0. An empty list averages
    to 0.0.

    Args:
        scores: Scores to combine
        threshold: Minimum average to pass (defaults to settings.threshold)

    Raises:
        InvalidConfigError: If threshold is outside [0, 1]
    """
    resolved = _resolve_threshold(threshold)
    avg_score = sum(s.value_or_zero for s in scores) / len(scores) if scores else 0.0
    return AggregateResult(avg_score=avg_score, passed=avg_score >= resolved)


def scorer_name(scorer: Any, index: int) -> str:
    """Display name of a scorer: its ``name``, ``__name__`` or class name."""
    name = getattr(scorer, "name", None)
    if isinstance(name, str) and name:
        return name
    name = getattr(scorer, "__name__", None)
    if isinstance(name, str) and name and name != "<lambda>":
        return name
    if not inspect.isfunction(scorer) and not inspect.ismethod(scorer):
        return type(scorer).__name__
    return f"score_{index}"


def _to_named_score(name: str, result: Any) -> NamedScore:
    if isinstance(result, Score):
        return NamedScore(name=name, score=result.score, metadata=dict(result.metadata))
    if isinstance(result, Mapping):
        return NamedScore.model_validate({**result, "name": name})
    raise EvaluationError(
        f"Scorer '{name}' returned {type(result).__name__}, expected a Score or mapping",
        code="EVAL_BAD_SCORER_RESULT",
    )


async def run_scorers(
    scorers: Sequence[Scorer],
    scorer_input: ScorerInput,
) -> list[NamedScore]:
    """
    Call every scorer on one input.

    Synchronous scorers return directly; awaitable results are scheduled as
    soon as they are returned and awaited concurrently. Exceptions raised by a
    scorer propagate after every still-running scorer has been cancelled.

    Returns:
        Named scores in scorer order
    """
    names = [scorer_name(scorer, i) for i, scorer in enumerate(scorers)]
    results: list[Any] = []
    pending: dict[int, asyncio.Future[Any]] = {}

    try:
        for i, scorer in enumerate(scorers):
            result = scorer(scorer_input)
            if inspect.isawaitable(result):
                pending[i] = asyncio.ensure_future(result)
            results.append(result)

        if pending:
            awaited = await asyncio.gather(*pending.values())
            for i, value in zip(pending, awaited):
                results[i] = value
    except BaseException:
        for future in pending.values():
            future.cancel()
        if pending:
            await asyncio.gather(*pending.values(), return_exceptions=True)
        raise

    return [_to_named_score(name, result) for name, result in zip(names, results)]


@trace_async("evalmatch.evaluate")
async def evaluate(
    scorers: Sequence[Scorer],
    input: str = "",
    output: str = "",
    expected: Any = None,
    expected_tools: Sequence[Any] | None = None,
    tool_calls: Sequence[Any] | None = None,
    threshold: float | None = None,
    **extra: Any,
) -> EvalResult:
    """
    Score one task output with several scorers and decide pass/fail.

    Args:
        scorers: Scorers to run
        input: Prompt given to the task
        output: Raw task output
        expected: Expected value for structured output scorers
        expected_tools: Expected tool calls for tool call scorers
        tool_calls: Tool calls recorded by the task
        threshold: Minimum average to pass (defaults to settings.threshold)
        **extra: Additional test-case fields exposed to custom scorers

    Returns:
        EvalResult with every named score and the aggregate decision
    """
    resolved = _resolve_threshold(threshold)
    scorer_input = ScorerInput(
        input=input,
        output=output,
        expected=expected,
        expected_tools=list(expected_tools) if expected_tools is not None else None,
        tool_calls=list(tool_calls) if tool_calls is not None else None,
        **extra,
    )

    scores = await run_scorers(scorers, scorer_input)
    summary = aggregate(scores, resolved)

    span = trace.get_current_span()
    span.set_attribute("evalmatch.scores.count", len(scores))
    span.set_attribute("evalmatch.avg_score", summary.avg_score)
    span.set_attribute("evalmatch.passed", summary.passed)
    logger.debug(
        f"Evaluated {len(scores)} scorer(s): avg={summary.avg_score:.2f} "
        f"threshold={resolved} passed={summary.passed}"
    )

    return EvalResult(
        scores=scores,
        avg_score=summary.avg_score,
        passed=summary.passed,
        threshold=resolved,
    )
