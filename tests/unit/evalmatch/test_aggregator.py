"""Tests for score aggregation and multi-scorer evaluation."""

from __future__ import annotations

import asyncio
import inspect

import pytest

from src.evalmatch.contracts import NamedScore, Score, ScorerInput
from src.evalmatch.core.aggregator import aggregate, evaluate, run_scorers, scorer_name
from src.evalmatch.exceptions import EvaluationError, InvalidConfigError
from src.evalmatch.scorers import StructuredOutputScorer, ToolCallScorer


def named(name: str, score: float | None) -> NamedScore:
    return NamedScore(name=name, score=score)


class TestAggregate:
    """Test averaging and threshold decisions."""

    def test_average_and_pass(self) -> None:
        result = aggregate([named("a", 1.0), named("b", 0.5)], threshold=0.75)
        assert result.avg_score == 0.75
        assert result.passed is True

    def test_fail_below_threshold(self) -> None:
        result = aggregate([named("a", 1.0), named("b", 0.0)], threshold=0.75)
        assert result.avg_score == 0.5
        assert result.passed is False

    def test_none_counts_as_zero(self) -> None:
        result = aggregate([named("a", 1.0), named("b", None)], threshold=0.5)
        assert result.avg_score == 0.5
        assert result.passed is True

    def test_empty_scores(self) -> None:
        result = aggregate([], threshold=0.0)
        assert result.avg_score == 0.0
        assert result.passed is True

    def test_default_threshold_requires_perfect_score(self) -> None:
        assert aggregate([named("a", 1.0)]).passed is True
        assert aggregate([named("a", 0.99)]).passed is False

    def test_default_threshold_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EVALMATCH_THRESHOLD", "0.5")
        assert aggregate([named("a", 0.6)]).passed is True

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_invalid_threshold(self, threshold: float) -> None:
        with pytest.raises(InvalidConfigError) as exc_info:
            aggregate([named("a", 1.0)], threshold=threshold)
        assert exc_info.value.field == "threshold"

    def test_accepts_unnamed_scores(self) -> None:
        assert aggregate([Score(score=0.2), Score(score=0.4)], threshold=0.3).passed is True


class TestScorerName:
    """Test scorer display names."""

    def test_name_attribute(self) -> None:
        assert scorer_name(ToolCallScorer(), 0) == "ToolCallScorer"

    def test_function_name(self) -> None:
        def length_check(scorer_input):
            return Score(score=1.0)

        assert scorer_name(length_check, 0) == "length_check"

    def test_lambda(self) -> None:
        assert scorer_name(lambda i: Score(score=1.0), 3) == "score_3"


class TestRunScorers:
    """Test running sync and async scorers."""

    @pytest.mark.asyncio
    async def test_sync_and_async_scorers(self) -> None:
        def sync_scorer(scorer_input: ScorerInput) -> Score:
            return Score(score=1.0, metadata={"rationale": "ok"})

        async def async_scorer(scorer_input: ScorerInput) -> dict:
            await asyncio.sleep(0)
            return {"score": 0.5, "metadata": {"rationale": "half"}}

        scores = await run_scorers([sync_scorer, async_scorer], ScorerInput(output="x"))

        assert [s.name for s in scores] == ["sync_scorer", "async_scorer"]
        assert [s.score for s in scores] == [1.0, 0.5]
        assert scores[1].rationale == "half"

    @pytest.mark.asyncio
    async def test_async_scorers_run_concurrently(self) -> None:
        started: list[str] = []
        release = asyncio.Event()

        async def first(scorer_input: ScorerInput) -> Score:
            started.append("first")
            await release.wait()
            return Score(score=1.0)

        async def second(scorer_input: ScorerInput) -> Score:
            started.append("second")
            release.set()
            return Score(score=1.0)

        scores = await asyncio.wait_for(run_scorers([first, second], ScorerInput()), timeout=1)
        assert started == ["first", "second"]
        assert len(scores) == 2

    @pytest.mark.asyncio
    async def test_scorer_exceptions_propagate(self) -> None:
        def broken(scorer_input: ScorerInput) -> Score:
            raise RuntimeError("scorer failed")

        with pytest.raises(RuntimeError, match="scorer failed"):
            await run_scorers([broken], ScorerInput())

    @pytest.mark.asyncio
    async def test_sync_failure_cancels_started_async_scorers(self) -> None:
        created = []

        async def slow() -> Score:
            await asyncio.sleep(10)
            return Score(score=1.0)

        def async_scorer(scorer_input: ScorerInput):
            coro = slow()
            created.append(coro)
            return coro

        def broken(scorer_input: ScorerInput) -> Score:
            raise RuntimeError("scorer failed")

        with pytest.raises(RuntimeError, match="scorer failed"):
            await run_scorers([async_scorer, broken], ScorerInput())
        assert inspect.getcoroutinestate(created[0]) == inspect.CORO_CLOSED

    @pytest.mark.asyncio
    async def test_async_failure_cancels_remaining_scorers(self) -> None:
        cancelled: list[bool] = []

        async def waiting(scorer_input: ScorerInput) -> Score:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                cancelled.append(True)
                raise
            return Score(score=1.0)

        async def failing(scorer_input: ScorerInput) -> Score:
            await asyncio.sleep(0)
            raise ValueError("async scorer failed")

        with pytest.raises(ValueError, match="async scorer failed"):
            await run_scorers([waiting, failing], ScorerInput())
        assert cancelled == [True]

    @pytest.mark.asyncio
    async def test_invalid_result_type(self) -> None:
        with pytest.raises(EvaluationError) as exc_info:
            await run_scorers([lambda i: 1.0], ScorerInput())
        assert exc_info.value.code == "EVAL_BAD_SCORER_RESULT"


class TestEvaluate:
    """Test the end-to-end evaluation entry point."""

    @pytest.mark.asyncio
    async def test_tool_and_structured_scorers(self) -> None:
        result = await evaluate(
            [ToolCallScorer(), StructuredOutputScorer(match="fuzzy")],
            input="Weather in Paris?",
            output='{"city": "Paris", "temp_c": 21.02}',
            expected={"city": "paris", "temp_c": 21},
            expected_tools=[{"name": "search"}, {"name": "weather_api"}],
            tool_calls=[{"name": "search"}, {"name": "weather_api"}, {"name": "format"}],
            threshold=1.0,
        )
        assert result.passed is True
        assert result.avg_score == 1.0
        assert [s.name for s in result.scores] == ["ToolCallScorer", "StructuredOutputScorer"]
        assert result.threshold == 1.0

    @pytest.mark.asyncio
    async def test_failing_scorer_lowers_average(self) -> None:
        result = await evaluate(
            [ToolCallScorer(), StructuredOutputScorer()],
            output="not json",
            expected={"city": "Paris"},
            expected_tools=[{"name": "search"}],
            tool_calls=[{"name": "search"}],
            threshold=0.5,
        )
        assert result.avg_score == 0.5
        assert result.passed is True
        assert result.scores[1].metadata["output"] == "not json"

    @pytest.mark.asyncio
    async def test_extra_fields_reach_custom_scorers(self) -> None:
        def uses_context(scorer_input: ScorerInput) -> Score:
            return Score(score=1.0 if scorer_input.context == "ctx" else 0.0)

        result = await evaluate([uses_context], output="x", context="ctx", threshold=1.0)
        assert result.passed is True

    @pytest.mark.asyncio
    async def test_invalid_threshold_raises_before_scoring(self) -> None:
        calls: list[ScorerInput] = []

        def recorder(scorer_input: ScorerInput) -> Score:
            calls.append(scorer_input)
            return Score(score=1.0)

        with pytest.raises(InvalidConfigError):
            await evaluate([recorder], threshold=2.0)
        assert calls == []
