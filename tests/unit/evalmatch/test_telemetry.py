"""Tests for tracing helpers without a configured SDK."""

from __future__ import annotations

import pytest

from src.evalmatch.common.telemetry import get_tracer, record_exception, trace_async


class TestTraceAsync:
    """Test the async tracing decorator."""

    @pytest.mark.asyncio
    async def test_returns_result(self) -> None:
        @trace_async("test.span", attributes={"k": "v"})
        async def add(a: int, b: int) -> int:
            return a + b

        assert await add(1, 2) == 3
        assert add.__name__ == "add"

    @pytest.mark.asyncio
    async def test_reraises(self) -> None:
        @trace_async()
        async def fail() -> None:
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await fail()


class TestTracerHelpers:
    def test_noop_span(self) -> None:
        tracer = get_tracer("test")
        with tracer.start_as_current_span("noop") as span:
            record_exception(RuntimeError("ignored"), span)
