"""
Tracing Utilities.

Spans are created through the OpenTelemetry API only. Without an SDK
configured by the host application the tracer is a no-op, so the scoring
engine stays free of side effects by default.

Usage:
    from src.evalmatch.common.telemetry import get_tracer, trace_async

    tracer = get_tracer(__name__)
    with tracer.start_as_current_span("evalmatch.match_tools") as span:
        span.set_attribute("tools.expected", 3)
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

F = TypeVar("F", bound=Callable[..., Any])

INSTRUMENTATION_NAME = "evalmatch"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a tracer from the globally configured provider."""
    return trace.get_tracer(name or INSTRUMENTATION_NAME)


def record_exception(exception: Exception, span: Any = None) -> None:
    """
    Record an exception on the current or specified span.

    Args:
        exception: The exception to record
        span: Optional span (uses current span if not provided)
    """
    target = span or trace.get_current_span()
    if target.is_recording():
        target.record_exception(exception)
        target.set_status(Status(StatusCode.ERROR, str(exception)))


def trace_async(
    name: str | None = None,
    attributes: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """
    Decorator for tracing async functions.

    Args:
        name: Span name (defaults to function name)
        attributes: Static attributes to add to span

    Example:
        @trace_async("evalmatch.evaluate")
        async def evaluate(...) -> EvalResult:
            ...
    """

    def decorator(func: F) -> F:
        span_name = name or func.__name__

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer(func.__module__)
            with tracer.start_as_current_span(span_name, record_exception=False) as span:
                if attributes:
                    span.set_attributes(attributes)
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    record_exception(e, span)
                    raise

        return wrapper  # type: ignore

    return decorator
