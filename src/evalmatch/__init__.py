"""
EvalMatch - matchers and scorers for evaluating LLM tool calls and structured outputs.

Usage:
    from src.evalmatch import StructuredOutputScorer, ToolCallScorer, evaluate

    result = await evaluate(
        [ToolCallScorer(ordered=True), StructuredOutputScorer(match="fuzzy")],
        input="What is the weather in Paris?",
        output='{"city": "Paris"}',
        expected={"city": "paris"},
        expected_tools=[{"name": "get_weather", "arguments": {"city": "Paris"}}],
        tool_calls=recorded_calls,
    )
"""

import logging

from src.evalmatch.config import EvalMatchSettings, load_settings
from src.evalmatch.contracts import (
    AggregateResult,
    EvalResult,
    ExpectedToolCall,
    FuzzyOptions,
    NamedScore,
    Score,
    ScorerInput,
    StructuredOutputMatcherConfig,
    ToolCall,
    ToolCallMatcherConfig,
)
from src.evalmatch.core import (
    MISSING,
    aggregate,
    evaluate,
    format_rationale,
    fuzzy_match,
    run_scorers,
    strict_equals,
    wrap_text,
)
from src.evalmatch.exceptions import (
    ConfigurationError,
    EvalMatchError,
    EvaluationError,
    InvalidConfigError,
    InvalidExpectationError,
    PredicateError,
)
from src.evalmatch.scorers import (
    StructuredOutputMatcher,
    StructuredOutputScorer,
    ToolCallMatcher,
    ToolCallScorer,
    match_structured,
    match_tools,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Settings
    "EvalMatchSettings",
    "load_settings",
    # Contracts
    "ToolCall",
    "ExpectedToolCall",
    "Score",
    "NamedScore",
    "ScorerInput",
    "AggregateResult",
    "EvalResult",
    "FuzzyOptions",
    "ToolCallMatcherConfig",
    "StructuredOutputMatcherConfig",
    # Comparison
    "MISSING",
    "strict_equals",
    "fuzzy_match",
    # Scorers
    "ToolCallMatcher",
    "ToolCallScorer",
    "match_tools",
    "StructuredOutputMatcher",
    "StructuredOutputScorer",
    "match_structured",
    # Aggregation
    "aggregate",
    "run_scorers",
    "evaluate",
    "format_rationale",
    "wrap_text",
    # Exceptions
    "EvalMatchError",
    "ConfigurationError",
    "InvalidConfigError",
    "EvaluationError",
    "PredicateError",
    "InvalidExpectationError",
]
