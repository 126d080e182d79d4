"""
EvalMatch Contracts - Pydantic v2 Schemas

Data models shared by the comparator, the matchers and the aggregator.
"""

from src.evalmatch.contracts.core import (
    AggregateResult,
    EvalResult,
    ExpectedToolCall,
    NamedScore,
    Score,
    ScorerInput,
    ToolCall,
)
from src.evalmatch.contracts.matching import (
    STRUCTURED_OUTPUT_FUZZY_DEFAULTS,
    TOOL_CALL_FUZZY_DEFAULTS,
    ArgumentPredicate,
    FieldPredicate,
    FuzzyOptions,
    StrategyName,
    StructuredOutputMatcherConfig,
    ToolCallMatcherConfig,
)

__all__ = [
    # Tool calls
    "ToolCall",
    "ExpectedToolCall",
    # Scores
    "Score",
    "NamedScore",
    "ScorerInput",
    "AggregateResult",
    "EvalResult",
    # Matching configuration
    "FuzzyOptions",
    "TOOL_CALL_FUZZY_DEFAULTS",
    "STRUCTURED_OUTPUT_FUZZY_DEFAULTS",
    "ToolCallMatcherConfig",
    "StructuredOutputMatcherConfig",
    "StrategyName",
    "ArgumentPredicate",
    "FieldPredicate",
]
