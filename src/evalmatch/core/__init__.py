"""
EvalMatch Core

Value comparison, matching strategies, debug traces, aggregation and
explanation formatting.
"""

from src.evalmatch.core.aggregator import aggregate, evaluate, run_scorers
from src.evalmatch.core.comparator import compare, fuzzy_match, strict_equals
from src.evalmatch.core.formatting import format_rationale, wrap_text
from src.evalmatch.core.strategies import (
    CustomStrategy,
    FuzzyStrategy,
    MatchStrategy,
    StrictStrategy,
    build_strategy,
)
from src.evalmatch.core.values import MISSING, ValueKind, format_value, kind_of

__all__ = [
    # Values
    "MISSING",
    "ValueKind",
    "kind_of",
    "format_value",
    # Comparison
    "strict_equals",
    "fuzzy_match",
    "compare",
    # Strategies
    "MatchStrategy",
    "StrictStrategy",
    "FuzzyStrategy",
    "CustomStrategy",
    "build_strategy",
    # Aggregation
    "aggregate",
    "run_scorers",
    "evaluate",
    # Formatting
    "format_rationale",
    "wrap_text",
]
