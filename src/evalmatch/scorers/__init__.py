"""
EvalMatch Scorers

Built-in scorers for tool-calling and structured-output tasks.
"""

from src.evalmatch.scorers.base import Scorer, make_score
from src.evalmatch.scorers.structured_output import (
    StructuredOutputMatcher,
    StructuredOutputScorer,
    match_structured,
)
from src.evalmatch.scorers.tool_calls import ToolCallMatcher, ToolCallScorer, match_tools

__all__ = [
    "Scorer",
    "make_score",
    "ToolCallMatcher",
    "ToolCallScorer",
    "match_tools",
    "StructuredOutputMatcher",
    "StructuredOutputScorer",
    "match_structured",
]
