"""
Matching Configuration Models

Construction-time configuration for the value comparator and both matchers.
Validated once when a matcher is built, never per comparison.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

StrategyName = Literal["strict", "fuzzy"]

# (expected, actual) -> bool
ArgumentPredicate = Callable[[Any, Any], Any]

# (expected, actual, field_name) -> bool
FieldPredicate = Callable[[Any, Any, str], Any]


class FuzzyOptions(BaseModel):
    """
    Leaf relaxations applied in fuzzy mode.

    numeric_tolerance is relative with an absolute floor: two numbers match
    when |expected - actual| <= max(|expected| * tolerance, tolerance).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    case_insensitive: bool = Field(default=True, description="Compare strings case-folded")
    substring_allowed: bool = Field(
        default=False,
        description="Strings match when either one contains the other",
    )
    numeric_tolerance: float = Field(
        default=0.001,
        ge=0.0,
        description="Relative numeric tolerance (0.001 = 0.1%), also used as absolute floor",
    )
    ignore_array_order: bool = Field(default=True, description="Match array elements in any order")
    allow_type_coercion: bool = Field(
        default=False,
        description="Let '42' match 42 and 'true' match True",
    )


# Tool arguments are usually produced by the model from free text, so the
# tool call matcher is more lenient by default.
TOOL_CALL_FUZZY_DEFAULTS = FuzzyOptions(substring_allowed=True)
STRUCTURED_OUTPUT_FUZZY_DEFAULTS = FuzzyOptions()


class ToolCallMatcherConfig(BaseModel):
    """Configuration for ToolCallMatcher."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ordered: bool = Field(default=False, description="Require calls in the expected order")
    require_all: bool = Field(
        default=True,
        description="Every expected call must match; otherwise partial credit is given",
    )
    allow_extras: bool = Field(default=True, description="Tolerate calls that were not expected")
    params: StrategyName | ArgumentPredicate = Field(
        default="strict",
        description="How tool arguments are compared: strict, fuzzy or a custom predicate",
    )
    fuzzy_options: FuzzyOptions | None = Field(
        default=None,
        description="Fuzzy options, defaults to TOOL_CALL_FUZZY_DEFAULTS",
    )
    debug: bool = Field(default=False, description="Emit a debug trace for every match")


class StructuredOutputMatcherConfig(BaseModel):
    """Configuration for StructuredOutputMatcher."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    match: StrategyName | FieldPredicate = Field(
        default="strict",
        description="How field values are compared: strict, fuzzy or a custom predicate",
    )
    require_all: bool = Field(
        default=True,
        description="Every expected field must match; otherwise partial credit is given",
    )
    allow_extras: bool = Field(default=True, description="Tolerate fields that were not expected")
    error_field: str | None = Field(
        default="error",
        description="Field signalling an in-band failure; None disables the check",
    )
    fuzzy_options: FuzzyOptions | None = Field(
        default=None,
        description="Fuzzy options, defaults to STRUCTURED_OUTPUT_FUZZY_DEFAULTS",
    )
    debug: bool = Field(default=False, description="Emit a debug trace for every match")
