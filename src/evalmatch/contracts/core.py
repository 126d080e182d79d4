"""
Core Data Models

Tool calls, scores and scorer inputs exchanged between the matching engine
and whatever test runner invokes it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Tool Calls
# =============================================================================


class ToolCall(BaseModel):
    """
    A tool invocation recorded while the task ran.

    Only ``name`` and ``arguments`` are inspected by the matchers. Provider
    specific fields (``result``, ``status``, ``id``, ``type``, timings, ...)
    are preserved as extra attributes.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str = Field(..., description="Name of the invoked tool")
    arguments: dict[str, Any] = Field(
        default_factory=dict,
        description="Arguments the tool was called with",
    )
    result: Any = Field(default=None, description="Value returned by the tool, if recorded")
    status: str | None = Field(default=None, description="Provider status (completed, failed, ...)")
    id: str | None = Field(default=None, description="Provider call identifier")
    type: str | None = Field(default=None, description="Provider call type, e.g. 'function'")

    @field_validator("arguments", mode="before")
    @classmethod
    def none_arguments_to_empty(cls, v: Any) -> Any:
        """Providers report argument-less calls as null."""
        return {} if v is None else v


class ExpectedToolCall(BaseModel):
    """
    A tool invocation the task is expected to make.

    ``arguments`` left as ``None`` means the presence of a call with this name
    is enough. Otherwise it is compared against the actual arguments using the
    matcher's strategy, so it may hold regex patterns or validator callables
    when fuzzy matching is configured.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Name of the expected tool")
    arguments: Any = Field(default=None, description="Expected argument pattern")


# =============================================================================
# Scores
# =============================================================================


class Score(BaseModel):
    """
    Normalized verdict of a single scorer.

    ``score`` is in [0, 1] when set. ``None`` means no score was computed,
    which is different from a computed score of zero.
    """

    model_config = ConfigDict(frozen=True)

    score: float | None = Field(default=None, description="Normalized score, None if not computed")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Rationale and matcher-specific details",
    )

    @field_validator("score")
    @classmethod
    def validate_range(cls, v: float | None) -> float | None:
        if v is not None and not 0.0 <= v <= 1.0:
            raise ValueError(f"score must be within [0, 1], got {v}")
        return v

    @property
    def rationale(self) -> str | None:
        """Human-readable explanation attached to the score."""
        return self.metadata.get("rationale")

    @property
    def value_or_zero(self) -> float:
        """Score with 'not computed' treated as zero, for averaging and sorting."""
        return self.score if self.score is not None else 0.0


class NamedScore(Score):
    """A score tagged with the name of the scorer that produced it."""

    name: str = Field(..., description="Scorer name")


# =============================================================================
# Scorer Input
# =============================================================================


class ScorerInput(BaseModel):
    """
    Everything a scorer receives for one test case.

    Additional test-case fields are kept as extra attributes so custom scorers
    can read them.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    input: str = Field(default="", description="Prompt given to the task")
    output: str = Field(default="", description="Raw task output, before any parsing")
    expected: Any = Field(default=None, description="Expected value (structured output scorer)")
    expected_tools: list[ExpectedToolCall] | None = Field(
        default=None,
        description="Expected tool calls (tool call scorer)",
    )
    tool_calls: list[ToolCall] | None = Field(
        default=None,
        description="Tool calls recorded by the task",
    )


# =============================================================================
# Evaluation Results
# =============================================================================


class AggregateResult(BaseModel):
    """Average of several scores and the pass/fail decision against a threshold."""

    model_config = ConfigDict(frozen=True)

    avg_score: float = Field(..., ge=0.0, le=1.0)
    passed: bool


class EvalResult(BaseModel):
    """Outcome of running every scorer for one test case."""

    model_config = ConfigDict(frozen=True)

    scores: list[NamedScore] = Field(default_factory=list)
    avg_score: float = Field(..., ge=0.0, le=1.0)
    passed: bool
    threshold: float = Field(..., ge=0.0, le=1.0)
