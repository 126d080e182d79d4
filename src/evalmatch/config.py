"""
EvalMatch Configuration

Process-wide defaults using pydantic-settings for environment variable support.
Per-matcher behaviour is configured on the matcher itself; these settings only
cover values the host test runner would otherwise have to thread through.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EvalMatchSettings(BaseSettings):
    """
    Defaults for aggregation and rationale formatting.

    Reads from environment variables with EVALMATCH_ prefix:
    - EVALMATCH_THRESHOLD: minimum average score for a passing evaluation
    - EVALMATCH_WRAP_WIDTH: column width for rationale text
    - EVALMATCH_OUTPUT_EXCERPT_CHARS: maximum characters of raw output shown
    """

    model_config = SettingsConfigDict(
        env_prefix="EVALMATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    threshold: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Minimum average score required to pass",
    )
    wrap_width: int = Field(
        default=80,
        ge=10,
        description="Column width used when wrapping rationale text",
    )
    output_excerpt_chars: int = Field(
        default=500,
        ge=0,
        description="Maximum characters of raw output included in a rationale block",
    )


def load_settings() -> EvalMatchSettings:
    """Load settings from environment."""
    return EvalMatchSettings()
