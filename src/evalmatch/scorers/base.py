"""
Scorer Building Blocks

The scorer contract and helpers shared by the built-in scorers.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from src.evalmatch.contracts import Score, ScorerInput
from src.evalmatch.exceptions import InvalidConfigError

ScoreLike = Score | Mapping[str, Any]

# A scorer may be synchronous or asynchronous and may return a Score or a
# plain {"score": ..., "metadata": {...}} mapping.
Scorer = Callable[[ScorerInput], ScoreLike | Awaitable[ScoreLike]]


def make_score(score: float | None, rationale: str, **metadata: Any) -> Score:
    """Build a Score with a rationale and optional extra metadata."""
    return Score(score=score, metadata={"rationale": rationale, **metadata})


def calculate_partial_score(matched: int, total: int, require_all: bool) -> float:
    """
    Fraction of expected items that matched.

    Zero when require_all is set and anything is unmatched; 1.0 when nothing
    was expected.
    """
    if require_all and matched < total:
        return 0.0
    return matched / total if total > 0 else 1.0


def build_config(config_cls: type[BaseModel], options: dict[str, Any]) -> Any:
    """
    Validate scorer keyword arguments into a config model.

    Raises:
        InvalidConfigError: Naming the first offending option
    """
    try:
        return config_cls(**options)
    except ValidationError as e:
        error = e.errors()[0]
        loc = ".".join(str(part) for part in error.get("loc", ())) or config_cls.__name__
        raise InvalidConfigError(loc, error.get("input"), error.get("msg", str(e))) from e
