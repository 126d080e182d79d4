"""
Explanation Formatter

Renders several scorer verdicts as human-readable text, worst score first so
failing scorers are the first thing a reader sees.
"""

from __future__ import annotations

import textwrap
from collections.abc import Sequence
from typing import Any

from src.evalmatch.config import load_settings
from src.evalmatch.contracts import NamedScore


def wrap_text(text: str | None, width: int = 80) -> str | None:
    """
    Word-wrap text at ``width`` columns.

    Runs of whitespace collapse to a single space and words are never split,
    so a single word longer than ``width`` stays on its own line. None is
    returned unchanged.
    """
    if text is None:
        return None
    normalized = " ".join(text.split())
    if len(normalized) <= width:
        return normalized
    return textwrap.fill(
        normalized,
        width=width,
        break_long_words=False,
        break_on_hyphens=False,
    )


def format_score_value(score: float | None) -> str:
    """One decimal, with a missing score shown as 0.0."""
    return f"{(score if score is not None else 0.0):.1f}"


def _excerpt(output: Any, limit: int) -> str:
    text = output if isinstance(output, str) else str(output)
    if limit and len(text) > limit:
        return text[:limit] + "..."
    return text


def format_rationale(
    scores: Sequence[NamedScore],
    width: int | None = None,
    output_excerpt_chars: int | None = None,
) -> str:
    """
    Render scores as labeled blocks separated by blank lines.

    Each block starts with ``<name> [<score>]``. Scores below 1.0 add their
    rationale and, when the metadata carries the raw ``output``, an excerpt
    of it.

    Args:
        scores: Named scores in any order
        width: Wrap column (defaults to settings.wrap_width)
        output_excerpt_chars: Output excerpt limit (defaults to settings)

    Returns:
        Formatted text, empty when there are no scores
    """
    if width is None or output_excerpt_chars is None:
        settings = load_settings()
        width = settings.wrap_width if width is None else width
        if output_excerpt_chars is None:
            output_excerpt_chars = settings.output_excerpt_chars

    blocks: list[str] = []
    for score in sorted(scores, key=lambda s: s.value_or_zero):
        lines = [f"{score.name} [{format_score_value(score.score)}]"]
        if score.value_or_zero < 1.0:
            if score.rationale:
                lines.append(wrap_text(f"Rationale: {score.rationale}", width))
            output = score.metadata.get("output")
            if output is not None and output != "":
                lines.append(wrap_text(f"Output: {_excerpt(output, output_excerpt_chars)}", width))
        blocks.append("\n".join(lines))

    return "\n\n".join(blocks)
