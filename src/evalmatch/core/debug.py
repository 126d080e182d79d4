"""
Debug Trace

Matchers with ``debug=True`` describe each match through an injected logger.
The structured payload is attached to the record as ``record.trace`` for
handlers that want it, and summarised in the message for plain text output.
"""

from __future__ import annotations

import logging
from typing import Any

from src.evalmatch.common.logging import sanitize_payload


def emit_debug_trace(
    logger: logging.Logger,
    context: str,
    *,
    expected: Any,
    actual: Any,
    matches: list[str] | None = None,
    mismatches: list[dict[str, Any]] | None = None,
    extras: list[str] | None = None,
) -> dict[str, Any]:
    """
    Log a redacted match trace at DEBUG level.

    Args:
        logger: Sink for the trace
        context: Name of the matcher producing the trace
        expected: Expected value(s)
        actual: Actual value(s)
        matches: Keys or names that matched
        mismatches: Entries with key/expected/actual for failed comparisons
        extras: Keys or names present only in the actual value

    Returns:
        The redacted trace payload
    """
    trace: dict[str, Any] = {"expected": expected, "actual": actual}
    if matches is not None:
        trace["matches"] = matches
    if mismatches is not None:
        trace["mismatches"] = mismatches
    if extras is not None:
        trace["extras"] = extras
    trace = sanitize_payload(trace)

    if logger.isEnabledFor(logging.DEBUG):
        mismatched = [m.get("key") for m in trace.get("mismatches", [])]
        logger.debug(
            f"{context} debug: matches={trace.get('matches', [])} "
            f"mismatches={mismatched} extras={trace.get('extras', [])}",
            extra={"trace": trace},
        )
    return trace
