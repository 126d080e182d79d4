"""
Value Comparator

Recursive structural comparison of an expected value against an actual value.

- strict_equals: deep equality, exact key sets, ordered arrays, no coercion
- fuzzy_match: subset objects, case-folded/substring strings, numeric
  tolerance, unordered arrays, regex patterns, validator callables and
  optional type coercion

Both return a single boolean; graded scores are built by the matchers from
many such comparisons. Neither function mutates its inputs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from src.evalmatch.contracts.matching import FuzzyOptions
from src.evalmatch.core.values import NULLISH_KINDS, ValueKind, describe_predicate, kind_of
from src.evalmatch.exceptions import PredicateError

if TYPE_CHECKING:
    from src.evalmatch.core.strategies import MatchStrategy

_DEFAULT_FUZZY_OPTIONS = FuzzyOptions()


def strict_equals(expected: Any, actual: Any) -> bool:
    """
    Deep equality.

    None and MISSING only match themselves. Values of different kinds never
    match (True is not 1, "1" is not 1). Arrays compare element-wise at equal
    length, objects require identical key sets.
    """
    expected_kind = kind_of(expected)
    actual_kind = kind_of(actual)

    if expected_kind in NULLISH_KINDS or actual_kind in NULLISH_KINDS:
        return expected_kind == actual_kind

    if expected_kind != actual_kind:
        return False

    if expected_kind is ValueKind.ARRAY:
        if len(expected) != len(actual):
            return False
        return all(strict_equals(e, a) for e, a in zip(expected, actual))

    if expected_kind is ValueKind.OBJECT:
        if set(expected.keys()) != set(actual.keys()):
            return False
        return all(strict_equals(expected[k], actual[k]) for k in expected.keys())

    return expected == actual


def fuzzy_match(expected: Any, actual: Any, options: FuzzyOptions | None = None) -> bool:
    """
    Tolerant comparison.

    Rules are tried in order: regex pattern, validator callable, null handling,
    subset objects, strings, numbers, arrays, type coercion, then strict
    equality as the fallback.

    Raises:
        PredicateError: If a validator callable in ``expected`` raises
    """
    opts = options or _DEFAULT_FUZZY_OPTIONS
    expected_kind = kind_of(expected)

    if expected_kind is ValueKind.PATTERN:
        return isinstance(actual, str) and expected.search(actual) is not None

    if expected_kind is ValueKind.PREDICATE:
        return _call_validator(expected, actual)

    actual_kind = kind_of(actual)

    if expected_kind in NULLISH_KINDS or actual_kind in NULLISH_KINDS:
        return expected_kind == actual_kind

    if expected_kind is ValueKind.OBJECT and actual_kind is ValueKind.OBJECT:
        return all(
            key in actual and fuzzy_match(value, actual[key], opts)
            for key, value in expected.items()
        )

    if expected_kind is ValueKind.STRING and actual_kind is ValueKind.STRING:
        return _strings_match(expected, actual, opts)

    if expected_kind is ValueKind.NUMBER and actual_kind is ValueKind.NUMBER:
        return _numbers_match(expected, actual, opts.numeric_tolerance)

    if expected_kind is ValueKind.ARRAY and actual_kind is ValueKind.ARRAY:
        if opts.ignore_array_order:
            return _unordered_arrays_match(expected, actual, opts)
        if len(expected) != len(actual):
            return False
        return all(fuzzy_match(e, a, opts) for e, a in zip(expected, actual))

    if opts.allow_type_coercion:
        coerced = _coerced_equals(expected, expected_kind, actual, actual_kind)
        if coerced is not None:
            return coerced

    return strict_equals(expected, actual)


def compare(expected: Any, actual: Any, strategy: MatchStrategy) -> bool:
    """Compare two values under a strategy (StrictStrategy, FuzzyStrategy, CustomStrategy)."""
    return strategy.matches(expected, actual)


# =============================================================================
# Leaf rules
# =============================================================================


def _call_validator(validator: Any, actual: Any) -> bool:
    """Run a validator callable found in the expected value."""
    try:
        return bool(validator(actual))
    except PredicateError:
        raise
    except Exception as e:
        raise PredicateError(describe_predicate(validator), f"{type(e).__name__}: {e}") from e


def _strings_match(expected: str, actual: str, opts: FuzzyOptions) -> bool:
    if opts.case_insensitive:
        expected = expected.casefold()
        actual = actual.casefold()
    if opts.substring_allowed:
        return expected in actual or actual in expected
    return expected == actual


def _numbers_match(expected: float, actual: float, tolerance: float) -> bool:
    allowed = max(abs(expected) * tolerance, tolerance)
    return abs(expected - actual) <= allowed


def _unordered_arrays_match(expected: Any, actual: Any, opts: FuzzyOptions) -> bool:
    """
    Greedy first-fit matching: every expected element claims a distinct
    actual element. Not globally optimal, so ambiguous overlapping matches
    can produce a false negative.
    """
    consumed = [False] * len(actual)
    for expected_item in expected:
        for index, actual_item in enumerate(actual):
            if consumed[index]:
                continue
            if fuzzy_match(expected_item, actual_item, opts):
                consumed[index] = True
                break
        else:
            return False
    return True


def _parse_float(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        return None


def _coerced_equals(
    expected: Any,
    expected_kind: ValueKind,
    actual: Any,
    actual_kind: ValueKind,
) -> bool | None:
    """
    Compare across bool/number/string boundaries.

    Returns None when no coercion rule applies to this pair of kinds.
    """
    if expected_kind is ValueKind.BOOL and actual_kind is ValueKind.STRING:
        return expected == (actual.lower() == "true" or actual == "1")

    if expected_kind is ValueKind.STRING and actual_kind is ValueKind.NUMBER:
        parsed = _parse_float(expected)
        return parsed is not None and parsed == actual

    if expected_kind is ValueKind.NUMBER and actual_kind is ValueKind.STRING:
        parsed = _parse_float(actual)
        return parsed is not None and expected == parsed

    return None
