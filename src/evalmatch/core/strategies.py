"""
Match Strategies

A strategy decides whether an expected value matches an actual one. Matchers
resolve their configured strategy once at construction time with
build_strategy() and then call ``matches`` for every comparison.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from src.evalmatch.contracts.matching import FuzzyOptions
from src.evalmatch.core.comparator import fuzzy_match, strict_equals
from src.evalmatch.core.values import describe_predicate
from src.evalmatch.exceptions import InvalidConfigError, PredicateError


@runtime_checkable
class MatchStrategy(Protocol):
    """Protocol for comparison strategies."""

    @property
    def name(self) -> str:
        """Return the strategy name (e.g., 'strict', 'fuzzy', 'custom')."""
        ...

    def matches(self, expected: Any, actual: Any, field_name: str | None = None) -> bool:
        """Return True when ``actual`` satisfies ``expected``."""
        ...


@dataclass(frozen=True)
class StrictStrategy:
    """Deep equality."""

    name: str = field(default="strict", init=False)

    def matches(self, expected: Any, actual: Any, field_name: str | None = None) -> bool:
        return strict_equals(expected, actual)


@dataclass(frozen=True)
class FuzzyStrategy:
    """Tolerant comparison driven by FuzzyOptions."""

    options: FuzzyOptions = field(default_factory=FuzzyOptions)
    name: str = field(default="fuzzy", init=False)

    def matches(self, expected: Any, actual: Any, field_name: str | None = None) -> bool:
        return fuzzy_match(expected, actual, self.options)


@dataclass(frozen=True)
class CustomStrategy:
    """
    Caller-supplied predicate.

    With ``pass_field_name`` the predicate is called as
    ``predicate(expected, actual, field_name)``, which lets structured output
    checks apply per-field logic. Exceptions raised by the predicate are
    re-raised as PredicateError rather than being scored as a mismatch.
    """

    predicate: Callable[..., Any]
    pass_field_name: bool = False
    name: str = field(default="custom", init=False)

    def matches(self, expected: Any, actual: Any, field_name: str | None = None) -> bool:
        try:
            if self.pass_field_name:
                result = self.predicate(expected, actual, field_name)
            else:
                result = self.predicate(expected, actual)
        except PredicateError:
            raise
        except Exception as e:
            raise PredicateError(
                describe_predicate(self.predicate), f"{type(e).__name__}: {e}"
            ) from e
        return bool(result)


def build_strategy(
    spec: str | Callable[..., Any],
    fuzzy_options: FuzzyOptions,
    *,
    pass_field_name: bool = False,
    config_field: str = "strategy",
) -> MatchStrategy:
    """
    Resolve a configured strategy ("strict", "fuzzy" or a callable).

    Args:
        spec: Strategy name or predicate
        fuzzy_options: Options used when spec is "fuzzy"
        pass_field_name: Whether a custom predicate receives the field name
        config_field: Configuration field name reported on error

    Raises:
        InvalidConfigError: If spec is neither a known name nor callable
    """
    if callable(spec):
        return CustomStrategy(predicate=spec, pass_field_name=pass_field_name)
    if spec == "strict":
        return StrictStrategy()
    if spec == "fuzzy":
        return FuzzyStrategy(options=fuzzy_options)
    raise InvalidConfigError(
        config_field,
        spec,
        "Expected 'strict', 'fuzzy' or a callable predicate",
    )
