"""Tests for the EvalMatch exception hierarchy."""

from __future__ import annotations

import pytest

from src.evalmatch.exceptions import (
    ConfigurationError,
    EvalMatchError,
    EvaluationError,
    InvalidConfigError,
    InvalidExpectationError,
    PredicateError,
)


class TestExceptionHierarchy:
    """Test that exceptions inherit correctly."""

    @pytest.mark.parametrize(
        "exc_class, parent",
        [
            (ConfigurationError, EvalMatchError),
            (InvalidConfigError, ConfigurationError),
            (EvaluationError, EvalMatchError),
            (PredicateError, EvaluationError),
            (InvalidExpectationError, EvaluationError),
        ],
    )
    def test_inheritance(self, exc_class: type, parent: type) -> None:
        assert issubclass(exc_class, parent)


class TestExceptionMessages:
    """Test message and code formatting."""

    def test_str_includes_code(self) -> None:
        error = EvalMatchError("Something failed", code="E001")
        assert str(error) == "[E001] Something failed"

    def test_str_without_code(self) -> None:
        assert str(EvalMatchError("Something failed")) == "Something failed"

    def test_invalid_config_error(self) -> None:
        error = InvalidConfigError("params", "loose", "Expected 'strict' or 'fuzzy'")
        assert error.field == "params"
        assert error.value == "loose"
        assert error.code == "CONFIG_INVALID"
        assert "'loose'" in str(error)

    def test_predicate_error(self) -> None:
        error = PredicateError("check_age", "TypeError: bad operand")
        assert error.predicate == "check_age"
        assert error.code == "EVAL_PREDICATE"
        assert "check_age" in str(error)

    def test_invalid_expectation_error(self) -> None:
        error = InvalidExpectationError("expected fields must be a mapping")
        assert error.code == "EVAL_INVALID_EXPECTATION"
        assert error.reason == "expected fields must be a mapping"
