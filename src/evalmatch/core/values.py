"""
Value Model

Classifies the open-ended values found in expectations and model outputs
(JSON-like data, regex patterns, validator callables) into a small set of
kinds so the comparator can dispatch on the kind instead of on ad-hoc type
checks. Also renders values for rationale strings.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any


class _Missing:
    """Sentinel type for a value that is absent, as opposed to present and None."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class ValueKind(str, Enum):
    """Kinds of values the comparator distinguishes."""

    NULL = "null"
    MISSING = "missing"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    PATTERN = "pattern"
    PREDICATE = "predicate"
    OTHER = "other"


NULLISH_KINDS = frozenset({ValueKind.NULL, ValueKind.MISSING})


def kind_of(value: Any) -> ValueKind:
    """
    Classify a value.

    bool is checked before numbers since it subclasses int in Python. Tuples
    count as arrays and any Mapping as an object.
    """
    if value is None:
        return ValueKind.NULL
    if value is MISSING:
        return ValueKind.MISSING
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    if isinstance(value, re.Pattern):
        return ValueKind.PATTERN
    if callable(value):
        return ValueKind.PREDICATE
    return ValueKind.OTHER


def describe_predicate(func: Any) -> str:
    """Best-effort name for a caller-supplied callable, for error messages."""
    return getattr(func, "__qualname__", None) or getattr(func, "__name__", None) or repr(func)


def _json_default(value: Any) -> Any:
    if isinstance(value, re.Pattern):
        return f"/{value.pattern}/"
    if value is MISSING:
        return "<missing>"
    if callable(value):
        return f"<{describe_predicate(value)}>"
    return str(value)


def format_value(value: Any) -> str:
    """
    Render a value for rationale text.

    Strings are double-quoted, None renders as null, containers as JSON and
    regex patterns as /pattern/.
    """
    kind = kind_of(value)
    if kind is ValueKind.MISSING:
        return "<missing>"
    if kind is ValueKind.PATTERN:
        return f"/{value.pattern}/"
    if kind is ValueKind.PREDICATE:
        return f"<{describe_predicate(value)}>"
    if kind is ValueKind.STRING:
        return json.dumps(value, ensure_ascii=False)
    if kind in (ValueKind.NULL, ValueKind.BOOL):
        return json.dumps(value)
    if kind in (ValueKind.ARRAY, ValueKind.OBJECT):
        return json.dumps(value, default=_json_default, ensure_ascii=False)
    return str(value)
