"""
Wire encoding shared by query strings and form bodies.

Rules:
- None is never emitted; callers skip absent values.
- Booleans are "true"/"false".
- datetime -> RFC3339 UTC, date -> YYYY-MM-DD.
- Enums emit their value: the token for str enums, the code for int enums.
- Repeated values use "key[]" once per element.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

from .dates import format_calendar_date, format_timestamp

Pairs = List[Tuple[str, str]]

MIN_COUNT = 1
MAX_COUNT = 100


def encode_value(value: Any) -> str:
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return encode_value(value.value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return format_calendar_date(value)
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def _format_float(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def clamp_count(count: int, lower: int = MIN_COUNT, upper: int = MAX_COUNT) -> int:
    return max(lower, min(count, upper))


class ParamList:
    """Ordered multimap of wire pairs, built field by field."""

    def __init__(self) -> None:
        self._pairs: Pairs = []

    def add(self, key: str, value: Any) -> "ParamList":
        if value is not None:
            self._pairs.append((key, encode_value(value)))
        return self

    def add_array(self, key: str, values: Optional[Iterable[Any]]) -> "ParamList":
        if values is None:
            return self
        array_key = f"{key}[]"
        for value in values:
            self._pairs.append((array_key, encode_value(value)))
        return self

    def extend(self, pairs: Iterable[Tuple[str, str]]) -> "ParamList":
        self._pairs.extend(pairs)
        return self

    def pairs(self) -> Pairs:
        return list(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)


__all__ = [
    "Pairs",
    "MIN_COUNT",
    "MAX_COUNT",
    "encode_value",
    "clamp_count",
    "ParamList",
]
