from __future__ import annotations

import re
from datetime import date, datetime, time, timezone
from typing import Union

from .errors import InvalidDateError

CALENDAR_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

START_OF_DAY = time(0, 0, 0)
END_OF_DAY = time(23, 59, 59)

DateInput = Union[date, datetime, str]


def parse_calendar_date(value: DateInput) -> date:
    """
    Parse a calendar date.

    Accepts a date, a datetime (its UTC date is used), "YYYY-MM-DD",
    or an RFC3339 timestamp such as "2024-03-14T00:00:00Z".
    """
    if isinstance(value, datetime):
        return _as_utc(value).date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(f"Expected a date, got {type(value).__name__}.")

    text = value.strip()
    if CALENDAR_DATE_RE.match(text):
        try:
            return date.fromisoformat(text)
        except ValueError as exc:
            raise InvalidDateError(f"Invalid date: {value!r}") from exc
    return _as_utc(parse_timestamp(text)).date()


def parse_timestamp(value: Union[datetime, str]) -> datetime:
    """Parse an RFC3339 timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        return _as_utc(value)
    if not isinstance(value, str):
        raise InvalidDateError(f"Expected a timestamp, got {type(value).__name__}.")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidDateError(f"Invalid timestamp: {value!r}") from exc
    return _as_utc(parsed)


def since_bound(value: DateInput) -> datetime:
    """
    Lower bound of a timestamp range.
    Date-only input anchors to the first second of that day (UTC).
    """
    if _has_time(value):
        return parse_timestamp(value)
    day = parse_calendar_date(value)
    return datetime.combine(day, START_OF_DAY, tzinfo=timezone.utc)


def until_bound(value: DateInput) -> datetime:
    """
    Upper bound of a timestamp range.
    Date-only input anchors to the last second of that day (UTC), so a
    same-day since/until pair covers the whole day.
    """
    if _has_time(value):
        return parse_timestamp(value)
    day = parse_calendar_date(value)
    return datetime.combine(day, END_OF_DAY, tzinfo=timezone.utc)


def format_calendar_date(value: date) -> str:
    if isinstance(value, datetime):
        value = _as_utc(value).date()
    return value.strftime("%Y-%m-%d")


def format_timestamp(value: datetime) -> str:
    return _as_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")


def _has_time(value: DateInput) -> bool:
    if isinstance(value, datetime):
        return True
    if isinstance(value, str):
        return not CALENDAR_DATE_RE.match(value.strip())
    return False


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


__all__ = [
    "DateInput",
    "parse_calendar_date",
    "parse_timestamp",
    "since_bound",
    "until_bound",
    "format_calendar_date",
    "format_timestamp",
]
