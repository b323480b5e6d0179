"""Datetime parsing and timezone normalization helpers."""

from __future__ import annotations

import datetime

from dateutil import parser as _dateutil_parser


def utcnow() -> datetime.datetime:
    """Return the current instant as an aware UTC datetime."""

    return datetime.datetime.now(datetime.timezone.utc)


def ensure_utc(value: datetime.datetime) -> datetime.datetime:
    """Normalize ``value`` to UTC, treating naive datetimes as UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def parse_datetime_input(value: str) -> datetime.datetime:
    """Parse a user-entered datetime string into an aware UTC datetime.

    Accepts anything python-dateutil understands, including the
    ``YYYY-MM-DDTHH:MM`` shape produced by datetime-local inputs.

    Raises:
        ValueError: when the string is empty or cannot be parsed.
    """
    if not value or not value.strip():
        raise ValueError("Datetime value is empty")
    try:
        parsed = _dateutil_parser.parse(value.strip())
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"Invalid datetime value: {value!r}") from exc
    return ensure_utc(parsed)


__all__ = [
    "utcnow",
    "ensure_utc",
    "parse_datetime_input",
]
