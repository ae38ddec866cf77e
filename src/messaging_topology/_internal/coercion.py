"""Lenient conversions between form control text and JSON values.

Every function here returns None instead of raising when the input can't be converted,
the callers decide what the fallback value is.
"""

from __future__ import annotations

import datetime
import math
import re
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..constants import DATETIME_LOCAL_FORMAT

_DATETIME_ADAPTER = TypeAdapter(datetime.datetime)

# pydantic reads bare numbers as Unix timestamps, a date-time control never means that
_NUMERIC_TEXT = re.compile(r'^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*$')

# leading part of the text only, trailing garbage is ignored ("37px" -> 37)
_INTEGER_PREFIX = re.compile(r'^\s*([+-]?\d+)')
_NUMBER_PREFIX = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


def parse_datetime(value: Any) -> datetime.datetime | None:
    """Parse an ISO-8601 string into a timezone-aware UTC datetime.

    Values without zone information are assumed to already be UTC. Instants which fall
    outside of the representable range once shifted to UTC are rejected.
    """
    if not isinstance(value, str) or not value.strip() or _NUMERIC_TEXT.match(value):
        return None
    try:
        parsed = _DATETIME_ADAPTER.validate_python(value.strip())
    except ValidationError:
        return None
    try:
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=datetime.timezone.utc)
        return parsed.astimezone(datetime.timezone.utc)
    except (OverflowError, ValueError):
        return None


def to_datetime_local(value: Any) -> str | None:
    """ISO-8601 instant -> 'YYYY-MM-DDTHH:MM' (seconds and below are truncated)."""
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    try:
        return parsed.strftime(DATETIME_LOCAL_FORMAT)
    except ValueError:
        return None


def to_iso_instant(value: Any) -> str | None:
    """Control text -> ISO-8601 instant with millisecond precision, i.e. '2024-01-19T20:21:00.000Z'."""
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    try:
        return f'{parsed.strftime("%Y-%m-%dT%H:%M:%S")}.{parsed.microsecond // 1000:03d}Z'
    except ValueError:
        return None


def parse_integer(value: Any) -> int | None:
    """Parse the leading integer of the text, any fractional part is truncated."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    match = _INTEGER_PREFIX.match(value)
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # more digits than the interpreter's int conversion limit
        return None


def parse_number(value: Any) -> int | float | None:
    """Parse the leading number of the text with full precision.

    Infinity and NaN have no JSON representation and count as unparseable.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    match = _NUMBER_PREFIX.match(value)
    if not match:
        return None
    result = float(match.group(1))
    return result if math.isfinite(result) else None


def parse_toggle(value: Any) -> bool:
    """Toggle state of a checkbox. HTML forms submit 'on' for a checked box."""
    if isinstance(value, str):
        return value.strip().lower() in ('on', 'true', '1', 'yes')
    return bool(value)
