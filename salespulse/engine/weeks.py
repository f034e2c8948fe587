"""Date helpers for weekly bucketing and day differences."""

import math
from datetime import datetime, timedelta
from typing import Union

from salespulse.models.task import as_utc

DateLike = Union[datetime, str]

_DAY = timedelta(days=1)


def parse_timestamp(value: DateLike) -> datetime:
    """Parse an ISO-8601 timestamp (or pass a datetime through) as UTC.

    Raises:
        ValueError: If a string cannot be parsed
    """
    if isinstance(value, datetime):
        return as_utc(value)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))


def days_between(start: DateLike, end: DateLike) -> int:
    """Whole days from start to end, rounded half up and never negative."""
    delta = parse_timestamp(end) - parse_timestamp(start)
    return max(0, math.floor(delta / _DAY + 0.5))


def iso_week_key(value: DateLike) -> str:
    """ISO-8601 week key such as ``2024-W07``, computed in UTC.

    The year is the ISO week-numbering year and the week is zero-padded,
    so keys sort lexicographically in chronological order.
    """
    iso_year, iso_week, _ = parse_timestamp(value).isocalendar()
    return f"{iso_year}-W{iso_week:02d}"
