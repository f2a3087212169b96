#!/usr/bin/env python3
"""
Timezone-free calendar date helpers.

Every value handled here is a plain datetime.date. Timestamps are cut down to
their calendar date (the tzinfo is dropped, never converted), so "2026-03-10"
and "2026-03-10T00:00:00Z" name the same day.
"""

import re
from datetime import date, datetime, timedelta
from typing import Union

from .constants import DAY_ORDER, DAYS_PER_WEEK, MONTH_ABBREV
from .errors import InvalidArgument, InvalidDateError

DateLike = Union[date, datetime, str]

# YYYY-MM-DD, optionally followed by a T or space and an HH:MM[:SS[.fff]][zone] time
_ISO_DATE_RE = re.compile(
    r'(\d{4}-\d{2}-\d{2})'
    r'(?:[Tt ]\d{2}:\d{2}(?::\d{2}(?:[.,]\d+)?)?(?:[Zz]|[+-]\d{2}(?::?\d{2})?)?)?'
)


def parse_date(value: str) -> date:
    """
    Parse an ISO 8601 date string.

    Accepts 'YYYY-MM-DD' or a full timestamp starting with it
    ('2026-03-10T00:00:00Z', '2026-03-10 07:30').
    """
    match = _ISO_DATE_RE.fullmatch(value.strip())
    if match is None:
        raise InvalidDateError(f"Not an ISO date: {value!r}")
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        raise InvalidDateError(f"Not an ISO date: {value!r}") from None


def to_date(value: DateLike) -> date:
    """Normalize a date, datetime or ISO string to a calendar date."""
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_date(value)
    raise InvalidDateError(f"Expected a date or ISO date string, got {type(value).__name__}")


def shift(day: date, days: int = 0, weeks: int = 0) -> date:
    """day moved by the given days and weeks; raises past date.min/date.max."""
    try:
        return day + timedelta(days=days, weeks=weeks)
    except OverflowError:
        raise InvalidArgument(
            f"{day.isoformat()} shifted by {weeks}w{days:+d}d is outside the supported calendar range"
        ) from None


def format_iso(value: DateLike) -> str:
    """Format as YYYY-MM-DD."""
    return to_date(value).isoformat()


def format_short(value: DateLike) -> str:
    """Short display form, e.g. 'Jan 1'."""
    day = to_date(value)
    return f"{MONTH_ABBREV[day.month - 1]} {day.day}"


def format_compact(value: DateLike) -> str:
    """Compact form used in week labels, e.g. 'Jan1'."""
    day = to_date(value)
    return f"{MONTH_ABBREV[day.month - 1]}{day.day}"


def weekday_abbrev(value: DateLike) -> str:
    return DAY_ORDER[to_date(value).weekday()]


def days_since_monday(value: DateLike) -> int:
    """Distance back to the Monday of the same ISO week (Sunday -> 6)."""
    return to_date(value).weekday()


def monday_of(value: DateLike) -> date:
    """Monday of the Mon-Sun week containing the given day."""
    day = to_date(value)
    return shift(day, days=-days_since_monday(day))


def sunday_of(value: DateLike) -> date:
    return shift(monday_of(value), days=DAYS_PER_WEEK - 1)


def days_between(start: DateLike, end: DateLike) -> int:
    """Signed number of days from start to end."""
    return (to_date(end) - to_date(start)).days


def today() -> date:
    """Local calendar date. Callers pass this in; core functions never call it."""
    return date.today()
