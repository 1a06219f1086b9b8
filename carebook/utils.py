"""Shared time utilities for the booking evaluators.

All arithmetic is naive local time. Times of day are anchored to a single
arbitrary reference date so two bookings on the same calendar day can be
compared by clock time alone.
"""

from datetime import date, datetime, time, timedelta
from typing import Union

REFERENCE_DATE = date(2000, 1, 1)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMATS = ("%H:%M", "%H:%M:%S")

DateLike = Union[date, datetime, str]
TimeLike = Union[time, str]


def parse_date(value: DateLike) -> date:
    """Coerce a calendar date from a date, datetime or ISO string.

    Examples:
        >>> parse_date("2024-06-15")
        datetime.date(2024, 6, 15)
        >>> parse_date("2024-06-15T09:30:00")
        datetime.date(2024, 6, 15)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value: {value!r}")

    text = value.strip()
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValueError(f"Unparseable date: {value!r}") from None


def parse_time(value: TimeLike) -> time:
    """Coerce a time of day from a time object or an HH:MM[:SS] string."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported time value: {value!r}")

    text = value.strip()
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Unparseable time: {value!r}")


def anchor_time(value: TimeLike) -> datetime:
    """Place a time of day on the reference date."""
    return datetime.combine(REFERENCE_DATE, parse_time(value))


def hours_to_delta(hours: float) -> timedelta:
    return timedelta(hours=hours)


def interval_for(start_time: TimeLike, duration_hours: float) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` interval on the reference date.

    The end may run past midnight onto the following day; it is never
    wrapped back to the start of the reference date.
    """
    start = anchor_time(start_time)
    return start, start + hours_to_delta(duration_hours)


def intervals_overlap(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    """Half-open intersection test. Touching endpoints do not overlap."""
    return not (a_end <= b_start or a_start >= b_end)
