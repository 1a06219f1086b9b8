"""
Provider availability views built on the overlap evaluator.

Backs the admin assignment card ("Available" / "Busy at this time") and
the provider calendar's busy markers.
"""

import logging
from collections.abc import Iterable
from datetime import time

from carebook.scheduling.overlap import (
    BookingLike,
    CandidateLike,
    booking_date,
    find_conflicts,
    iter_bookings,
    occupied_interval,
)
from carebook.schemas.booking_schema import (
    AvailabilityBadge,
    Booking,
    ProviderAvailabilityStatus,
)
from carebook.utils import DateLike, TimeLike, anchor_time, parse_date, parse_time

logger = logging.getLogger(__name__)

OFFLINE_STATUSES = {
    ProviderAvailabilityStatus.OFF_DUTY.value,
    ProviderAvailabilityStatus.ON_LEAVE.value,
}


def _same_day(bookings: Iterable[BookingLike], on_date: DateLike) -> list[Booking]:
    day = parse_date(on_date)
    return [b for b in iter_bookings(bookings) if booking_date(b) == day]


def is_busy_at(
    existing_bookings: Iterable[BookingLike], on_date: DateLike, at_time: TimeLike
) -> bool:
    """True if an occupying booking covers ``at_time`` (start inclusive, end exclusive)."""
    check = anchor_time(at_time)
    for booking in _same_day(existing_bookings, on_date):
        if not booking.is_occupying():
            continue
        interval = occupied_interval(booking)
        if interval is None:
            continue
        start, end = interval
        if start <= check < end:
            return True
    return False


def has_active_bookings(existing_bookings: Iterable[BookingLike], on_date: DateLike) -> bool:
    """True if the provider has any occupying booking on the date."""
    return any(b.is_occupying() for b in _same_day(existing_bookings, on_date))


def _time_sort_key(booking: Booking) -> tuple[int, time]:
    try:
        return 0, parse_time(booking.scheduled_time or "")
    except ValueError:
        return 1, time.min


def bookings_for_day(existing_bookings: Iterable[BookingLike], on_date: DateLike) -> list[Booking]:
    """All bookings on the date ordered by start time; unreadable times sort last."""
    return sorted(_same_day(existing_bookings, on_date), key=_time_sort_key)


def get_availability_badge(
    provider_status: str,
    existing_bookings: Iterable[BookingLike],
    candidate: CandidateLike,
) -> AvailabilityBadge:
    """
    Availability label for assigning a provider to the candidate slot.

    Precedence: off duty or on leave, then a booking conflict, then the
    provider's own BUSY flag. Anything else is available.
    """
    status = (
        provider_status.value
        if isinstance(provider_status, ProviderAvailabilityStatus)
        else provider_status
    )

    if status in OFFLINE_STATUSES:
        logger.debug("Provider is %s; skipping slot scan", status)
        return AvailabilityBadge(status="offline", text="Offline")

    conflicts = find_conflicts(existing_bookings, candidate)
    if conflicts:
        return AvailabilityBadge(status="busy", text="Busy at this time", conflicts=conflicts)

    if status == ProviderAvailabilityStatus.BUSY.value:
        return AvailabilityBadge(status="busy", text="Currently busy")

    return AvailabilityBadge(status="available", text="Available")
