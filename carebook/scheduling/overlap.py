"""
Overlap Detection

Decides whether a candidate slot conflicts with a provider's existing
bookings, considering:
- Booking date (only same-day bookings are compared)
- Booking status (only CONFIRMED and IN_PROGRESS occupy time)
- Half-open intervals (back-to-back bookings are allowed)

Booking records come from an external API and are not fully trusted: a
record with a missing or unparseable time or duration is skipped, never
raised. An invalid candidate is a caller bug and raises ValueError.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any, Optional, Union

from pydantic import ValidationError

from carebook.schemas.booking_schema import Booking, CandidateSlot
from carebook.utils import interval_for, intervals_overlap, parse_date

logger = logging.getLogger(__name__)

BookingLike = Union[Booking, Mapping[str, Any]]
CandidateLike = Union[CandidateSlot, Mapping[str, Any]]


def coerce_booking(record: BookingLike) -> Optional[Booking]:
    """Load a raw API record into a Booking, or None if it cannot be read."""
    if isinstance(record, Booking):
        return record
    try:
        return Booking.model_validate(record)
    except ValidationError as exc:
        record_id = record.get("id") if isinstance(record, Mapping) else None
        logger.warning(
            "Skipping booking record %s that failed validation (%d error(s))",
            record_id, exc.error_count(),
        )
        return None


def coerce_candidate(candidate: CandidateLike) -> CandidateSlot:
    """Validate a candidate slot. Raises ValueError on bad input."""
    if isinstance(candidate, CandidateSlot):
        return candidate
    return CandidateSlot.model_validate(candidate)


def iter_bookings(existing_bookings: Iterable[BookingLike]) -> Iterable[Booking]:
    for record in existing_bookings or ():
        booking = coerce_booking(record)
        if booking is not None:
            yield booking


def booking_date(booking: Booking) -> Optional[date]:
    if not booking.scheduled_date:
        return None
    try:
        return parse_date(booking.scheduled_date)
    except ValueError:
        return None


def occupied_interval(booking: Booking) -> Optional[tuple[datetime, datetime]]:
    """
    Return the ``[start, end)`` interval a booking occupies on the reference day.

    Returns None for records with a missing or unparseable time, or a
    missing, non-numeric or non-positive duration.
    """
    if not booking.scheduled_time:
        logger.warning("Skipping booking %s: no scheduled time", booking.id)
        return None

    try:
        duration = float(booking.duration_hours)
    except (TypeError, ValueError):
        logger.warning("Skipping booking %s: invalid duration", booking.id)
        return None
    if not math.isfinite(duration) or duration <= 0:
        logger.warning("Skipping booking %s: non-positive duration", booking.id)
        return None

    try:
        return interval_for(booking.scheduled_time, duration)
    except ValueError:
        logger.warning("Skipping booking %s: unparseable scheduled time", booking.id)
        return None


def find_conflicts(
    existing_bookings: Iterable[BookingLike], candidate: CandidateLike
) -> list[Booking]:
    """
    Collect the occupying bookings that overlap the candidate slot.

    Algorithm:
        1. Keep bookings on the candidate's date with an occupying status
        2. Compute each booking's interval on the shared reference day
        3. Compute the candidate's interval the same way
        4. Keep bookings where NOT (end_a <= start_b OR start_a >= end_b)
    """
    slot = coerce_candidate(candidate)
    slot_start, slot_end = interval_for(slot.start_time, slot.duration_hours)

    conflicts = []
    for booking in iter_bookings(existing_bookings):
        if booking_date(booking) != slot.date:
            continue
        if not booking.is_occupying():
            continue

        interval = occupied_interval(booking)
        if interval is None:
            continue

        if intervals_overlap(slot_start, slot_end, *interval):
            conflicts.append(booking)

    if conflicts:
        logger.debug(
            "Slot %s %s (%.2fh) conflicts with %d booking(s)",
            slot.date,
            slot.start_time.strftime("%H:%M"),
            slot.duration_hours,
            len(conflicts),
        )
    return conflicts


def is_slot_busy(
    existing_bookings: Iterable[BookingLike], candidate: CandidateLike
) -> bool:
    """True if any occupying same-day booking overlaps the candidate slot."""
    return bool(find_conflicts(existing_bookings, candidate))
