from carebook.scheduling.overlap import find_conflicts, is_slot_busy, occupied_interval
from carebook.scheduling.availability import (
    bookings_for_day,
    get_availability_badge,
    has_active_bookings,
    is_busy_at,
)
from carebook.scheduling.poller import BookingPoller

__all__ = [
    "is_slot_busy", "find_conflicts", "occupied_interval",
    "is_busy_at", "has_active_bookings", "bookings_for_day", "get_availability_badge",
    "BookingPoller",
]
