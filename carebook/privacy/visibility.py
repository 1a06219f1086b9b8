"""
Customer contact privacy for provider viewers.

Providers may only see a customer's phone, address and the patient's
emergency contact from one day before until one day after the service
date (by default), compared at day granularity with both boundary days included.
Admins and the customer always have full access. Any other role, and any
booking whose date cannot be read, is denied.
"""

import logging
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Any, Optional, Union
from zoneinfo import ZoneInfo

from carebook.config import settings
from carebook.schemas.booking_schema import Booking, ViewerRole
from carebook.schemas.contact_schema import VisibilityResult
from carebook.utils import parse_date

logger = logging.getLogger(__name__)

FULL_ACCESS_ROLES = {ViewerRole.ADMIN.value, ViewerRole.CUSTOMER.value}

REASON_FULL_ACCESS = "full access for this role."
REASON_IN_WINDOW = "available within service window."
REASON_UNKNOWN_ROLE = "role not recognized; access denied by default"
REASON_BAD_DATE = "scheduled date unavailable; access denied by default"
REASON_BAD_NOW = "current date unavailable; access denied by default"


def not_yet_reason(days_before: int) -> str:
    return f"not yet available; opens {days_before * 24} hours before service."


def expired_reason(days_after: int) -> str:
    return f"expired; was available only until {days_after * 24} hours after service."


def _role_value(viewer_role: Any) -> Optional[str]:
    if isinstance(viewer_role, ViewerRole):
        return viewer_role.value
    if isinstance(viewer_role, str):
        return viewer_role
    return None


def _privacy_zone() -> Optional[ZoneInfo]:
    if settings.privacy.timezone:
        return ZoneInfo(settings.privacy.timezone)
    return None


def resolve_today(now: Optional[Union[date, datetime, str]] = None) -> date:
    """
    Calendar day the window is evaluated on.

    Aware datetimes are converted to the configured privacy zone first;
    naive values and ISO strings are taken as already local. Raises
    ValueError for anything else.
    """
    zone = _privacy_zone()
    if now is None:
        now = datetime.now(zone) if zone else datetime.now()
    if isinstance(now, datetime):
        if now.tzinfo is not None and zone is not None:
            now = now.astimezone(zone)
        return now.date()
    return parse_date(now)


def privacy_window(scheduled: date) -> tuple[date, date]:
    """Inclusive ``(first_day, last_day)`` a provider may see contact details."""
    return (
        scheduled - timedelta(days=settings.privacy.days_before),
        scheduled + timedelta(days=settings.privacy.days_after),
    )


def check_contact_visibility(
    scheduled_date: Any,
    viewer_role: Any,
    now: Optional[Union[date, datetime, str]] = None,
) -> VisibilityResult:
    """Decide whether the viewer may see the customer's contact fields. Never raises."""
    role = _role_value(viewer_role)

    if role in FULL_ACCESS_ROLES:
        return VisibilityResult(visible=True, reason=REASON_FULL_ACCESS, within_window=True)

    if role != ViewerRole.PROVIDER.value:
        logger.warning("Contact access denied for unrecognized role %r", viewer_role)
        return VisibilityResult(visible=False, reason=REASON_UNKNOWN_ROLE)

    try:
        scheduled = parse_date(scheduled_date)
        window_start, window_end = privacy_window(scheduled)
    except (ValueError, OverflowError):
        logger.warning("Contact access denied: unreadable scheduled date %r", scheduled_date)
        return VisibilityResult(visible=False, reason=REASON_BAD_DATE)

    try:
        today = resolve_today(now)
    except ValueError:
        logger.warning("Contact access denied: unreadable current date %r", now)
        return VisibilityResult(visible=False, reason=REASON_BAD_NOW)

    if today < window_start:
        return VisibilityResult(
            visible=False, reason=not_yet_reason(settings.privacy.days_before)
        )
    if today > window_end:
        return VisibilityResult(
            visible=False, reason=expired_reason(settings.privacy.days_after)
        )
    return VisibilityResult(visible=True, reason=REASON_IN_WINDOW, within_window=True)


def get_booking_privacy_status(
    booking: Union[Booking, Mapping[str, Any]],
    viewer_role: Any,
    now: Optional[Union[date, datetime, str]] = None,
) -> VisibilityResult:
    """Visibility for a booking record, judged by its scheduled date."""
    if isinstance(booking, Booking):
        scheduled_date = booking.scheduled_date
    elif isinstance(booking, Mapping):
        scheduled_date = booking.get("scheduledDate", booking.get("scheduled_date"))
    else:
        scheduled_date = None
    return check_contact_visibility(scheduled_date, viewer_role, now)


def format_protected_field(
    value: Optional[str],
    visible: bool,
    *,
    protected: Optional[str] = None,
    unavailable: Optional[str] = None,
) -> str:
    """Display text for a contact field. Hidden fields never return the value."""
    if not value:
        return unavailable if unavailable is not None else settings.privacy.unavailable_placeholder
    if not visible:
        return protected if protected is not None else settings.privacy.protected_placeholder
    return value


def format_phone_number(phone: Optional[str], visible: bool) -> str:
    return format_protected_field(
        phone,
        visible,
        protected="Phone number protected",
        unavailable="Phone number not available",
    )


def format_address(address: Optional[str], visible: bool) -> str:
    return format_protected_field(
        address,
        visible,
        protected="Address protected",
        unavailable="Address not available",
    )
