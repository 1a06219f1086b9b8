"""Privacy-aware booking views for provider dashboards."""

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Optional, Union

from carebook.privacy.visibility import check_contact_visibility
from carebook.schemas.booking_schema import Booking, PrivacyAwareBooking

logger = logging.getLogger(__name__)


def redact_booking(
    record: Union[Booking, Mapping[str, Any]],
    viewer_role: Any,
    now: Optional[Union[date, datetime, str]] = None,
) -> PrivacyAwareBooking:
    """
    Copy a booking with contact fields blanked when the viewer may not see them.

    Names, email and the emergency contact's name and relation are kept;
    the customer's phone and address and the emergency contact phone are
    dropped outside the window. The input record is not modified.

    A raw record that cannot be loaded at all raises ValidationError; there
    is nothing to render for it.
    """
    booking = record if isinstance(record, Booking) else Booking.model_validate(record)
    decision = check_contact_visibility(booking.scheduled_date, viewer_role, now)

    customer = booking.customer.model_copy() if booking.customer else None
    patient = booking.patient.model_copy() if booking.patient else None

    if not decision.visible:
        if customer is not None:
            customer = customer.model_copy(update={"phone": None, "address": None})
        if patient is not None:
            patient = patient.model_copy(update={"emergency_contact_phone": None})
        logger.debug("Redacted contact details on booking %s", booking.id)

    return PrivacyAwareBooking(
        id=booking.id,
        scheduled_date=booking.scheduled_date,
        scheduled_time=booking.scheduled_time,
        duration_hours=booking.duration_hours,
        status=booking.status,
        customer=customer,
        patient=patient,
        contact_available=decision.visible,
        privacy_message=decision.reason,
    )
