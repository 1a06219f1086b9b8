from carebook.privacy.visibility import (
    check_contact_visibility,
    format_address,
    format_phone_number,
    format_protected_field,
    get_booking_privacy_status,
)
from carebook.privacy.redaction import redact_booking

__all__ = [
    "check_contact_visibility",
    "get_booking_privacy_status",
    "format_protected_field",
    "format_phone_number",
    "format_address",
    "redact_booking",
]
