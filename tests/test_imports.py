"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestSchemaImports:
    def test_import_booking_schema(self):
        from carebook.schemas.booking_schema import (
            Booking, BookingStatus, CandidateSlot, OCCUPYING_STATUSES, ViewerRole,
        )
        assert BookingStatus.IN_PROGRESS == "IN_PROGRESS"
        assert ViewerRole.PROVIDER == "PROVIDER"
        assert OCCUPYING_STATUSES == {BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS}
        assert Booking().status == ""
        assert CandidateSlot is not None

    def test_booking_accepts_api_keys(self):
        from carebook.schemas.booking_schema import Booking

        booking = Booking.model_validate(
            {"scheduledDate": "2024-01-01", "scheduledTime": "10:00", "duration": 2}
        )
        assert booking.scheduled_date == "2024-01-01"
        assert booking.duration_hours == 2

    def test_import_contact_schema(self):
        from carebook.schemas.contact_schema import PatientContact, VisibilityResult

        patient = PatientContact.model_validate({"emergencyContactPhone": "100"})
        assert patient.emergency_contact_phone == "100"
        assert VisibilityResult(visible=False, reason="x").within_window is False


class TestPackageReExports:
    def test_scheduling_exports(self):
        from carebook.scheduling import (
            BookingPoller, find_conflicts, get_availability_badge, is_slot_busy,
        )
        assert callable(is_slot_busy)
        assert callable(find_conflicts)
        assert callable(get_availability_badge)
        assert BookingPoller is not None

    def test_privacy_exports(self):
        from carebook.privacy import (
            check_contact_visibility, format_protected_field, redact_booking,
        )
        assert callable(check_contact_visibility)
        assert callable(format_protected_field)
        assert callable(redact_booking)
