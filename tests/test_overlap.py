"""Tests for slot conflict detection."""

import logging
from datetime import date, time

import pytest

from carebook.scheduling.overlap import (
    coerce_booking,
    find_conflicts,
    is_slot_busy,
    occupied_interval,
)
from carebook.schemas.booking_schema import Booking, BookingStatus, CandidateSlot
from tests.conftest import make_booking, make_candidate


class TestOverlapRules:
    def test_partial_overlap_is_busy(self):
        bookings = [make_booking("10:00", 1)]
        assert is_slot_busy(bookings, make_candidate("10:30", 1)) is True

    def test_identical_interval_is_busy(self):
        bookings = [make_booking("10:00", 1)]
        assert is_slot_busy(bookings, make_candidate("10:00", 1)) is True

    def test_candidate_inside_booking_is_busy(self):
        bookings = [make_booking("09:00", 4)]
        assert is_slot_busy(bookings, make_candidate("10:00", 0.5)) is True

    def test_booking_inside_candidate_is_busy(self):
        bookings = [make_booking("11:00", 0.5)]
        assert is_slot_busy(bookings, make_candidate("10:00", 3)) is True

    def test_candidate_starting_when_booking_ends_is_free(self):
        bookings = [make_booking("09:00", 1)]
        assert is_slot_busy(bookings, make_candidate("10:00", 1)) is False

    def test_candidate_ending_when_booking_starts_is_free(self):
        bookings = [make_booking("11:00", 1)]
        assert is_slot_busy(bookings, make_candidate("10:00", 1)) is False

    def test_fractional_hours(self):
        bookings = [make_booking("10:00", 1.5)]
        assert is_slot_busy(bookings, make_candidate("11:29", 1)) is True
        assert is_slot_busy(bookings, make_candidate("11:30", 1)) is False

    def test_seconds_in_scheduled_time(self):
        bookings = [make_booking("10:00:00", 1)]
        assert is_slot_busy(bookings, make_candidate("10:30", 1)) is True

    def test_empty_booking_list(self):
        assert is_slot_busy([], make_candidate()) is False

    def test_none_booking_list(self):
        assert is_slot_busy(None, make_candidate()) is False


class TestStatusFilter:
    @pytest.mark.parametrize("status", ["CONFIRMED", "IN_PROGRESS"])
    def test_occupying_statuses_block(self, status):
        bookings = [make_booking("10:00", 1, status=status)]
        assert is_slot_busy(bookings, make_candidate("10:00", 1)) is True

    @pytest.mark.parametrize("status", ["PENDING", "COMPLETED", "CANCELLED", "", "UNKNOWN"])
    def test_other_statuses_never_block(self, status):
        bookings = [make_booking("10:00", 1, status=status)]
        assert is_slot_busy(bookings, make_candidate("10:00", 1)) is False

    def test_enum_status_on_model(self):
        booking = Booking(
            scheduled_date="2024-01-01",
            scheduled_time="10:00",
            duration_hours=1,
            status=BookingStatus.IN_PROGRESS,
        )
        assert is_slot_busy([booking], make_candidate("10:15", 1)) is True


class TestDateIsolation:
    def test_other_date_never_conflicts(self):
        bookings = [make_booking("10:00", 1, scheduled_date="2024-01-01")]
        assert is_slot_busy(bookings, make_candidate("10:00", 1, on_date="2024-01-02")) is False

    def test_only_same_date_booking_counts(self):
        bookings = [
            make_booking("10:00", 1, scheduled_date="2024-01-01", booking_id="A"),
            make_booking("14:00", 1, scheduled_date="2024-01-02", booking_id="B"),
        ]
        conflicts = find_conflicts(bookings, make_candidate("14:00", 1, on_date="2024-01-02"))
        assert [b.id for b in conflicts] == ["B"]

    def test_datetime_scheduled_date_uses_date_part(self):
        bookings = [make_booking("10:00", 1, scheduled_date="2024-01-01T00:00:00")]
        assert is_slot_busy(bookings, make_candidate("10:00", 1)) is True


class TestMalformedRecords:
    @pytest.mark.parametrize(
        "record",
        [
            make_booking(scheduled_time=None),
            make_booking(scheduled_time=""),
            make_booking(scheduled_time="ten o'clock"),
            make_booking(scheduled_time="25:00"),
            make_booking(duration=None),
            make_booking(duration="abc"),
            make_booking(duration=0),
            make_booking(duration=-2),
            make_booking(scheduled_date=None),
            make_booking(scheduled_date="not-a-date"),
        ],
    )
    def test_malformed_record_is_skipped(self, record):
        assert is_slot_busy([record], make_candidate("10:00", 1)) is False

    def test_bad_record_does_not_hide_good_one(self):
        bookings = [
            make_booking(scheduled_time="garbage", booking_id="BAD"),
            make_booking("10:00", 1, booking_id="GOOD"),
        ]
        conflicts = find_conflicts(bookings, make_candidate("10:30", 1))
        assert [b.id for b in conflicts] == ["GOOD"]

    def test_record_failing_validation_is_skipped(self):
        bookings = [{"scheduledDate": ["2024-01-01"], "status": "CONFIRMED"}]
        assert is_slot_busy(bookings, make_candidate()) is False
        assert coerce_booking(bookings[0]) is None

    def test_numeric_string_duration_is_accepted(self):
        bookings = [make_booking("10:00", "2")]
        assert is_slot_busy(bookings, make_candidate("11:30", 1)) is True

    def test_skip_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="carebook.scheduling.overlap"):
            is_slot_busy([make_booking(duration="abc", booking_id="BK-9")], make_candidate())
        assert "BK-9" in caplog.text

    def test_validation_skip_logs_record_id(self, caplog):
        record = {"id": "BK-77", "scheduledDate": ["2024-01-01"], "status": "CONFIRMED"}
        with caplog.at_level(logging.WARNING, logger="carebook.scheduling.overlap"):
            assert coerce_booking(record) is None
        assert "BK-77" in caplog.text

    def test_validation_skip_of_non_mapping_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="carebook.scheduling.overlap"):
            assert coerce_booking("BK-78") is None
        assert "Skipping booking record None" in caplog.text


class TestCandidateValidation:
    @pytest.mark.parametrize("duration", [0, -1])
    def test_non_positive_duration_raises(self, duration):
        with pytest.raises(ValueError):
            is_slot_busy([], make_candidate(duration_hours=duration))

    def test_unparseable_start_time_raises(self):
        with pytest.raises(ValueError):
            is_slot_busy([], make_candidate(start_time="noon"))

    def test_unparseable_date_raises(self):
        with pytest.raises(ValueError):
            is_slot_busy([], make_candidate(on_date="tomorrow"))

    @pytest.mark.parametrize("start_time, duration", [("23:00", 3), ("22:30", 2), ("00:00", 25)])
    def test_slot_crossing_midnight_raises(self, start_time, duration):
        with pytest.raises(ValueError, match="midnight"):
            is_slot_busy([], make_candidate(start_time, duration))

    @pytest.mark.parametrize("start_time, duration", [("23:00", 1), ("22:30", 1.5), ("00:00", 24)])
    def test_slot_ending_at_midnight_is_accepted(self, start_time, duration):
        assert is_slot_busy([], make_candidate(start_time, duration)) is False

    def test_late_booking_still_blocks_late_candidate(self):
        bookings = [make_booking("22:00", 3)]
        assert is_slot_busy(bookings, make_candidate("23:00", 1)) is True

    def test_camel_case_candidate(self):
        candidate = {"date": "2024-01-01", "startTime": "10:30", "durationHours": 1}
        assert is_slot_busy([make_booking("10:00", 1)], candidate) is True

    def test_candidate_model(self):
        candidate = CandidateSlot(date=date(2024, 1, 1), start_time=time(10, 30), duration_hours=1)
        assert is_slot_busy([make_booking("10:00", 1)], candidate) is True


class TestOccupiedInterval:
    def test_interval_is_anchored_to_reference_day(self):
        start, end = occupied_interval(Booking.model_validate(make_booking("22:00", 3)))
        assert start.date() == date(2000, 1, 1)
        assert (end - start).total_seconds() == 3 * 3600

    def test_interval_runs_past_midnight(self):
        start, end = occupied_interval(Booking.model_validate(make_booking("23:00", 2)))
        assert end.date() == date(2000, 1, 2)
        assert end.hour == 1


class TestPurity:
    def test_repeated_calls_agree(self):
        bookings = [make_booking("10:00", 1), make_booking("12:00", 1, status="PENDING")]
        candidate = make_candidate("10:30", 2)
        first = is_slot_busy(bookings, candidate)
        second = is_slot_busy(bookings, candidate)
        assert first is second is True

    def test_input_records_not_mutated(self):
        record = make_booking("10:00", 1)
        before = dict(record)
        is_slot_busy([record], make_candidate())
        assert record == before
