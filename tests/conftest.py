"""Shared test fixtures and helpers."""

from typing import Any, Optional

import pytest

from carebook.config import AppConfig, PrivacyConfig


def make_booking(
    scheduled_time: Optional[str] = "10:00",
    duration: Any = 1,
    status: str = "CONFIRMED",
    scheduled_date: Optional[str] = "2024-01-01",
    booking_id: str = "BK-1",
    **extra: Any,
) -> dict[str, Any]:
    """Helper to create a booking record shaped like the bookings API output."""
    record: dict[str, Any] = {
        "id": booking_id,
        "scheduledDate": scheduled_date,
        "scheduledTime": scheduled_time,
        "duration": duration,
        "status": status,
    }
    record.update(extra)
    return record


def make_candidate(
    start_time: str = "10:00",
    duration_hours: float = 1,
    on_date: str = "2024-01-01",
) -> dict[str, Any]:
    """Helper to create a candidate slot mapping."""
    return {"date": on_date, "start_time": start_time, "duration_hours": duration_hours}


@pytest.fixture
def privacy_settings(monkeypatch):
    """Swap the privacy settings seen by the visibility module."""

    def apply(**overrides: Any) -> AppConfig:
        config = AppConfig(privacy=PrivacyConfig(**overrides))
        monkeypatch.setattr("carebook.privacy.visibility.settings", config)
        return config

    return apply
