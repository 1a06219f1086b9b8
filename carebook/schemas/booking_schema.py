"""Booking, candidate slot and availability data models."""

import datetime as dt
from enum import Enum
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from carebook.schemas.contact_schema import CustomerContact, PatientContact


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# Only accepted or running bookings reserve a provider's time.
OCCUPYING_STATUSES = frozenset({BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS})


class ViewerRole(str, Enum):
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"
    PROVIDER = "PROVIDER"


class ProviderAvailabilityStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    BUSY = "BUSY"
    OFF_DUTY = "OFF_DUTY"
    ON_LEAVE = "ON_LEAVE"


class Booking(BaseModel):
    """
    Booking record as returned by the bookings API.

    Loading is deliberately lenient: a record with a missing or garbled
    time or duration still loads, and the evaluators skip it.
    """
    id: Optional[Union[int, str]] = None
    scheduled_date: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("scheduled_date", "scheduledDate"),
    )
    scheduled_time: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("scheduled_time", "scheduledTime"),
    )
    duration_hours: Optional[Any] = Field(
        default=None,
        validation_alias=AliasChoices("duration_hours", "durationHours", "duration"),
    )
    status: str = ""
    customer: Optional[CustomerContact] = Field(
        default=None,
        validation_alias=AliasChoices("customer", "user"),
    )
    patient: Optional[PatientContact] = None

    @field_validator("scheduled_date", mode="before")
    @classmethod
    def _date_to_str(cls, value: Any) -> Any:
        if isinstance(value, (dt.date, dt.datetime)):
            return value.isoformat()
        return value

    @field_validator("scheduled_time", mode="before")
    @classmethod
    def _time_to_str(cls, value: Any) -> Any:
        if isinstance(value, dt.time):
            return value.strftime("%H:%M:%S")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _status_to_str(cls, value: Any) -> Any:
        if isinstance(value, BookingStatus):
            return value.value
        return value or ""

    def is_occupying(self) -> bool:
        return self.status in {s.value for s in OCCUPYING_STATUSES}


class CandidateSlot(BaseModel):
    """A date, start time and duration being checked for availability."""
    date: dt.date
    start_time: dt.time = Field(
        validation_alias=AliasChoices("start_time", "startTime"),
    )
    duration_hours: float = Field(
        gt=0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("duration_hours", "durationHours", "duration"),
    )

    @model_validator(mode="after")
    def _ends_by_midnight(self) -> "CandidateSlot":
        # Ending exactly at 24:00 is allowed.
        start = self.start_time
        start_seconds = (
            start.hour * 3600 + start.minute * 60 + start.second + start.microsecond / 1e6
        )
        if start_seconds + self.duration_hours * 3600 > 24 * 3600:
            raise ValueError(
                f"slot starting {start.isoformat()} for {self.duration_hours}h "
                "crosses midnight"
            )
        return self


class AvailabilityBadge(BaseModel):
    """Provider availability label for a requested slot."""
    status: str  # "offline" | "busy" | "available"
    text: str
    conflicts: list[Booking] = Field(default_factory=list)


class PrivacyAwareBooking(BaseModel):
    """Booking view with customer contact fields redacted for the viewer."""
    id: Optional[Union[int, str]] = None
    scheduled_date: Optional[str] = None
    scheduled_time: Optional[str] = None
    duration_hours: Optional[Any] = None
    status: str = ""
    customer: Optional[CustomerContact] = None
    patient: Optional[PatientContact] = None
    contact_available: bool
    privacy_message: str
