"""Customer contact models and privacy decision results."""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class CustomerContact(BaseModel):
    """Customer account details attached to a booking."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class PatientContact(BaseModel):
    """Patient record attached to a booking, with its emergency contact."""
    name: Optional[str] = None
    emergency_contact_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("emergency_contact_name", "emergencyContactName"),
    )
    emergency_contact_relation: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "emergency_contact_relation", "emergencyContactRelation"
        ),
    )
    emergency_contact_phone: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("emergency_contact_phone", "emergencyContactPhone"),
    )


class VisibilityResult(BaseModel):
    """Outcome of a contact-visibility check."""
    visible: bool
    reason: str
    within_window: bool = False
