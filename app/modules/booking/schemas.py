"""Booking schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.enums import AppointmentStatusEnum


class CustomerInfo(BaseModel):
    """Contact details of the person booking."""

    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    phone: str | None = Field(default=None, max_length=64)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        """Compare emails case-insensitively."""
        return value.strip().lower()


class AppointmentDraftCreate(BaseModel):
    """Create a pending appointment at an offered slot."""

    service_id: UUID
    staff_id: UUID
    start_at: datetime
    customer: CustomerInfo
    notes: str | None = Field(default=None, max_length=2000)


class AppointmentDraftRead(BaseModel):
    """Created appointment with pricing context for checkout."""

    appointment_id: UUID
    status: AppointmentStatusEnum
    start_at: datetime
    end_at: datetime
    duration_min: int
    price_cents: int
    currency: str


class AppointmentStatusUpdate(BaseModel):
    """Admin status change request."""

    status: AppointmentStatusEnum


class AppointmentRead(BaseModel):
    """Appointment response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    service_id: UUID
    staff_id: UUID
    start_at: datetime
    end_at: datetime
    status: AppointmentStatusEnum
    customer_name: str
    customer_email: str
    customer_phone: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime
