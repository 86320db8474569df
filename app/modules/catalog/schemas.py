"""Service catalog schemas."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServiceRead(BaseModel):
    """Bookable service response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    duration_min: int
    is_active: bool


class ServiceStaffRead(BaseModel):
    """Staff member offering a service, with their price."""

    staff_id: UUID
    display_name: str
    price_cents: int
    currency: str


class PriceUpsert(BaseModel):
    """Set the price a staff member charges for a service."""

    service_id: UUID
    staff_id: UUID
    price_cents: int = Field(ge=0)
    currency: str = Field(default="EUR", min_length=3, max_length=3)


class PriceRead(BaseModel):
    """Stored staff price."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    service_id: UUID
    staff_id: UUID
    price_cents: int
    currency: str


class ServiceCreate(BaseModel):
    """Admin payload for a new service."""

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    duration_min: int = Field(gt=0, le=24 * 60)
    is_active: bool = True


class ServiceUpdate(BaseModel):
    """Partial service update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    duration_min: int | None = Field(default=None, gt=0, le=24 * 60)
    is_active: bool | None = None


class StaffUpsert(BaseModel):
    """Create a staff member, or rename the one already holding this email."""

    display_name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class StaffUpdate(BaseModel):
    """Partial staff update."""

    display_name: str | None = Field(default=None, min_length=1, max_length=255)
    is_active: bool | None = None


class StaffRead(BaseModel):
    """Staff member response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    display_name: str
    email: str | None
    is_active: bool
