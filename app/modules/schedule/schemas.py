"""Business schedule schemas."""

from __future__ import annotations

from datetime import date as calendar_date
from datetime import datetime, time
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BusinessHoursItem(BaseModel):
    """One weekday of opening hours (0 = Sunday)."""

    day_of_week: int = Field(ge=0, le=6)
    is_open: bool
    open_time: time
    close_time: time


class BusinessHoursReplace(BaseModel):
    """Replace the full weekly schedule."""

    hours: list[BusinessHoursItem]


class BusinessHoursRead(BusinessHoursItem):
    """Stored weekday hours."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    updated_at: datetime


class OffDayCreate(BaseModel):
    """Register a full-day closure."""

    date: calendar_date
    reason: str | None = Field(default=None, max_length=255)

    @field_validator("reason")
    @classmethod
    def strip_reason(cls, value: str | None) -> str | None:
        """Store blank reasons as null."""
        if value is None:
            return None
        return value.strip() or None


class OffDayRead(BaseModel):
    """Off-day response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    date: calendar_date
    reason: str | None
    created_at: datetime


class ScheduleRead(BaseModel):
    """Weekly hours plus upcoming off-days."""

    hours: list[BusinessHoursRead]
    off_days: list[OffDayRead]
