"""Availability API router."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.modules.availability.schemas import DaySlotsRead, MonthAvailabilityRead
from app.modules.availability.service import AvailabilityService, get_availability_service

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("", response_model=DaySlotsRead)
async def get_day_slots(
    service_id: UUID = Query(),
    staff_id: UUID = Query(),
    day: date = Query(alias="date"),
    service: AvailabilityService = Depends(get_availability_service),
) -> DaySlotsRead:
    """Bookable slots for a service and staff member on one day."""
    slots = await service.get_day_slots(service_id, staff_id, day)
    return DaySlotsRead(date=day, slots=slots)


@router.get("/days", response_model=MonthAvailabilityRead)
async def get_available_days(
    service_id: UUID = Query(),
    staff_id: UUID = Query(),
    year: int = Query(ge=1, le=9999),
    month: int = Query(ge=1, le=12),
    service: AvailabilityService = Depends(get_availability_service),
) -> MonthAvailabilityRead:
    """Days of a month with at least one bookable slot."""
    days = await service.get_available_days(service_id, staff_id, year, month)
    return MonthAvailabilityRead(year=year, month=month, available_dates=days)
