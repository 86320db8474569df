"""Booking API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.core.enums import AppointmentStatusEnum
from app.modules.booking.schemas import (
    AppointmentDraftCreate,
    AppointmentDraftRead,
    AppointmentRead,
    AppointmentStatusUpdate,
)
from app.modules.booking.service import BookingService, get_booking_service

router = APIRouter(tags=["booking"])


@router.post(
    "/bookings/draft",
    response_model=AppointmentDraftRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_draft(
    payload: AppointmentDraftCreate,
    service: BookingService = Depends(get_booking_service),
) -> AppointmentDraftRead:
    """Create a pending appointment at an offered slot."""
    appointment, _, price = await service.create_draft(payload)
    return AppointmentDraftRead(
        appointment_id=appointment.id,
        status=appointment.status,
        start_at=appointment.start_at,
        end_at=appointment.end_at,
        duration_min=int((appointment.end_at - appointment.start_at).total_seconds() // 60),
        price_cents=price.price_cents,
        currency=price.currency,
    )


@router.patch("/admin/appointments/{appointment_id}/status", response_model=AppointmentRead)
async def update_status(
    appointment_id: UUID,
    payload: AppointmentStatusUpdate,
    service: BookingService = Depends(get_booking_service),
) -> AppointmentRead:
    """Change appointment status."""
    appointment = await service.update_status(appointment_id, payload)
    return AppointmentRead.model_validate(appointment)


@router.get("/admin/appointments", response_model=list[AppointmentRead])
async def list_appointments(
    staff_id: UUID | None = Query(default=None),
    status_filter: AppointmentStatusEnum | None = Query(default=None, alias="status"),
    upcoming: bool = Query(default=False),
    service: BookingService = Depends(get_booking_service),
) -> list[AppointmentRead]:
    """List appointments by start time, optionally by staff, status or upcoming only."""
    appointments = await service.list_appointments(
        staff_id=staff_id,
        status=status_filter,
        upcoming=upcoming,
    )
    return [AppointmentRead.model_validate(item) for item in appointments]
