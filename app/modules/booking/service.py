"""Booking business logic layer."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from uuid import UUID

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db_session
from app.core.enums import AppointmentStatusEnum
from app.modules.availability.service import AvailabilityService
from app.modules.booking.models import Appointment
from app.modules.booking.repository import BookingRepository
from app.modules.booking.schemas import AppointmentDraftCreate, AppointmentStatusUpdate
from app.modules.catalog.models import Service, ServiceStaffPrice
from app.modules.catalog.repository import CatalogRepository
from app.modules.schedule.repository import ScheduleRepository
from app.shared.exceptions import BusinessRuleException, ConflictException, NotFoundException
from app.shared.utils import ensure_utc, local_date, utc_now

settings = get_settings()
logger = logging.getLogger(__name__)


class BookingService:
    """Appointment drafts and status changes.

    Availability answers are snapshots; the overlap check here, backed by the
    database exclusion constraint, is what actually prevents double booking.
    """

    def __init__(
        self,
        booking_repository: BookingRepository,
        availability_service: AvailabilityService,
    ) -> None:
        self.booking_repository = booking_repository
        self.availability_service = availability_service

    @staticmethod
    def _normalize_start(start_at: datetime) -> datetime:
        """Naive timestamps are business-local wall-clock times."""
        if start_at.tzinfo is None:
            start_at = start_at.replace(tzinfo=settings.tz)
        return ensure_utc(start_at)

    async def create_draft(
        self,
        payload: AppointmentDraftCreate,
    ) -> tuple[Appointment, Service, ServiceStaffPrice]:
        """Create a PENDING appointment after re-validating the slot."""
        service, price = await self.availability_service.get_bookable_service(
            payload.service_id,
            payload.staff_id,
        )
        start_at = self._normalize_start(payload.start_at)
        duration_min = self.availability_service.service_duration(service)
        end_at = start_at + timedelta(minutes=duration_min)

        offered = await self.availability_service.get_day_slots(
            payload.service_id,
            payload.staff_id,
            local_date(start_at, settings.tz),
        )
        if start_at not in offered:
            raise BusinessRuleException("Requested time is not an available slot")

        if await self.booking_repository.has_overlap(payload.staff_id, start_at, end_at):
            raise ConflictException("That time is no longer available")

        try:
            appointment = await self.booking_repository.create_appointment(
                service_id=payload.service_id,
                staff_id=payload.staff_id,
                start_at=start_at,
                end_at=end_at,
                customer_name=payload.customer.name.strip(),
                customer_email=payload.customer.email,
                customer_phone=payload.customer.phone,
                notes=payload.notes,
            )
        except IntegrityError as exc:
            raise ConflictException("That time is no longer available") from exc

        logger.info(
            "Appointment %s drafted for staff %s at %s",
            appointment.id,
            payload.staff_id,
            start_at.isoformat(),
        )
        return appointment, service, price

    async def list_appointments(
        self,
        *,
        staff_id: UUID | None = None,
        status: AppointmentStatusEnum | None = None,
        upcoming: bool = False,
    ) -> list[Appointment]:
        """Appointments ordered by start; ``upcoming`` keeps those starting from now."""
        return await self.booking_repository.list_appointments(
            staff_id=staff_id,
            status=status,
            starts_from=utc_now() if upcoming else None,
        )

    async def update_status(
        self,
        appointment_id: UUID,
        payload: AppointmentStatusUpdate,
    ) -> Appointment:
        """Change appointment status; cancelling frees its time.

        Reopening a cancelled appointment takes its time back, so it is only
        allowed while nothing else occupies it.
        """
        appointment = await self.booking_repository.get_appointment_by_id(appointment_id)
        if appointment is None:
            raise NotFoundException("Appointment not found")
        if appointment.status == payload.status:
            return appointment
        if appointment.status == AppointmentStatusEnum.CANCELLED and await self.booking_repository.has_overlap(
            appointment.staff_id,
            appointment.start_at,
            appointment.end_at,
        ):
            raise ConflictException("That time is no longer available")

        previous = appointment.status
        appointment.status = payload.status
        try:
            await self.booking_repository.save(appointment)
        except IntegrityError as exc:
            raise ConflictException("That time is no longer available") from exc
        logger.info("Appointment %s status %s -> %s", appointment.id, previous, payload.status)
        return appointment


async def get_booking_service(session: AsyncSession = Depends(get_db_session)) -> BookingService:
    """Dependency provider for booking service."""
    booking_repository = BookingRepository(session)
    return BookingService(
        booking_repository=booking_repository,
        availability_service=AvailabilityService(
            catalog_repository=CatalogRepository(session),
            schedule_repository=ScheduleRepository(session),
            booking_repository=booking_repository,
        ),
    )
