"""Availability orchestration: load inputs once, run the pure engine."""

from __future__ import annotations

import logging
from datetime import date, datetime
from uuid import UUID

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db_session
from app.core.enums import AvailabilityQueryKindEnum
from app.core.metrics import record_availability_query
from app.modules.availability.engine import (
    AvailabilityPolicy,
    BusinessHoursRule,
    BusySpan,
    ScheduleSnapshot,
    booking_horizon,
    day_slots,
    days_with_availability,
    local_days_span,
    month_bounds,
)
from app.modules.booking.repository import BookingRepository
from app.modules.catalog.models import Service, ServiceStaffPrice
from app.modules.catalog.repository import CatalogRepository
from app.modules.schedule.repository import ScheduleRepository
from app.shared.exceptions import NotFoundException, UpstreamUnavailableException
from app.shared.utils import utc_now

settings = get_settings()
logger = logging.getLogger(__name__)


def build_policy() -> AvailabilityPolicy:
    """Slot grid and horizon shared by the day and month queries."""
    return AvailabilityPolicy(
        step_minutes=settings.slot_step_minutes,
        horizon_days=settings.booking_horizon_days,
        min_lead_minutes=settings.booking_min_lead_minutes,
    )


class AvailabilityService:
    """Bookable slots and days for a (service, staff) pair."""

    def __init__(
        self,
        catalog_repository: CatalogRepository,
        schedule_repository: ScheduleRepository,
        booking_repository: BookingRepository,
    ) -> None:
        self.catalog_repository = catalog_repository
        self.schedule_repository = schedule_repository
        self.booking_repository = booking_repository

    async def get_bookable_service(
        self,
        service_id: UUID,
        staff_id: UUID,
    ) -> tuple[Service, ServiceStaffPrice]:
        """Return the active service and the staff price that makes it bookable.

        Inactive staff are treated like staff without a price.
        """
        try:
            service = await self.catalog_repository.get_service_by_id(service_id)
            staff = price = None
            if service is not None and service.is_active:
                staff = await self.catalog_repository.get_staff_by_id(staff_id)
            if staff is not None and staff.is_active:
                price = await self.catalog_repository.get_price(service_id, staff_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load service %s for availability", service_id)
            raise UpstreamUnavailableException("Could not load availability") from exc

        if service is None or not service.is_active:
            raise NotFoundException("Service not found")
        if price is None:
            raise NotFoundException("Staff member does not offer this service")
        return service, price

    @staticmethod
    def service_duration(service: Service) -> int:
        """Service duration in minutes, falling back to the configured default."""
        if service.duration_min and service.duration_min > 0:
            return service.duration_min
        return settings.default_service_duration_minutes

    async def _load_inputs(
        self,
        staff_id: UUID,
        first_day: date,
        last_day: date,
    ) -> tuple[ScheduleSnapshot, list[BusySpan]]:
        span = local_days_span(first_day, last_day, settings.tz)
        try:
            hours = await self.schedule_repository.list_hours()
            off_days = await self.schedule_repository.list_off_days(first_day, last_day)
            appointments = await self.booking_repository.list_blocking_appointments(
                staff_id,
                span.start,
                span.end,
            )
        except SQLAlchemyError as exc:
            logger.exception("Failed to load availability inputs for staff %s", staff_id)
            raise UpstreamUnavailableException("Could not load availability") from exc

        snapshot = ScheduleSnapshot.build(
            settings.tz,
            (
                BusinessHoursRule(
                    day_of_week=row.day_of_week,
                    is_open=row.is_open,
                    open_time=row.open_time,
                    close_time=row.close_time,
                )
                for row in hours
            ),
            (row.date for row in off_days),
        )
        busy = [
            BusySpan(start_at=item.start_at, end_at=item.end_at, status=item.status)
            for item in appointments
        ]
        return snapshot, busy

    async def get_day_slots(self, service_id: UUID, staff_id: UUID, day: date) -> list[datetime]:
        """Ordered bookable start instants for one local day."""
        service, _ = await self.get_bookable_service(service_id, staff_id)
        policy = build_policy()
        now = utc_now()

        first_day, last_day = booking_horizon(now, settings.tz, policy.horizon_days)
        if not first_day <= day <= last_day:
            record_availability_query(AvailabilityQueryKindEnum.DAY, 0)
            return []

        snapshot, busy = await self._load_inputs(staff_id, day, day)
        slots = day_slots(day, staff_id, snapshot, busy, self.service_duration(service), policy, now)
        record_availability_query(AvailabilityQueryKindEnum.DAY, len(slots))
        return slots

    async def get_available_days(
        self,
        service_id: UUID,
        staff_id: UUID,
        year: int,
        month: int,
    ) -> list[date]:
        """Days of a month, within the booking horizon, with at least one slot."""
        service, _ = await self.get_bookable_service(service_id, staff_id)
        policy = build_policy()
        now = utc_now()

        bounds = month_bounds(year, month)
        first_day, last_day = booking_horizon(now, settings.tz, policy.horizon_days)
        if bounds is None or bounds[1] < first_day or bounds[0] > last_day:
            record_availability_query(AvailabilityQueryKindEnum.MONTH, 0)
            return []

        snapshot, busy = await self._load_inputs(
            staff_id,
            max(bounds[0], first_day),
            min(bounds[1], last_day),
        )
        days = days_with_availability(
            year,
            month,
            staff_id,
            snapshot,
            busy,
            self.service_duration(service),
            policy,
            now,
        )
        record_availability_query(AvailabilityQueryKindEnum.MONTH, len(days))
        return days


async def get_availability_service(
    session: AsyncSession = Depends(get_db_session),
) -> AvailabilityService:
    """Dependency provider for availability service."""
    return AvailabilityService(
        catalog_repository=CatalogRepository(session),
        schedule_repository=ScheduleRepository(session),
        booking_repository=BookingRepository(session),
    )
