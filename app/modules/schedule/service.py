"""Business schedule configuration logic."""

from __future__ import annotations

import logging
from datetime import time
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db_session
from app.modules.schedule.models import BusinessHours, BusinessOffDay
from app.modules.schedule.repository import ScheduleRepository
from app.modules.schedule.schemas import BusinessHoursReplace, OffDayCreate
from app.shared.exceptions import BusinessRuleException, ConflictException, NotFoundException
from app.shared.utils import local_date, utc_now

settings = get_settings()
logger = logging.getLogger(__name__)

# (day_of_week, is_open, open_time, close_time); Sunday and Saturday closed.
DEFAULT_BUSINESS_HOURS: tuple[tuple[int, bool, time, time], ...] = tuple(
    (day, day not in (0, 6), time(9, 0), time(18, 0)) for day in range(7)
)


class ScheduleService:
    """Weekly hours and off-day management."""

    def __init__(self, repository: ScheduleRepository) -> None:
        self.repository = repository

    async def ensure_default_hours(self) -> int:
        """Seed default weekly hours when none exist; return rows created."""
        if await self.repository.count_hours() > 0:
            return 0
        for day_of_week, is_open, open_time, close_time in DEFAULT_BUSINESS_HOURS:
            await self.repository.upsert_hours(day_of_week, is_open, open_time, close_time)
        logger.info("Seeded default business hours")
        return len(DEFAULT_BUSINESS_HOURS)

    async def get_schedule(self) -> tuple[list[BusinessHours], list[BusinessOffDay]]:
        """Return weekly hours and off-days from today on."""
        await self.ensure_default_hours()
        hours = await self.repository.list_hours()
        off_days = await self.repository.list_off_days(local_date(utc_now(), settings.tz))
        return hours, off_days

    async def replace_hours(self, payload: BusinessHoursReplace) -> list[BusinessHours]:
        """Replace all seven weekday rows in place."""
        if len(payload.hours) != 7:
            raise BusinessRuleException("hours must contain exactly 7 entries")
        if {item.day_of_week for item in payload.hours} != set(range(7)):
            raise BusinessRuleException("hours must contain each weekday exactly once")
        for item in payload.hours:
            if item.is_open and item.open_time >= item.close_time:
                raise BusinessRuleException(
                    f"open_time must be before close_time for day {item.day_of_week}",
                )

        for item in payload.hours:
            await self.repository.upsert_hours(
                item.day_of_week,
                item.is_open,
                item.open_time,
                item.close_time,
            )
        logger.info("Business hours replaced")
        return await self.repository.list_hours()

    async def add_off_day(self, payload: OffDayCreate) -> BusinessOffDay:
        """Register a closure for a present or future date."""
        if payload.date < local_date(utc_now(), settings.tz):
            raise BusinessRuleException("Off-day date must not be in the past")
        if await self.repository.get_off_day_by_date(payload.date) is not None:
            raise ConflictException("Off-day already exists for this date")

        off_day = await self.repository.create_off_day(payload.date, payload.reason)
        logger.info("Off-day registered for %s", payload.date.isoformat())
        return off_day

    async def delete_off_day(self, off_day_id: UUID) -> None:
        """Remove a registered closure."""
        off_day = await self.repository.get_off_day_by_id(off_day_id)
        if off_day is None:
            raise NotFoundException("Off-day not found")
        await self.repository.delete_off_day(off_day)
        logger.info("Off-day removed for %s", off_day.date.isoformat())


async def get_schedule_service(session: AsyncSession = Depends(get_db_session)) -> ScheduleService:
    """Dependency provider for schedule service."""
    return ScheduleService(ScheduleRepository(session))
