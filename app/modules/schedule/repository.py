"""Business schedule repository layer."""

from __future__ import annotations

from datetime import date, time
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.schedule.models import BusinessHours, BusinessOffDay


class ScheduleRepository:
    """DB access for business hours and off-days."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def count_hours(self) -> int:
        return int((await self.session.scalar(select(func.count()).select_from(BusinessHours))) or 0)

    async def list_hours(self) -> list[BusinessHours]:
        stmt = select(BusinessHours).order_by(BusinessHours.day_of_week.asc())
        return list((await self.session.scalars(stmt)).all())

    async def get_hours_by_day(self, day_of_week: int) -> BusinessHours | None:
        stmt = select(BusinessHours).where(BusinessHours.day_of_week == day_of_week)
        return await self.session.scalar(stmt)

    async def upsert_hours(
        self,
        day_of_week: int,
        is_open: bool,
        open_time: time,
        close_time: time,
    ) -> BusinessHours:
        row = await self.get_hours_by_day(day_of_week)
        if row is None:
            row = BusinessHours(day_of_week=day_of_week)
            self.session.add(row)
        row.is_open = is_open
        row.open_time = open_time
        row.close_time = close_time
        await self.session.flush()
        return row

    async def list_off_days(self, from_date: date, to_date: date | None = None) -> list[BusinessOffDay]:
        stmt = select(BusinessOffDay).where(BusinessOffDay.date >= from_date)
        if to_date is not None:
            stmt = stmt.where(BusinessOffDay.date <= to_date)
        stmt = stmt.order_by(BusinessOffDay.date.asc())
        return list((await self.session.scalars(stmt)).all())

    async def get_off_day_by_id(self, off_day_id: UUID) -> BusinessOffDay | None:
        stmt = select(BusinessOffDay).where(BusinessOffDay.id == off_day_id)
        return await self.session.scalar(stmt)

    async def get_off_day_by_date(self, day: date) -> BusinessOffDay | None:
        stmt = select(BusinessOffDay).where(BusinessOffDay.date == day)
        return await self.session.scalar(stmt)

    async def create_off_day(self, day: date, reason: str | None) -> BusinessOffDay:
        off_day = BusinessOffDay(date=day, reason=reason)
        self.session.add(off_day)
        await self.session.flush()
        return off_day

    async def delete_off_day(self, off_day: BusinessOffDay) -> None:
        await self.session.delete(off_day)
        await self.session.flush()
