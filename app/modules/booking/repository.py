"""Booking repository layer."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import AppointmentStatusEnum
from app.modules.booking.models import Appointment


class BookingRepository:
    """DB operations for appointments."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _blocking_stmt(staff_id: UUID, range_start: datetime, range_end: datetime) -> Select[tuple[Appointment]]:
        return select(Appointment).where(
            Appointment.staff_id == staff_id,
            Appointment.status != AppointmentStatusEnum.CANCELLED,
            Appointment.start_at < range_end,
            Appointment.end_at > range_start,
        )

    async def list_blocking_appointments(
        self,
        staff_id: UUID,
        range_start: datetime,
        range_end: datetime,
    ) -> list[Appointment]:
        """Non-cancelled appointments of a staff member overlapping the range."""
        stmt = self._blocking_stmt(staff_id, range_start, range_end).order_by(Appointment.start_at.asc())
        return list((await self.session.scalars(stmt)).all())

    async def has_overlap(self, staff_id: UUID, start_at: datetime, end_at: datetime) -> bool:
        stmt = select(self._blocking_stmt(staff_id, start_at, end_at).exists())
        return bool(await self.session.scalar(stmt))

    async def create_appointment(
        self,
        service_id: UUID,
        staff_id: UUID,
        start_at: datetime,
        end_at: datetime,
        customer_name: str,
        customer_email: str,
        customer_phone: str | None,
        notes: str | None,
    ) -> Appointment:
        appointment = Appointment(
            service_id=service_id,
            staff_id=staff_id,
            start_at=start_at,
            end_at=end_at,
            status=AppointmentStatusEnum.PENDING,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            notes=notes,
        )
        self.session.add(appointment)
        await self.session.flush()
        return appointment

    async def list_appointments(
        self,
        *,
        staff_id: UUID | None = None,
        status: AppointmentStatusEnum | None = None,
        starts_from: datetime | None = None,
    ) -> list[Appointment]:
        stmt = select(Appointment)
        if staff_id is not None:
            stmt = stmt.where(Appointment.staff_id == staff_id)
        if status is not None:
            stmt = stmt.where(Appointment.status == status)
        if starts_from is not None:
            stmt = stmt.where(Appointment.start_at >= starts_from)
        stmt = stmt.order_by(Appointment.start_at.asc())
        return list((await self.session.scalars(stmt)).all())

    async def get_appointment_by_id(self, appointment_id: UUID) -> Appointment | None:
        stmt = select(Appointment).where(Appointment.id == appointment_id)
        return await self.session.scalar(stmt)

    async def save(self, appointment: Appointment) -> Appointment:
        await self.session.flush()
        return appointment
