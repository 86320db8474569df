"""Service catalog repository layer."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.modules.catalog.models import Service, ServiceStaffPrice, StaffMember


class CatalogRepository:
    """DB operations for services, staff and staff pricing."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_service_by_id(self, service_id: UUID) -> Service | None:
        stmt = select(Service).where(Service.id == service_id)
        return await self.session.scalar(stmt)

    async def list_active_services(self) -> list[Service]:
        stmt = select(Service).where(Service.is_active.is_(True)).order_by(Service.name.asc())
        return list((await self.session.scalars(stmt)).all())

    async def list_all_services(self) -> list[Service]:
        stmt = select(Service).order_by(Service.created_at.desc())
        return list((await self.session.scalars(stmt)).all())

    async def create_service(
        self,
        name: str,
        description: str | None,
        duration_min: int,
        is_active: bool,
    ) -> Service:
        service = Service(
            name=name,
            description=description,
            duration_min=duration_min,
            is_active=is_active,
        )
        self.session.add(service)
        await self.session.flush()
        return service

    async def get_staff_by_id(self, staff_id: UUID) -> StaffMember | None:
        stmt = select(StaffMember).where(StaffMember.id == staff_id)
        return await self.session.scalar(stmt)

    async def get_staff_by_email(self, email: str) -> StaffMember | None:
        stmt = select(StaffMember).where(StaffMember.email == email)
        return await self.session.scalar(stmt)

    async def list_staff(self) -> list[StaffMember]:
        stmt = select(StaffMember).order_by(StaffMember.display_name.asc())
        return list((await self.session.scalars(stmt)).all())

    async def create_staff(self, display_name: str, email: str) -> StaffMember:
        staff = StaffMember(display_name=display_name, email=email, is_active=True)
        self.session.add(staff)
        await self.session.flush()
        return staff

    async def save(self, entity: Service | StaffMember) -> Service | StaffMember:
        await self.session.flush()
        return entity

    async def get_price(self, service_id: UUID, staff_id: UUID) -> ServiceStaffPrice | None:
        stmt = select(ServiceStaffPrice).where(
            ServiceStaffPrice.service_id == service_id,
            ServiceStaffPrice.staff_id == staff_id,
        )
        return await self.session.scalar(stmt)

    async def list_prices_for_service(self, service_id: UUID) -> list[ServiceStaffPrice]:
        stmt = (
            select(ServiceStaffPrice)
            .join(StaffMember, StaffMember.id == ServiceStaffPrice.staff_id)
            .options(selectinload(ServiceStaffPrice.staff))
            .where(
                ServiceStaffPrice.service_id == service_id,
                StaffMember.is_active.is_(True),
            )
            .order_by(StaffMember.display_name.asc())
        )
        return list((await self.session.scalars(stmt)).all())

    async def upsert_price(
        self,
        service_id: UUID,
        staff_id: UUID,
        price_cents: int,
        currency: str,
    ) -> ServiceStaffPrice:
        price = await self.get_price(service_id, staff_id)
        if price is None:
            price = ServiceStaffPrice(service_id=service_id, staff_id=staff_id)
            self.session.add(price)
        price.price_cents = price_cents
        price.currency = currency
        await self.session.flush()
        return price

    async def delete_price(self, price: ServiceStaffPrice) -> None:
        await self.session.delete(price)
        await self.session.flush()
