"""Service catalog business logic layer."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.modules.catalog.models import Service, ServiceStaffPrice, StaffMember
from app.modules.catalog.repository import CatalogRepository
from app.modules.catalog.schemas import (
    PriceUpsert,
    ServiceCreate,
    ServiceUpdate,
    StaffUpdate,
    StaffUpsert,
)
from app.shared.exceptions import NotFoundException

logger = logging.getLogger(__name__)


class CatalogService:
    """Services, staff and staff pricing."""

    def __init__(self, repository: CatalogRepository) -> None:
        self.repository = repository

    async def _get_active_service(self, service_id: UUID) -> Service:
        service = await self.repository.get_service_by_id(service_id)
        if service is None or not service.is_active:
            raise NotFoundException("Service not found")
        return service

    async def list_services(self) -> list[Service]:
        """List active services."""
        return await self.repository.list_active_services()

    async def list_all_services(self) -> list[Service]:
        """List every service, newest first, for administration."""
        return await self.repository.list_all_services()

    async def create_service(self, payload: ServiceCreate) -> Service:
        service = await self.repository.create_service(
            name=payload.name.strip(),
            description=payload.description,
            duration_min=payload.duration_min,
            is_active=payload.is_active,
        )
        logger.info("Service %s created (%s min)", service.id, service.duration_min)
        return service

    async def update_service(self, service_id: UUID, payload: ServiceUpdate) -> Service:
        """Apply the fields present in the payload.

        A new duration only affects future availability queries; existing
        appointments keep their stored end time.
        """
        service = await self.repository.get_service_by_id(service_id)
        if service is None:
            raise NotFoundException("Service not found")

        changes = payload.model_dump(exclude_unset=True)
        for field_name, value in changes.items():
            if value is None and field_name != "description":
                continue
            setattr(service, field_name, value)
        await self.repository.save(service)
        logger.info("Service %s updated: %s", service.id, sorted(changes))
        return service

    async def list_staff(self) -> list[StaffMember]:
        return await self.repository.list_staff()

    async def upsert_staff(self, payload: StaffUpsert) -> tuple[StaffMember, bool]:
        """Create a staff member or rename the one with this email.

        Returns the member and whether it was created.
        """
        staff = await self.repository.get_staff_by_email(payload.email)
        if staff is None:
            staff = await self.repository.create_staff(payload.display_name.strip(), payload.email)
            logger.info("Staff member %s created", staff.id)
            return staff, True

        staff.display_name = payload.display_name.strip()
        await self.repository.save(staff)
        return staff, False

    async def update_staff(self, staff_id: UUID, payload: StaffUpdate) -> StaffMember:
        """Rename or (de)activate a staff member.

        Inactive staff keep their prices but are no longer bookable.
        """
        staff = await self.repository.get_staff_by_id(staff_id)
        if staff is None:
            raise NotFoundException("Staff member not found")

        if payload.display_name is not None:
            staff.display_name = payload.display_name.strip()
        if payload.is_active is not None:
            staff.is_active = payload.is_active
        await self.repository.save(staff)
        logger.info("Staff member %s updated (active=%s)", staff.id, staff.is_active)
        return staff

    async def list_service_staff(self, service_id: UUID) -> list[ServiceStaffPrice]:
        """List active staff members priced for a service."""
        await self._get_active_service(service_id)
        return await self.repository.list_prices_for_service(service_id)

    async def set_price(self, payload: PriceUpsert) -> ServiceStaffPrice:
        """Create or update a staff price for a service."""
        if await self.repository.get_service_by_id(payload.service_id) is None:
            raise NotFoundException("Service not found")
        if await self.repository.get_staff_by_id(payload.staff_id) is None:
            raise NotFoundException("Staff member not found")

        price = await self.repository.upsert_price(
            payload.service_id,
            payload.staff_id,
            payload.price_cents,
            payload.currency.upper(),
        )
        logger.info("Price set for service %s staff %s", payload.service_id, payload.staff_id)
        return price

    async def remove_price(self, service_id: UUID, staff_id: UUID) -> None:
        """Stop offering a service with a staff member."""
        price = await self.repository.get_price(service_id, staff_id)
        if price is None:
            raise NotFoundException("Price not found")
        await self.repository.delete_price(price)
        logger.info("Price removed for service %s staff %s", service_id, staff_id)


async def get_catalog_service(session: AsyncSession = Depends(get_db_session)) -> CatalogService:
    """Dependency provider for catalog service."""
    return CatalogService(CatalogRepository(session))
