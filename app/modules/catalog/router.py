"""Service catalog API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from app.modules.catalog.schemas import (
    PriceRead,
    PriceUpsert,
    ServiceCreate,
    ServiceRead,
    ServiceStaffRead,
    ServiceUpdate,
    StaffRead,
    StaffUpdate,
    StaffUpsert,
)
from app.modules.catalog.service import CatalogService, get_catalog_service

router = APIRouter(tags=["catalog"])


@router.get("/services", response_model=list[ServiceRead])
async def list_services(service: CatalogService = Depends(get_catalog_service)) -> list[ServiceRead]:
    """List bookable services."""
    return [ServiceRead.model_validate(item) for item in await service.list_services()]


@router.get("/services/{service_id}/staff", response_model=list[ServiceStaffRead])
async def list_service_staff(
    service_id: UUID,
    service: CatalogService = Depends(get_catalog_service),
) -> list[ServiceStaffRead]:
    """List staff members offering a service."""
    prices = await service.list_service_staff(service_id)
    return [
        ServiceStaffRead(
            staff_id=price.staff_id,
            display_name=price.staff.display_name,
            price_cents=price.price_cents,
            currency=price.currency,
        )
        for price in prices
    ]


@router.put("/admin/prices", response_model=PriceRead)
async def set_price(
    payload: PriceUpsert,
    service: CatalogService = Depends(get_catalog_service),
) -> PriceRead:
    """Create or update a staff price."""
    price = await service.set_price(payload)
    return PriceRead.model_validate(price)


@router.delete("/admin/prices", status_code=status.HTTP_204_NO_CONTENT)
async def remove_price(
    service_id: UUID = Query(),
    staff_id: UUID = Query(),
    service: CatalogService = Depends(get_catalog_service),
) -> None:
    """Remove a staff price."""
    await service.remove_price(service_id, staff_id)


@router.get("/admin/services", response_model=list[ServiceRead])
async def list_all_services(service: CatalogService = Depends(get_catalog_service)) -> list[ServiceRead]:
    """List all services, including inactive ones."""
    return [ServiceRead.model_validate(item) for item in await service.list_all_services()]


@router.post("/admin/services", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
async def create_service(
    payload: ServiceCreate,
    service: CatalogService = Depends(get_catalog_service),
) -> ServiceRead:
    """Create a service."""
    return ServiceRead.model_validate(await service.create_service(payload))


@router.patch("/admin/services/{service_id}", response_model=ServiceRead)
async def update_service(
    service_id: UUID,
    payload: ServiceUpdate,
    service: CatalogService = Depends(get_catalog_service),
) -> ServiceRead:
    """Update service fields, including its duration."""
    return ServiceRead.model_validate(await service.update_service(service_id, payload))


@router.get("/admin/staff", response_model=list[StaffRead])
async def list_staff(service: CatalogService = Depends(get_catalog_service)) -> list[StaffRead]:
    """List staff members."""
    return [StaffRead.model_validate(item) for item in await service.list_staff()]


@router.post("/admin/staff", response_model=StaffRead)
async def upsert_staff(
    payload: StaffUpsert,
    response: Response,
    service: CatalogService = Depends(get_catalog_service),
) -> StaffRead:
    """Create a staff member, or rename the one with the same email."""
    staff, created = await service.upsert_staff(payload)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return StaffRead.model_validate(staff)


@router.patch("/admin/staff/{staff_id}", response_model=StaffRead)
async def update_staff(
    staff_id: UUID,
    payload: StaffUpdate,
    service: CatalogService = Depends(get_catalog_service),
) -> StaffRead:
    """Rename or deactivate a staff member."""
    return StaffRead.model_validate(await service.update_staff(staff_id, payload))
