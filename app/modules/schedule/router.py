"""Business schedule API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.modules.schedule.schemas import (
    BusinessHoursRead,
    BusinessHoursReplace,
    OffDayCreate,
    OffDayRead,
    ScheduleRead,
)
from app.modules.schedule.service import ScheduleService, get_schedule_service

router = APIRouter(tags=["schedule"])


@router.get("/schedule", response_model=ScheduleRead)
async def get_schedule(service: ScheduleService = Depends(get_schedule_service)) -> ScheduleRead:
    """Weekly opening hours and upcoming off-days."""
    hours, off_days = await service.get_schedule()
    return ScheduleRead(
        hours=[BusinessHoursRead.model_validate(item) for item in hours],
        off_days=[OffDayRead.model_validate(item) for item in off_days],
    )


@router.put("/admin/schedule/hours", response_model=list[BusinessHoursRead])
async def replace_hours(
    payload: BusinessHoursReplace,
    service: ScheduleService = Depends(get_schedule_service),
) -> list[BusinessHoursRead]:
    """Replace weekly opening hours."""
    hours = await service.replace_hours(payload)
    return [BusinessHoursRead.model_validate(item) for item in hours]


@router.post(
    "/admin/schedule/off-days",
    response_model=OffDayRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_off_day(
    payload: OffDayCreate,
    service: ScheduleService = Depends(get_schedule_service),
) -> OffDayRead:
    """Register an off-day."""
    off_day = await service.add_off_day(payload)
    return OffDayRead.model_validate(off_day)


@router.delete("/admin/schedule/off-days/{off_day_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_off_day(
    off_day_id: UUID,
    service: ScheduleService = Depends(get_schedule_service),
) -> None:
    """Delete an off-day."""
    await service.delete_off_day(off_day_id)
