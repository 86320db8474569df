from __future__ import annotations

from datetime import date, datetime, time, timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import SQLAlchemyError

import app.modules.availability.service as availability_service_module
from app.core.enums import AppointmentStatusEnum
from app.modules.availability.service import AvailabilityService
from app.shared.exceptions import NotFoundException, UpstreamUnavailableException
from tests.fakes import (
    FakeAppointment,
    FakeBookingRepository,
    FakeCatalogRepository,
    FakeOffDay,
    FakePrice,
    FakeScheduleRepository,
    FakeService,
    FakeStaff,
    weekday_hours,
)

TZ = availability_service_module.settings.tz
FIXED_NOW = datetime(2026, 11, 1, 12, 0, tzinfo=TZ)
MONDAY = date(2026, 11, 2)


def local(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime.combine(day, time(hour, minute), tzinfo=TZ)


def build_service(
    *,
    service: FakeService | None = None,
    with_price: bool = True,
    appointments: list[FakeAppointment] | None = None,
    off_days: list[FakeOffDay] | None = None,
    schedule_error: Exception | None = None,
) -> tuple[AvailabilityService, FakeService, FakeStaff, FakeScheduleRepository]:
    service = service or FakeService(id=uuid4(), duration_min=60)
    staff = FakeStaff(id=uuid4())
    prices = [FakePrice(id=uuid4(), service_id=service.id, staff_id=staff.id)] if with_price else []
    schedule_repository = FakeScheduleRepository(weekday_hours(), off_days, error=schedule_error)
    availability = AvailabilityService(
        catalog_repository=FakeCatalogRepository([service], [staff], prices),
        schedule_repository=schedule_repository,
        booking_repository=FakeBookingRepository(appointments),
    )
    return availability, service, staff, schedule_repository


@pytest.fixture(autouse=True)
def frozen_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(availability_service_module, "utc_now", lambda: FIXED_NOW)


@pytest.mark.asyncio
async def test_day_slots_skip_confirmed_appointment() -> None:
    service = FakeService(id=uuid4(), duration_min=60)
    availability, _, staff, _ = build_service(service=service)
    appointment = FakeAppointment(
        id=uuid4(),
        service_id=service.id,
        staff_id=staff.id,
        start_at=local(MONDAY, 10),
        end_at=local(MONDAY, 11),
    )
    availability.booking_repository.appointments[appointment.id] = appointment

    slots = await availability.get_day_slots(service.id, staff.id, MONDAY)

    assert slots[0] == local(MONDAY, 9)
    assert slots[1] == local(MONDAY, 11)
    assert local(MONDAY, 10) not in slots
    assert local(MONDAY, 10, 30) not in slots


@pytest.mark.asyncio
async def test_day_slots_ignore_other_staff_and_cancelled_appointments() -> None:
    service = FakeService(id=uuid4(), duration_min=60)
    availability, _, staff, _ = build_service(service=service)
    for staff_id, status in ((uuid4(), AppointmentStatusEnum.CONFIRMED), (staff.id, AppointmentStatusEnum.CANCELLED)):
        appointment = FakeAppointment(
            id=uuid4(),
            service_id=service.id,
            staff_id=staff_id,
            start_at=local(MONDAY, 10),
            end_at=local(MONDAY, 11),
            status=status,
        )
        availability.booking_repository.appointments[appointment.id] = appointment

    slots = await availability.get_day_slots(service.id, staff.id, MONDAY)

    assert local(MONDAY, 10) in slots
    assert len(slots) == 17


@pytest.mark.asyncio
async def test_day_slots_empty_for_off_day() -> None:
    availability, service, staff, _ = build_service(off_days=[FakeOffDay(date=MONDAY, reason="Training")])

    assert await availability.get_day_slots(service.id, staff.id, MONDAY) == []


@pytest.mark.asyncio
async def test_day_slots_outside_horizon_do_not_load_schedule() -> None:
    availability, service, staff, schedule_repository = build_service()

    assert await availability.get_day_slots(service.id, staff.id, date(2026, 10, 30)) == []
    assert await availability.get_day_slots(service.id, staff.id, date(2027, 1, 4)) == []
    assert schedule_repository.calls == 0


@pytest.mark.asyncio
async def test_day_slots_use_default_duration_when_service_has_none() -> None:
    service = FakeService(id=uuid4(), duration_min=0)
    availability, _, staff, _ = build_service(service=service)

    slots = await availability.get_day_slots(service.id, staff.id, MONDAY)

    expected_minutes = availability_service_module.settings.default_service_duration_minutes
    assert AvailabilityService.service_duration(service) == expected_minutes
    assert slots[-1] == local(MONDAY, 18) - timedelta(minutes=expected_minutes)


@pytest.mark.asyncio
async def test_unknown_service_raises_not_found() -> None:
    availability, _, staff, _ = build_service()

    with pytest.raises(NotFoundException, match="Service not found"):
        await availability.get_day_slots(uuid4(), staff.id, MONDAY)


@pytest.mark.asyncio
async def test_inactive_service_raises_not_found() -> None:
    availability, service, staff, _ = build_service(service=FakeService(id=uuid4(), is_active=False))

    with pytest.raises(NotFoundException, match="Service not found"):
        await availability.get_available_days(service.id, staff.id, 2026, 11)


@pytest.mark.asyncio
async def test_unpriced_staff_raises_not_found() -> None:
    availability, service, staff, _ = build_service(with_price=False)

    with pytest.raises(NotFoundException, match="does not offer"):
        await availability.get_day_slots(service.id, staff.id, MONDAY)


@pytest.mark.asyncio
async def test_inactive_staff_with_price_is_not_bookable() -> None:
    availability, service, staff, _ = build_service()
    staff.is_active = False

    with pytest.raises(NotFoundException, match="does not offer"):
        await availability.get_day_slots(service.id, staff.id, MONDAY)
    with pytest.raises(NotFoundException, match="does not offer"):
        await availability.get_available_days(service.id, staff.id, 2026, 11)


@pytest.mark.asyncio
async def test_storage_failure_is_not_reported_as_empty() -> None:
    availability, service, staff, _ = build_service(schedule_error=SQLAlchemyError("connection lost"))

    with pytest.raises(UpstreamUnavailableException) as exc_info:
        await availability.get_day_slots(service.id, staff.id, MONDAY)

    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_available_days_exclude_off_day_and_weekends() -> None:
    wednesday = date(2026, 11, 4)
    availability, service, staff, _ = build_service(off_days=[FakeOffDay(date=wednesday)])

    days = await availability.get_available_days(service.id, staff.id, 2026, 11)

    assert wednesday not in days
    assert MONDAY in days
    assert all(day.isoweekday() <= 5 for day in days)
    assert days == sorted(days)
    assert days[-1] == date(2026, 11, 30)


@pytest.mark.asyncio
async def test_available_days_outside_horizon_are_empty() -> None:
    availability, service, staff, schedule_repository = build_service()

    assert await availability.get_available_days(service.id, staff.id, 2026, 9) == []
    assert await availability.get_available_days(service.id, staff.id, 2027, 3) == []
    assert schedule_repository.calls == 0


@pytest.mark.asyncio
async def test_available_days_agree_with_day_slots() -> None:
    service = FakeService(id=uuid4(), duration_min=60)
    availability, _, staff, _ = build_service(service=service)
    full_day = FakeAppointment(
        id=uuid4(),
        service_id=service.id,
        staff_id=staff.id,
        start_at=local(date(2026, 11, 10), 9),
        end_at=local(date(2026, 11, 10), 18),
    )
    availability.booking_repository.appointments[full_day.id] = full_day

    days = await availability.get_available_days(service.id, staff.id, 2026, 11)

    assert date(2026, 11, 10) not in days
    for day in days:
        assert await availability.get_day_slots(service.id, staff.id, day)
