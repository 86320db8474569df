from __future__ import annotations

from datetime import date, datetime, time
from uuid import uuid4

import pytest

import app.modules.schedule.service as schedule_service_module
from app.modules.schedule.schemas import BusinessHoursItem, BusinessHoursReplace, OffDayCreate
from app.modules.schedule.service import ScheduleService
from app.shared.exceptions import BusinessRuleException, ConflictException, NotFoundException
from tests.fakes import FakeOffDay, FakeScheduleRepository

FIXED_NOW = datetime(2026, 11, 1, 12, 0, tzinfo=schedule_service_module.settings.tz)


@pytest.fixture(autouse=True)
def frozen_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(schedule_service_module, "utc_now", lambda: FIXED_NOW)


def full_week(**overrides: BusinessHoursItem) -> BusinessHoursReplace:
    hours = [
        BusinessHoursItem(
            day_of_week=day,
            is_open=day != 0,
            open_time=time(10, 0),
            close_time=time(20, 0),
        )
        for day in range(7)
    ]
    for key, item in overrides.items():
        hours[int(key.removeprefix("day"))] = item
    return BusinessHoursReplace(hours=hours)


@pytest.mark.asyncio
async def test_ensure_default_hours_seeds_once() -> None:
    repository = FakeScheduleRepository()
    service = ScheduleService(repository)

    assert await service.ensure_default_hours() == 7
    assert await service.ensure_default_hours() == 0

    hours = await repository.list_hours()
    assert [row.day_of_week for row in hours] == list(range(7))
    assert [row.is_open for row in hours] == [False, True, True, True, True, True, False]
    assert hours[1].open_time == time(9, 0)
    assert hours[1].close_time == time(18, 0)


@pytest.mark.asyncio
async def test_get_schedule_lists_only_upcoming_off_days() -> None:
    repository = FakeScheduleRepository(
        off_days=[FakeOffDay(date=date(2026, 10, 12)), FakeOffDay(date=date(2026, 12, 25), reason="Christmas")],
    )

    hours, off_days = await ScheduleService(repository).get_schedule()

    assert len(hours) == 7
    assert [item.date for item in off_days] == [date(2026, 12, 25)]


@pytest.mark.asyncio
async def test_replace_hours_updates_all_days() -> None:
    repository = FakeScheduleRepository()
    service = ScheduleService(repository)
    await service.ensure_default_hours()

    hours = await service.replace_hours(full_week())

    assert [row.is_open for row in hours] == [False, True, True, True, True, True, True]
    assert all(row.open_time == time(10, 0) for row in hours)


@pytest.mark.asyncio
async def test_replace_hours_requires_seven_distinct_days() -> None:
    service = ScheduleService(FakeScheduleRepository())
    payload = full_week()

    with pytest.raises(BusinessRuleException, match="exactly 7"):
        await service.replace_hours(BusinessHoursReplace(hours=payload.hours[:6]))

    duplicated = payload.hours[:6] + [payload.hours[0]]
    with pytest.raises(BusinessRuleException, match="each weekday"):
        await service.replace_hours(BusinessHoursReplace(hours=duplicated))


@pytest.mark.asyncio
async def test_replace_hours_rejects_open_day_closing_before_opening() -> None:
    service = ScheduleService(FakeScheduleRepository())
    payload = full_week(
        day3=BusinessHoursItem(day_of_week=3, is_open=True, open_time=time(18, 0), close_time=time(9, 0)),
    )

    with pytest.raises(BusinessRuleException, match="day 3"):
        await service.replace_hours(payload)


@pytest.mark.asyncio
async def test_replace_hours_allows_any_times_on_closed_day() -> None:
    repository = FakeScheduleRepository()
    payload = full_week(
        day0=BusinessHoursItem(day_of_week=0, is_open=False, open_time=time(0, 0), close_time=time(0, 0)),
    )

    hours = await ScheduleService(repository).replace_hours(payload)

    assert hours[0].is_open is False


@pytest.mark.asyncio
async def test_add_off_day_rejects_past_and_duplicate_dates() -> None:
    repository = FakeScheduleRepository()
    service = ScheduleService(repository)

    off_day = await service.add_off_day(OffDayCreate(date=date(2026, 11, 4), reason="  "))
    assert off_day.reason is None

    with pytest.raises(ConflictException):
        await service.add_off_day(OffDayCreate(date=date(2026, 11, 4)))
    with pytest.raises(BusinessRuleException, match="past"):
        await service.add_off_day(OffDayCreate(date=date(2026, 10, 31)))


@pytest.mark.asyncio
async def test_add_off_day_accepts_today() -> None:
    service = ScheduleService(FakeScheduleRepository())

    off_day = await service.add_off_day(OffDayCreate(date=date(2026, 11, 1), reason="Inventory"))

    assert off_day.reason == "Inventory"


@pytest.mark.asyncio
async def test_delete_off_day() -> None:
    off_day = FakeOffDay(date=date(2026, 11, 4))
    repository = FakeScheduleRepository(off_days=[off_day])
    service = ScheduleService(repository)

    await service.delete_off_day(off_day.id)
    assert repository.off_days == []

    with pytest.raises(NotFoundException):
        await service.delete_off_day(uuid4())
