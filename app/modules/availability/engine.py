"""Pure availability computation: working windows, free intervals and slots.

Every function here is side-effect free and performs no I/O. Callers fetch
business hours, off-days and appointments once per request and hand them in.

Instants are normalized to UTC before any arithmetic. The business timezone is
used only to turn a local calendar date plus a time of day into an instant, and
to find "today" for the booking horizon.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import MAXYEAR, MINYEAR, date, datetime, time, timedelta, timezone, tzinfo
from uuid import UUID

from app.core.enums import AppointmentStatusEnum
from app.shared.utils import ensure_utc, local_date


@dataclass(frozen=True, slots=True)
class BusinessHoursRule:
    """Opening hours for one weekday (0 = Sunday)."""

    day_of_week: int
    is_open: bool
    open_time: time
    close_time: time

    @property
    def is_bookable(self) -> bool:
        return self.is_open and self.open_time < self.close_time


@dataclass(frozen=True, slots=True)
class ScheduleSnapshot:
    """Read-only view of business hours and off-days for one request."""

    timezone: tzinfo
    hours: Mapping[int, BusinessHoursRule] = field(default_factory=dict)
    off_days: frozenset[date] = frozenset()

    @classmethod
    def build(
        cls,
        tz: tzinfo,
        hours: Iterable[BusinessHoursRule],
        off_days: Iterable[date] = (),
    ) -> ScheduleSnapshot:
        return cls(
            timezone=tz,
            hours={rule.day_of_week: rule for rule in hours},
            off_days=frozenset(off_days),
        )

    def is_closed(self, day: date) -> bool:
        """True when the day is an off-day or its weekday has no bookable hours."""
        if day in self.off_days:
            return True
        rule = self.hours.get(weekday_index(day))
        return rule is None or not rule.is_bookable


@dataclass(frozen=True, slots=True)
class BusySpan:
    """Appointment as seen by the engine."""

    start_at: datetime
    end_at: datetime
    status: AppointmentStatusEnum = AppointmentStatusEnum.CONFIRMED


@dataclass(frozen=True, order=True, slots=True)
class TimeRange:
    """Half-open interval [start, end) of UTC instants."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class AvailabilityPolicy:
    """Slot grid and booking window shared by the day and month queries."""

    step_minutes: int = 30
    horizon_days: int = 30
    min_lead_minutes: int = 0


def weekday_index(day: date) -> int:
    """Sunday-indexed weekday (0 = Sunday ... 6 = Saturday)."""
    return day.isoweekday() % 7


def at_local_time(day: date, at: time, tz: tzinfo) -> datetime:
    """Combine a local date and wall-clock time into a UTC instant."""
    return datetime.combine(day, at, tzinfo=tz).astimezone(timezone.utc)


def local_days_span(first_day: date, last_day: date, tz: tzinfo) -> TimeRange:
    """UTC range covering local days first_day..last_day inclusive."""
    return TimeRange(
        start=at_local_time(first_day, time.min, tz),
        end=at_local_time(last_day + timedelta(days=1), time.min, tz),
    )


def booking_horizon(now: datetime, tz: tzinfo, horizon_days: int) -> tuple[date, date]:
    """First and last local dates a customer may book, both inclusive."""
    today = local_date(now, tz)
    return today, today + timedelta(days=horizon_days)


def month_bounds(year: int, month: int) -> tuple[date, date] | None:
    """First and last day of a month, or None for an invalid month."""
    if not 1 <= month <= 12 or not MINYEAR <= year <= MAXYEAR:
        return None
    _, days_in_month = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, days_in_month)


def resolve_window(
    day: date,
    staff_id: UUID | None,
    snapshot: ScheduleSnapshot,
) -> TimeRange | None:
    """Return the working window for a day, or None when the business is closed.

    Working hours are business-wide, so ``staff_id`` does not change the result
    yet. No booking horizon is applied here.
    """
    if snapshot.is_closed(day):
        return None
    rule = snapshot.hours[weekday_index(day)]
    return TimeRange(
        start=at_local_time(day, rule.open_time, snapshot.timezone),
        end=at_local_time(day, rule.close_time, snapshot.timezone),
    )


def free_intervals(window: TimeRange, appointments: Iterable[BusySpan]) -> list[TimeRange]:
    """Subtract occupied time from the working window.

    Cancelled appointments are ignored. The result is sorted, non-overlapping
    and made of maximal gaps.
    """
    occupied = sorted(
        (ensure_utc(item.start_at), ensure_utc(item.end_at))
        for item in appointments
        if item.status != AppointmentStatusEnum.CANCELLED
    )

    blocked: list[list[datetime]] = []
    for start_at, end_at in occupied:
        start_at = max(start_at, window.start)
        end_at = min(end_at, window.end)
        if end_at <= start_at:
            continue
        if blocked and start_at <= blocked[-1][1]:
            blocked[-1][1] = max(blocked[-1][1], end_at)
        else:
            blocked.append([start_at, end_at])

    gaps: list[TimeRange] = []
    cursor = window.start
    for start_at, end_at in blocked:
        if start_at > cursor:
            gaps.append(TimeRange(start=cursor, end=start_at))
        cursor = end_at
    if window.end > cursor:
        gaps.append(TimeRange(start=cursor, end=window.end))
    return gaps


def _round_up_to_grid(instant: datetime, origin: datetime, step: timedelta) -> datetime:
    remainder = (instant - origin) % step
    if not remainder:
        return instant
    return instant + (step - remainder)


def enumerate_slots(
    intervals: Iterable[TimeRange],
    duration_minutes: int,
    step_minutes: int,
    now: datetime,
    *,
    anchor: datetime | None = None,
    min_lead_minutes: int = 0,
) -> list[datetime]:
    """Walk free intervals on a fixed grid and return bookable start instants.

    The grid is aligned to ``anchor`` (UTC midnight of the first interval when
    omitted). A start survives only if the whole service fits inside its
    interval and it lies strictly after ``now`` plus the lead time.
    """
    ranges = sorted(intervals)
    if not ranges or duration_minutes <= 0 or step_minutes <= 0:
        return []

    duration = timedelta(minutes=duration_minutes)
    step = timedelta(minutes=step_minutes)
    if anchor is None:
        origin = datetime.combine(ranges[0].start.date(), time.min, tzinfo=timezone.utc)
    else:
        origin = ensure_utc(anchor)
    earliest = ensure_utc(now) + timedelta(minutes=min_lead_minutes)

    slots: list[datetime] = []
    for free in ranges:
        candidate = _round_up_to_grid(free.start, origin, step)
        while candidate + duration <= free.end:
            if candidate > earliest:
                slots.append(candidate)
            candidate += step
    return slots


def day_slots(
    day: date,
    staff_id: UUID | None,
    snapshot: ScheduleSnapshot,
    appointments: Iterable[BusySpan],
    duration_minutes: int,
    policy: AvailabilityPolicy,
    now: datetime,
) -> list[datetime]:
    """Resolve, filter and enumerate slots for one local day."""
    first_day, last_day = booking_horizon(now, snapshot.timezone, policy.horizon_days)
    if not first_day <= day <= last_day:
        return []

    window = resolve_window(day, staff_id, snapshot)
    if window is None:
        return []

    return enumerate_slots(
        free_intervals(window, appointments),
        duration_minutes,
        policy.step_minutes,
        now,
        anchor=window.start,
        min_lead_minutes=policy.min_lead_minutes,
    )


def days_with_availability(
    year: int,
    month: int,
    staff_id: UUID | None,
    snapshot: ScheduleSnapshot,
    appointments: Iterable[BusySpan],
    duration_minutes: int,
    policy: AvailabilityPolicy,
    now: datetime,
) -> list[date]:
    """Return, in ascending order, the days of a month with at least one slot.

    Only days inside the booking horizon are considered. Off-days and closed
    weekdays are skipped before any interval work.
    """
    bounds = month_bounds(year, month)
    if bounds is None:
        return []

    first_day, last_day = booking_horizon(now, snapshot.timezone, policy.horizon_days)
    day = max(bounds[0], first_day)
    end = min(bounds[1], last_day)
    busy = tuple(appointments)

    available: list[date] = []
    while day <= end:
        if not snapshot.is_closed(day) and day_slots(
            day, staff_id, snapshot, busy, duration_minutes, policy, now
        ):
            available.append(day)
        day += timedelta(days=1)
    return available
