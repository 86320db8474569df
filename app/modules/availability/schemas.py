"""Availability schemas."""

from __future__ import annotations

from datetime import date as calendar_date
from datetime import datetime

from pydantic import BaseModel


class DaySlotsRead(BaseModel):
    """Bookable start instants for a day."""

    date: calendar_date
    slots: list[datetime]


class MonthAvailabilityRead(BaseModel):
    """Days of a month having at least one bookable slot."""

    year: int
    month: int
    available_dates: list[calendar_date]
