"""Business schedule ORM models."""

from __future__ import annotations

from datetime import date as calendar_date
from datetime import time

from sqlalchemy import Boolean, CheckConstraint, Date, SmallInteger, String, Time
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, BaseModelMixin


class BusinessHours(BaseModelMixin, Base):
    """Opening hours for one weekday, Sunday-indexed."""

    __tablename__ = "business_hours"
    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="day_of_week_range"),
    )

    day_of_week: Mapped[int] = mapped_column(SmallInteger, nullable=False, unique=True)
    is_open: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    open_time: Mapped[time] = mapped_column(Time, nullable=False)
    close_time: Mapped[time] = mapped_column(Time, nullable=False)


class BusinessOffDay(BaseModelMixin, Base):
    """Calendar date on which the business is fully closed."""

    __tablename__ = "business_off_days"

    date: Mapped[calendar_date] = mapped_column(Date, nullable=False, unique=True, index=True)
    reason: Mapped[str | None] = mapped_column(String(255), nullable=True)
