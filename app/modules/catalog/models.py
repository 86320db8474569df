"""Service catalog ORM models."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, BaseModelMixin


class Service(BaseModelMixin, Base):
    """Bookable salon service."""

    __tablename__ = "services"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration_min: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    prices: Mapped[list[ServiceStaffPrice]] = relationship(back_populates="service")


class StaffMember(BaseModelMixin, Base):
    """Staff member who performs services."""

    __tablename__ = "staff_members"

    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    prices: Mapped[list[ServiceStaffPrice]] = relationship(back_populates="staff")


class ServiceStaffPrice(BaseModelMixin, Base):
    """Price a staff member charges for a service; makes the pair bookable."""

    __tablename__ = "service_staff_prices"
    __table_args__ = (
        UniqueConstraint("service_id", "staff_id", name="uq_service_staff_prices_service_id_staff_id"),
        CheckConstraint("price_cents >= 0", name="price_cents_non_negative"),
    )

    service_id: Mapped[UUID] = mapped_column(
        ForeignKey("services.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    staff_id: Mapped[UUID] = mapped_column(
        ForeignKey("staff_members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    price_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="EUR")

    service: Mapped[Service] = relationship(back_populates="prices")
    staff: Mapped[StaffMember] = relationship(back_populates="prices")
