"""Initial schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 18:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "20261019_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


appointment_status_enum = sa.Enum(
    "pending",
    "confirmed",
    "cancelled",
    "no_show",
    "completed",
    name="appointment_status_enum",
    native_enum=False,
)


def _id_col() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False)


def _created_col() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)


def _updated_col() -> sa.Column:
    return sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False)


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")

    op.create_table(
        "business_hours",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("day_of_week", sa.SmallInteger(), nullable=False),
        sa.Column("is_open", sa.Boolean(), nullable=False),
        sa.Column("open_time", sa.Time(), nullable=False),
        sa.Column("close_time", sa.Time(), nullable=False),
        sa.UniqueConstraint("day_of_week", name="uq_business_hours_day_of_week"),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_business_hours_day_of_week_range"),
    )

    op.create_table(
        "business_off_days",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("reason", sa.String(length=255), nullable=True),
        sa.UniqueConstraint("date", name="uq_business_off_days_date"),
    )
    op.create_index("ix_business_off_days_date", "business_off_days", ["date"], unique=False)

    op.create_table(
        "services",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("duration_min", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_services_is_active", "services", ["is_active"], unique=False)

    op.create_table(
        "staff_members",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.UniqueConstraint("email", name="uq_staff_members_email"),
    )

    op.create_table(
        "service_staff_prices",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("service_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("staff_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("price_cents", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.ForeignKeyConstraint(
            ["service_id"],
            ["services.id"],
            name="fk_service_staff_prices_service_id_services",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["staff_id"],
            ["staff_members.id"],
            name="fk_service_staff_prices_staff_id_staff_members",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("service_id", "staff_id", name="uq_service_staff_prices_service_id_staff_id"),
        sa.CheckConstraint("price_cents >= 0", name="ck_service_staff_prices_price_cents_non_negative"),
    )
    op.create_index("ix_service_staff_prices_service_id", "service_staff_prices", ["service_id"], unique=False)
    op.create_index("ix_service_staff_prices_staff_id", "service_staff_prices", ["staff_id"], unique=False)

    op.create_table(
        "appointments",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("service_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("staff_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", appointment_status_enum, nullable=False),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("customer_email", sa.String(length=255), nullable=False),
        sa.Column("customer_phone", sa.String(length=64), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["service_id"],
            ["services.id"],
            name="fk_appointments_service_id_services",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["staff_id"],
            ["staff_members.id"],
            name="fk_appointments_staff_id_staff_members",
            ondelete="RESTRICT",
        ),
        sa.CheckConstraint("start_at < end_at", name="ck_appointments_start_before_end"),
    )
    op.create_index("ix_appointments_service_id", "appointments", ["service_id"], unique=False)
    op.create_index("ix_appointments_status", "appointments", ["status"], unique=False)
    op.create_index("ix_appointments_customer_email", "appointments", ["customer_email"], unique=False)
    op.create_index("ix_appointments_staff_id_start_at", "appointments", ["staff_id", "start_at"], unique=False)

    # Write-time guard: no two non-cancelled appointments of one staff member overlap.
    op.execute(
        """
        ALTER TABLE appointments
        ADD CONSTRAINT ex_appointments_staff_id_no_overlap
        EXCLUDE USING gist (
            staff_id WITH =,
            tstzrange(start_at, end_at, '[)') WITH &&
        )
        WHERE (status <> 'cancelled')
        """,
    )


def downgrade() -> None:
    op.execute("ALTER TABLE appointments DROP CONSTRAINT IF EXISTS ex_appointments_staff_id_no_overlap")
    op.drop_index("ix_appointments_staff_id_start_at", table_name="appointments")
    op.drop_index("ix_appointments_customer_email", table_name="appointments")
    op.drop_index("ix_appointments_status", table_name="appointments")
    op.drop_index("ix_appointments_service_id", table_name="appointments")
    op.drop_table("appointments")

    op.drop_index("ix_service_staff_prices_staff_id", table_name="service_staff_prices")
    op.drop_index("ix_service_staff_prices_service_id", table_name="service_staff_prices")
    op.drop_table("service_staff_prices")

    op.drop_table("staff_members")

    op.drop_index("ix_services_is_active", table_name="services")
    op.drop_table("services")

    op.drop_index("ix_business_off_days_date", table_name="business_off_days")
    op.drop_table("business_off_days")

    op.drop_table("business_hours")
