"""Seed idempotent demo data for local/non-production environments."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import SessionLocal, close_engine
from app.modules.catalog.models import Service, StaffMember
from app.modules.catalog.repository import CatalogRepository
from app.modules.catalog.schemas import PriceUpsert
from app.modules.catalog.service import CatalogService
from app.modules.schedule.repository import ScheduleRepository
from app.modules.schedule.service import ScheduleService

# (name, duration_min, description)
DEMO_SERVICES = (
    ("Lash lift", 60, "Lift and tint of natural lashes."),
    ("Brow lamination", 45, "Brow lamination with shaping."),
    ("Classic lash extensions", 120, "Full set of classic extensions."),
)

# (display_name, email, price multiplier percent)
DEMO_STAFF = (
    ("Demo Senior Artist", "demo-senior@salon.dev", 125),
    ("Demo Junior Artist", "demo-junior@salon.dev", 100),
)

DEMO_BASE_PRICE_CENTS_PER_MINUTE = 75


@dataclass(slots=True)
class SeedStats:
    business_hours_created: int = 0
    services_created: int = 0
    staff_created: int = 0
    prices_set: int = 0
    pairs: list[tuple[str, str]] = field(default_factory=list)


async def _ensure_service(session: AsyncSession, name: str, duration_min: int, description: str) -> tuple[Service, bool]:
    service = await session.scalar(select(Service).where(Service.name == name))
    if service is None:
        service = Service(name=name, duration_min=duration_min, description=description, is_active=True)
        session.add(service)
        await session.flush()
        return service, True

    service.duration_min = duration_min
    service.description = description
    service.is_active = True
    await session.flush()
    return service, False


async def _ensure_staff(session: AsyncSession, display_name: str, email: str) -> tuple[StaffMember, bool]:
    staff = await session.scalar(select(StaffMember).where(StaffMember.email == email))
    if staff is None:
        staff = StaffMember(display_name=display_name, email=email, is_active=True)
        session.add(staff)
        await session.flush()
        return staff, True

    staff.display_name = display_name
    staff.is_active = True
    await session.flush()
    return staff, False


async def _run_seed(*, allow_production: bool) -> SeedStats:
    settings = get_settings()
    app_env = settings.app_env.strip().lower()
    if app_env in {"production", "prod"} and not allow_production:
        raise RuntimeError(
            "Refusing to seed demo data in production. "
            "Re-run with --allow-production only if you are absolutely sure.",
        )

    stats = SeedStats()

    async with SessionLocal() as session:
        try:
            stats.business_hours_created = await ScheduleService(
                ScheduleRepository(session),
            ).ensure_default_hours()

            catalog_service = CatalogService(CatalogRepository(session))
            staff_members: list[tuple[StaffMember, int]] = []
            for display_name, email, multiplier in DEMO_STAFF:
                staff, created = await _ensure_staff(session, display_name, email)
                stats.staff_created += int(created)
                staff_members.append((staff, multiplier))

            for name, duration_min, description in DEMO_SERVICES:
                service, created = await _ensure_service(session, name, duration_min, description)
                stats.services_created += int(created)
                for staff, multiplier in staff_members:
                    await catalog_service.set_price(
                        PriceUpsert(
                            service_id=service.id,
                            staff_id=staff.id,
                            price_cents=duration_min * DEMO_BASE_PRICE_CENTS_PER_MINUTE * multiplier // 100,
                            currency="EUR",
                        ),
                    )
                    stats.prices_set += 1
                    stats.pairs.append((str(service.id), str(staff.id)))

            await session.commit()
        except Exception:
            await session.rollback()
            raise

    return stats


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Seed idempotent demo data for the salon booking service (default business hours, "
            "services, staff and staff prices)."
        ),
    )
    parser.add_argument(
        "--allow-production",
        action="store_true",
        help="Allow seeding even when APP_ENV is production/prod.",
    )
    return parser


def _print_summary(stats: SeedStats) -> None:
    print("Demo seed completed.")
    print(f"- Business hours rows created: {stats.business_hours_created}")
    print(f"- Services created: {stats.services_created}")
    print(f"- Staff created: {stats.staff_created}")
    print(f"- Prices set: {stats.prices_set}")
    print("")
    print("Bookable (service_id, staff_id) pairs:")
    for service_id, staff_id in stats.pairs:
        print(f"- {service_id} / {staff_id}")


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    try:
        stats = asyncio.run(_run_seed(allow_production=args.allow_production))
    except Exception as exc:
        print(f"Demo seed failed: {exc}")
        return 1
    finally:
        asyncio.run(close_engine())

    _print_summary(stats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
