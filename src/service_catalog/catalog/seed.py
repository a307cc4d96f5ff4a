"""Bootstrap data for an empty catalog."""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from service_catalog.catalog.models import ServiceModel, ServiceVersionModel

logger = logging.getLogger(__name__)

_LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. "
    "Turpis non a, pellentesque ipsum aliquet id..."
)

SEED_SERVICES: list[dict] = [
    {"name": "Locate Us", "versions": ["1.0.0", "1.1.0", "2.0.0"]},
    {"name": "Collect Monday", "versions": ["1.0.0", "1.2.0", "2.1.0"]},
    {"name": "Contact Us", "versions": ["1.0.0", "1.1.0", "1.2.0"]},
    {"name": "FX Rates International", "versions": ["1.0.0", "2.0.0", "3.0.0"]},
    {"name": "Notifications", "versions": ["1.0.0", "1.1.0", "1.2.0"]},
    {"name": "Priority Services", "versions": ["1.0.0", "2.0.0", "2.1.0"]},
    {"name": "Reporting", "versions": ["1.0.0", "1.1.0", "2.0.0"]},
    {"name": "Security", "versions": ["1.0.0", "1.1.0", "1.2.0"]},
]


async def seed_services(
    session: AsyncSession,
    seeds: list[dict] | None = None,
    now: datetime | None = None,
) -> int:
    """Insert the seed services unless the catalog already has rows.

    Each version is stamped one minute after the previous one so that the
    last listed version is the newest. Returns the number of services added.
    """
    existing = (await session.execute(select(func.count(ServiceModel.id)))).scalar()
    if existing:
        logger.info("Catalog already holds %d services, skipping seed", existing)
        return 0

    seeds = SEED_SERVICES if seeds is None else seeds
    base = (now or datetime.now(timezone.utc)) - timedelta(days=1)
    tick = 0
    for seed in seeds:
        service = ServiceModel(
            name=seed["name"],
            description=seed.get("description", _LOREM),
            created_at=base + timedelta(minutes=tick),
            updated_at=base + timedelta(minutes=tick),
        )
        for label in seed.get("versions", []):
            service.versions.append(ServiceVersionModel(
                version=label,
                created_at=base + timedelta(minutes=tick),
            ))
            tick += 1
        tick += 1
        session.add(service)

    await session.flush()
    logger.info("Seeded %d services", len(seeds))
    return len(seeds)
