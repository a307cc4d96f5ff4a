"""Tests for the SQL store and seed data against in-memory SQLite."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from service_catalog.catalog.domain import SortDirection, SortField
from service_catalog.catalog.models import ServiceModel, ServiceVersionModel
from service_catalog.catalog.seed import SEED_SERVICES, seed_services
from service_catalog.catalog.store import SqlServiceStore
from service_catalog.common.config import CatalogSettings
from service_catalog.common.database import DatabaseManager


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_settings(**overrides) -> CatalogSettings:
    defaults = {"db_url": "sqlite+aiosqlite://"}
    defaults.update(overrides)
    return CatalogSettings(**defaults)


@pytest.fixture
async def db():
    manager = DatabaseManager(make_settings())
    await manager.init()
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
async def seeded(db):
    async with db.get_session() as session:
        await seed_services(session, now=NOW)
    return db


class TestSeed:
    async def test_seed_inserts_all(self, db):
        async with db.get_session() as session:
            added = await seed_services(session, now=NOW)
            assert added == len(SEED_SERVICES)
        async with db.get_session() as session:
            versions = (await session.execute(
                select(func.count(ServiceVersionModel.id))
            )).scalar()
            assert versions == 3 * len(SEED_SERVICES)

    async def test_seed_is_idempotent(self, seeded):
        async with seeded.get_session() as session:
            assert await seed_services(session) == 0
            assert await SqlServiceStore(session).count_matching("") == 8


class TestCountMatching:
    async def test_all(self, seeded):
        async with seeded.get_session() as session:
            assert await SqlServiceStore(session).count_matching("") == 8

    async def test_name_substring(self, seeded):
        async with seeded.get_session() as session:
            assert await SqlServiceStore(session).count_matching("Us") == 2

    async def test_case_follows_sqlite_like(self, seeded):
        async with seeded.get_session() as session:
            assert await SqlServiceStore(session).count_matching("contact us") == 1

    async def test_underscore_is_literal(self, seeded):
        async with seeded.get_session() as session:
            assert await SqlServiceStore(session).count_matching("_") == 0


class TestListMatching:
    async def test_limit_offset(self, seeded):
        async with seeded.get_session() as session:
            store = SqlServiceStore(session)
            rows = await store.list_matching("", SortField.NAME, SortDirection.ASC, 3, 2)
            assert [r.name for r in rows] == [
                "FX Rates International", "Locate Us", "Notifications",
            ]

    async def test_sort_updated_desc(self, seeded):
        async with seeded.get_session() as session:
            store = SqlServiceStore(session)
            rows = await store.list_matching(
                "", SortField.UPDATED_AT, SortDirection.DESC, 100, 0,
            )
            assert rows[0].name == "Security"
            assert rows[-1].name == "Locate Us"

    async def test_ties_broken_by_id(self, db):
        async with db.get_session() as session:
            for name in ("B", "A", "C"):
                session.add(ServiceModel(
                    name=name, description="", created_at=NOW, updated_at=NOW,
                ))
        async with db.get_session() as session:
            rows = await SqlServiceStore(session).list_matching(
                "", SortField.CREATED_AT, SortDirection.DESC, 10, 0,
            )
            assert [r.name for r in rows] == ["B", "A", "C"]

    async def test_returns_domain_objects(self, seeded):
        async with seeded.get_session() as session:
            rows = await SqlServiceStore(session).list_matching(
                "Reporting", SortField.NAME, SortDirection.ASC, 10, 0,
            )
        # Detached from the session, plain values remain readable.
        assert rows[0].name == "Reporting"
        assert isinstance(rows[0].id, int)


class TestVersionsAndLookup:
    async def test_versions_newest_first(self, seeded):
        async with seeded.get_session() as session:
            versions = await SqlServiceStore(session).versions_of(4)
            assert [v.version for v in versions] == ["3.0.0", "2.0.0", "1.0.0"]
            assert all(v.service_id == 4 for v in versions)

    async def test_versions_of_unknown(self, seeded):
        async with seeded.get_session() as session:
            assert await SqlServiceStore(session).versions_of(999) == []

    async def test_get_by_id(self, seeded):
        async with seeded.get_session() as session:
            service = await SqlServiceStore(session).get_by_id(5)
            assert service is not None
            assert service.name == "Notifications"

    async def test_get_by_id_absent_is_none(self, seeded):
        async with seeded.get_session() as session:
            assert await SqlServiceStore(session).get_by_id(999) is None


class TestConstraints:
    async def test_delete_cascades_versions(self, seeded):
        async with seeded.get_session() as session:
            await session.execute(delete(ServiceModel).where(ServiceModel.id == 1))
        async with seeded.get_session() as session:
            assert await SqlServiceStore(session).versions_of(1) == []

    async def test_version_unique_per_service(self, seeded):
        with pytest.raises(IntegrityError):
            async with seeded.get_session() as session:
                session.add(ServiceVersionModel(service_id=1, version="1.0.0"))
                await session.flush()

    async def test_same_label_on_other_service(self, seeded):
        async with seeded.get_session() as session:
            session.add(ServiceVersionModel(
                service_id=1, version="9.9.9", created_at=NOW + timedelta(days=1),
            ))
            session.add(ServiceVersionModel(service_id=2, version="9.9.9"))
        async with seeded.get_session() as session:
            versions = await SqlServiceStore(session).versions_of(1)
            assert versions[0].version == "9.9.9"

    async def test_service_name_unique(self, seeded):
        with pytest.raises(IntegrityError):
            async with seeded.get_session() as session:
                session.add(ServiceModel(name="Security", description=""))
                await session.flush()
