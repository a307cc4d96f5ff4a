"""Shared test fixtures for Service Catalog."""

import json
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient


ADMIN_TOKEN = "test-admin-token"
VIEWER_TOKEN = "test-viewer-token"
GUEST_TOKEN = "test-guest-token"

TEST_TOKENS = {
    ADMIN_TOKEN: {"subject": "test-admin", "roles": ["admin"]},
    VIEWER_TOKEN: {"subject": "test-viewer", "roles": ["viewer"]},
    GUEST_TOKEN: {"subject": "test-guest", "roles": ["guest"]},
}

SEED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def app(monkeypatch):
    """Create a test app with in-memory DB."""
    monkeypatch.setenv("CATALOG_DB_URL", "sqlite+aiosqlite://")
    monkeypatch.setenv("CATALOG_AUTH_TOKENS", json.dumps(TEST_TOKENS))
    monkeypatch.setenv("CATALOG_SEED_ON_STARTUP", "false")

    # Clear caches and singletons so new env vars take effect
    from service_catalog.common.config import get_settings
    get_settings.cache_clear()

    from service_catalog.deps import reset_singletons
    reset_singletons()

    from service_catalog.app import create_app
    yield create_app()

    get_settings.cache_clear()
    reset_singletons()


@pytest.fixture
async def client(app):
    # Manually init DB since ASGITransport doesn't run lifespan
    from service_catalog.catalog.seed import seed_services
    from service_catalog.deps import get_db
    db = get_db()
    await db.init()
    await db.create_all()
    async with db.get_session() as session:
        await seed_services(session, now=SEED_NOW)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await db.close()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def viewer_headers():
    return {"Authorization": f"Bearer {VIEWER_TOKEN}"}


@pytest.fixture
def guest_headers():
    return {"Authorization": f"Bearer {GUEST_TOKEN}"}
