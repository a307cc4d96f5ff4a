"""Dependency wiring for Service Catalog."""

from sqlalchemy.ext.asyncio import AsyncSession

from service_catalog.catalog.service import CatalogService
from service_catalog.catalog.store import SqlServiceStore
from service_catalog.common.config import get_settings
from service_catalog.common.database import DatabaseManager

_db: DatabaseManager | None = None


def get_db() -> DatabaseManager:
    global _db
    if _db is None:
        _db = DatabaseManager(get_settings())
    return _db


def get_catalog_service(session: AsyncSession) -> CatalogService:
    """Build a query service bound to a request-scoped session."""
    return CatalogService(SqlServiceStore(session), get_settings())


def reset_singletons() -> None:
    """Reset all singletons (for testing)."""
    global _db
    _db = None
