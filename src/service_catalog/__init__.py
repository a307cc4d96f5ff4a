"""Service Catalog: paginated read API for services and their versions."""

from service_catalog.client import CatalogClient, CatalogClientError
from service_catalog.catalog.domain import (
    ListQuery,
    ListResult,
    Service,
    ServiceVersion,
    ServiceWithVersions,
)
from service_catalog.catalog.memory import InMemoryServiceStore
from service_catalog.catalog.service import CatalogService, normalize_query

__all__ = [
    "CatalogClient",
    "CatalogClientError",
    "CatalogService",
    "InMemoryServiceStore",
    "ListQuery",
    "ListResult",
    "Service",
    "ServiceVersion",
    "ServiceWithVersions",
    "normalize_query",
]
__version__ = "0.1.0"
