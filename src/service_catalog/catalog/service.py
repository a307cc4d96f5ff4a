"""Catalog query service — validates list parameters and assembles pages."""

import logging
import math

from service_catalog.catalog.domain import (
    MAX_STORE_INT,
    ListQuery,
    ListResult,
    PageRequest,
    ServiceWithVersions,
    SortDirection,
    SortField,
)
from service_catalog.catalog.store import ServiceStore
from service_catalog.common.config import CatalogSettings
from service_catalog.common.exceptions import (
    InvalidArgumentError,
    ServiceNotFoundError,
    StoreFailureError,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100


def normalize_query(
    query: ListQuery,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> PageRequest:
    """Apply defaults and bounds to a raw ListQuery."""
    page = query.page if query.page > 0 else 1
    page_size = query.page_size if query.page_size > 0 else default_page_size
    page_size = min(page_size, max_page_size)
    return PageRequest(
        search=query.search or "",
        sort_by=SortField.parse(query.sort_by),
        sort_dir=SortDirection.parse(query.sort_dir),
        page=page,
        page_size=page_size,
    )


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size)


class CatalogService:
    """List and fetch services through an injected ServiceStore."""

    def __init__(self, store: ServiceStore, settings: CatalogSettings | None = None):
        self.store = store
        self.default_page_size = (
            settings.default_page_size if settings else DEFAULT_PAGE_SIZE
        )
        self.max_page_size = settings.max_page_size if settings else MAX_PAGE_SIZE

    async def list_services(self, query: ListQuery) -> ListResult:
        """Return one page of services matching ``query``.

        Any store failure aborts the whole call; no partial page is returned.
        """
        request = normalize_query(query, self.default_page_size, self.max_page_size)
        try:
            total = await self.store.count_matching(request.search)
            if request.offset > MAX_STORE_INT:
                rows = []
            else:
                rows = await self.store.list_matching(
                    request.search,
                    request.sort_by,
                    request.sort_dir,
                    request.page_size,
                    request.offset,
                )
            items = [
                ServiceWithVersions(
                    service=row, versions=await self.store.versions_of(row.id),
                )
                for row in rows
            ]
        except Exception as exc:
            raise StoreFailureError("Failed to list services") from exc

        logger.debug(
            "Listed %d of %d services (page=%d, page_size=%d)",
            len(items), total, request.page, request.page_size,
        )
        return ListResult(
            items=items,
            total=total,
            page=request.page,
            page_size=request.page_size,
            total_pages=total_pages(total, request.page_size),
        )

    async def get_service_by_id(self, service_id: int) -> ServiceWithVersions:
        if service_id <= 0:
            raise InvalidArgumentError(f"Invalid service ID: {service_id}")
        if service_id > MAX_STORE_INT:
            raise ServiceNotFoundError()

        try:
            service = await self.store.get_by_id(service_id)
        except Exception as exc:
            raise StoreFailureError("Failed to get service") from exc
        if service is None:
            raise ServiceNotFoundError()

        try:
            versions = await self.store.versions_of(service_id)
        except Exception as exc:
            raise StoreFailureError("Failed to get service versions") from exc

        return ServiceWithVersions(service=service, versions=versions)
