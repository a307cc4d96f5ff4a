"""Store capability interface and its SQLAlchemy implementation."""

from typing import Protocol

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from service_catalog.catalog.domain import (
    Service,
    ServiceVersion,
    SortDirection,
    SortField,
)
from service_catalog.catalog.models import ServiceModel, ServiceVersionModel


class ServiceStore(Protocol):
    """Read operations the query service needs from a backing store."""

    async def count_matching(self, search: str) -> int: ...

    async def list_matching(
        self,
        search: str,
        sort_by: SortField,
        sort_dir: SortDirection,
        limit: int,
        offset: int,
    ) -> list[Service]: ...

    async def versions_of(self, service_id: int) -> list[ServiceVersion]: ...

    async def get_by_id(self, service_id: int) -> Service | None: ...


# ORDER BY columns are only ever taken from this mapping.
_SORT_COLUMNS = {
    SortField.NAME: ServiceModel.name,
    SortField.CREATED_AT: ServiceModel.created_at,
    SortField.UPDATED_AT: ServiceModel.updated_at,
}


def _to_service(row: ServiceModel) -> Service:
    return Service(
        id=row.id,
        name=row.name,
        description=row.description,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_version(row: ServiceVersionModel) -> ServiceVersion:
    return ServiceVersion(
        id=row.id,
        service_id=row.service_id,
        version=row.version,
        created_at=row.created_at,
    )


class SqlServiceStore:
    """ServiceStore over an AsyncSession. Every value is a bound parameter."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _search_filter(search: str) -> list:
        if not search:
            return []
        return [
            or_(
                ServiceModel.name.contains(search, autoescape=True),
                ServiceModel.description.contains(search, autoescape=True),
            )
        ]

    async def count_matching(self, search: str) -> int:
        result = await self.session.execute(
            select(func.count(ServiceModel.id)).where(*self._search_filter(search))
        )
        return result.scalar() or 0

    async def list_matching(
        self,
        search: str,
        sort_by: SortField,
        sort_dir: SortDirection,
        limit: int,
        offset: int,
    ) -> list[Service]:
        column = _SORT_COLUMNS[sort_by]
        ordering = column.desc() if sort_dir is SortDirection.DESC else column.asc()
        query = (
            select(ServiceModel)
            .where(*self._search_filter(search))
            .order_by(ordering, ServiceModel.id.asc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return [_to_service(row) for row in result.scalars().all()]

    async def versions_of(self, service_id: int) -> list[ServiceVersion]:
        result = await self.session.execute(
            select(ServiceVersionModel)
            .where(ServiceVersionModel.service_id == service_id)
            .order_by(
                ServiceVersionModel.created_at.desc(),
                ServiceVersionModel.id.desc(),
            )
        )
        return [_to_version(row) for row in result.scalars().all()]

    async def get_by_id(self, service_id: int) -> Service | None:
        result = await self.session.execute(
            select(ServiceModel).where(ServiceModel.id == service_id)
        )
        row = result.scalar_one_or_none()
        return _to_service(row) if row is not None else None
