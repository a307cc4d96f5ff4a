"""Pydantic schemas for catalog endpoints."""

from datetime import datetime

from service_catalog.catalog.domain import ListResult, ServiceWithVersions
from service_catalog.common.schemas import CamelModel


class ServiceVersionResponse(CamelModel):
    id: int
    service_id: int
    version: str
    created_at: datetime


class ServiceResponse(CamelModel):
    """A service with its fields flattened next to its versions."""
    id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime
    versions: list[ServiceVersionResponse] = []

    @classmethod
    def from_composite(cls, item: ServiceWithVersions) -> "ServiceResponse":
        service = item.service
        return cls(
            id=service.id,
            name=service.name,
            description=service.description,
            created_at=service.created_at,
            updated_at=service.updated_at,
            versions=[
                ServiceVersionResponse(
                    id=v.id, service_id=v.service_id,
                    version=v.version, created_at=v.created_at,
                )
                for v in item.versions
            ],
        )


class ServiceListResponse(CamelModel):
    items: list[ServiceResponse]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def from_result(cls, result: ListResult) -> "ServiceListResponse":
        return cls(
            items=[ServiceResponse.from_composite(i) for i in result.items],
            total=result.total,
            page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
        )
