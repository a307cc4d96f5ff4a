"""Catalog API router — maps query/path parameters onto the query service."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from service_catalog.catalog.domain import ListQuery
from service_catalog.catalog.schemas import ServiceListResponse, ServiceResponse
from service_catalog.common.exceptions import (
    InvalidArgumentError,
    ServiceNotFoundError,
)
from service_catalog.common.security import require_roles

logger = logging.getLogger(__name__)

router = APIRouter()

READ_ROLES = ("admin", "viewer")


def _get_db():
    from service_catalog.deps import get_db
    return get_db()


def _get_service(session):
    from service_catalog.deps import get_catalog_service
    return get_catalog_service(session)


def _positive_int(raw: str | None, default: int) -> int:
    """Parse a positive integer, treating anything else as absent."""
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@router.get("/services", response_model=ServiceListResponse)
async def list_services(
    search: str | None = Query(None),
    sort_by: str | None = Query(None),
    sort_dir: str | None = Query(None),
    page: str | None = Query(None),
    page_size: str | None = Query(None),
    _=Depends(require_roles(*READ_ROLES)),
):
    from service_catalog.common.config import get_settings

    query = ListQuery(
        search=search or "",
        sort_by=sort_by or "",
        sort_dir=sort_dir or "",
        page=_positive_int(page, 1),
        page_size=_positive_int(page_size, get_settings().default_page_size),
    )
    db = _get_db()
    try:
        async with db.get_session() as session:
            result = await _get_service(session).list_services(query)
    except Exception:
        logger.exception("Error listing services")
        raise HTTPException(status_code=500, detail="Internal server error")
    return ServiceListResponse.from_result(result)


@router.get("/services/{service_id}", response_model=ServiceResponse)
async def get_service(service_id: str, _=Depends(require_roles(*READ_ROLES))):
    try:
        parsed_id = int(service_id)
    except ValueError:
        raise HTTPException(status_code=404, detail="Service not found")

    db = _get_db()
    try:
        async with db.get_session() as session:
            item = await _get_service(session).get_service_by_id(parsed_id)
    except (InvalidArgumentError, ServiceNotFoundError) as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception:
        logger.exception("Error getting service %s", parsed_id)
        raise HTTPException(status_code=500, detail="Internal server error")
    return ServiceResponse.from_composite(item)
