"""In-memory ServiceStore, a drop-in substitute for the SQL store."""

import itertools
from datetime import datetime, timezone

from service_catalog.catalog.domain import (
    Service,
    ServiceVersion,
    SortDirection,
    SortField,
)


class InMemoryServiceStore:
    """Holds services and versions in memory.

    Substring search is case-insensitive, mirroring SQLite's LIKE.
    Set ``fail_with`` to an exception to make every call raise it.
    """

    def __init__(self):
        self._services: dict[int, Service] = {}
        self._versions: list[ServiceVersion] = []
        self.fail_with: Exception | None = None
        self.calls: list[str] = []
        # Ids are never reused, even after delete_service.
        self._service_ids = itertools.count(1)
        self._version_ids = itertools.count(1)

    # ── Seeding ──

    def add_service(
        self,
        name: str,
        description: str = "",
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> Service:
        if any(s.name == name for s in self._services.values()):
            raise ValueError(f"Service name already exists: {name!r}")
        now = datetime.now(timezone.utc)
        service = Service(
            id=next(self._service_ids),
            name=name,
            description=description,
            created_at=created_at or now,
            updated_at=updated_at or created_at or now,
        )
        self._services[service.id] = service
        return service

    def add_version(
        self, service_id: int, version: str, created_at: datetime | None = None,
    ) -> ServiceVersion:
        if service_id not in self._services:
            raise ValueError(f"Unknown service id: {service_id}")
        if any(
            v.service_id == service_id and v.version == version
            for v in self._versions
        ):
            raise ValueError(f"Duplicate version {version!r} for service {service_id}")
        record = ServiceVersion(
            id=next(self._version_ids),
            service_id=service_id,
            version=version,
            created_at=created_at or datetime.now(timezone.utc),
        )
        self._versions.append(record)
        return record

    def delete_service(self, service_id: int) -> bool:
        """Remove a service and, with it, all of its versions."""
        if self._services.pop(service_id, None) is None:
            return False
        self._versions = [v for v in self._versions if v.service_id != service_id]
        return True

    # ── ServiceStore ──

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    def _matching(self, search: str) -> list[Service]:
        if not search:
            return list(self._services.values())
        needle = search.casefold()
        return [
            s for s in self._services.values()
            if needle in s.name.casefold() or needle in s.description.casefold()
        ]

    async def count_matching(self, search: str) -> int:
        self._record("count_matching")
        return len(self._matching(search))

    async def list_matching(
        self,
        search: str,
        sort_by: SortField,
        sort_dir: SortDirection,
        limit: int,
        offset: int,
    ) -> list[Service]:
        self._record("list_matching")
        rows = sorted(self._matching(search), key=lambda s: s.id)
        # Stable sort keeps id order among equal keys.
        rows.sort(
            key=lambda s: getattr(s, sort_by.value),
            reverse=sort_dir is SortDirection.DESC,
        )
        return rows[offset:offset + limit]

    async def versions_of(self, service_id: int) -> list[ServiceVersion]:
        self._record("versions_of")
        return sorted(
            (v for v in self._versions if v.service_id == service_id),
            key=lambda v: (v.created_at, v.id),
            reverse=True,
        )

    async def get_by_id(self, service_id: int) -> Service | None:
        self._record("get_by_id")
        return self._services.get(service_id)
