"""Domain types shared by the stores, the query service and the router."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

# Largest integer a SQL store accepts as a bound INTEGER parameter.
MAX_STORE_INT = 2**63 - 1


@dataclass(frozen=True)
class Service:
    """A named offering in the catalog."""

    id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ServiceVersion:
    """A labeled release belonging to exactly one service."""

    id: int
    service_id: int
    version: str
    created_at: datetime


@dataclass(frozen=True)
class ServiceWithVersions:
    """A service paired with its versions, newest first. Never persisted."""

    service: Service
    versions: list[ServiceVersion] = field(default_factory=list)


class SortField(str, Enum):
    NAME = "name"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"

    @classmethod
    def parse(cls, value: str | None) -> "SortField":
        """Map a caller-supplied sort key onto the allow-list, defaulting to name."""
        return _SORT_ALIASES.get((value or "").strip(), cls.NAME)


_SORT_ALIASES = {
    "name": SortField.NAME,
    "created_at": SortField.CREATED_AT,
    "createdAt": SortField.CREATED_AT,
    "updated_at": SortField.UPDATED_AT,
    "updatedAt": SortField.UPDATED_AT,
}


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortDirection":
        """Case-insensitive match on asc/desc, defaulting to asc."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.ASC


@dataclass
class ListQuery:
    """Raw, request-shaped list parameters. Not yet validated."""

    search: str = ""
    sort_by: str = ""
    sort_dir: str = ""
    page: int = 1
    page_size: int = 12


@dataclass(frozen=True)
class PageRequest:
    """Validated list parameters: page >= 1 and 1 <= page_size <= max."""

    search: str
    sort_by: SortField
    sort_dir: SortDirection
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class ListResult:
    """One page of services plus pagination metadata."""

    items: list[ServiceWithVersions]
    total: int
    page: int
    page_size: int
    total_pages: int
