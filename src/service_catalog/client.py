"""
CatalogClient SDK — sync client for the Service Catalog API.

Used by scripts and other services to browse the catalog over HTTP.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

import httpx


class CatalogClientError(Exception):
    """Raised when a request fails or the server answers with an error."""

    def __init__(self, message: str, code: str = "CLIENT_ERROR", status_code: Optional[int] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


@dataclass
class ClientVersion:
    id: int
    service_id: int
    version: str
    created_at: Optional[datetime] = None


@dataclass
class ClientService:
    """Service info returned by the SDK."""

    id: int
    name: str
    description: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    versions: list[ClientVersion] = field(default_factory=list)

    @property
    def latest_version(self) -> Optional[str]:
        return self.versions[0].version if self.versions else None


@dataclass
class ClientListResult:
    """Result of list_services() call."""

    items: list[ClientService]
    total: int = 0
    page: int = 1
    page_size: int = 12
    total_pages: int = 0


def _parse_dt(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _parse_service(data: dict[str, Any]) -> ClientService:
    return ClientService(
        id=data["id"],
        name=data["name"],
        description=data.get("description", ""),
        created_at=_parse_dt(data.get("createdAt")),
        updated_at=_parse_dt(data.get("updatedAt")),
        versions=[
            ClientVersion(
                id=v["id"],
                service_id=v["serviceId"],
                version=v["version"],
                created_at=_parse_dt(v.get("createdAt")),
            )
            for v in data.get("versions", [])
        ],
    )


class CatalogClient:
    """
    Synchronous HTTP client for the Service Catalog API.

    Retries timeouts, transport errors, 5xx and 429 with exponential backoff.
    """

    def __init__(
        self,
        server_url: str = "http://localhost:8080",
        token: Optional[str] = None,
        api_prefix: str = "/api/v1",
        timeout: int = 30,
        max_retries: int = 3,
        retry_backoff_base: float = 0.5,
    ):
        self.server_url = server_url.rstrip("/")
        self.token = token
        self.api_prefix = api_prefix.rstrip("/")
        self.max_retries = max_retries
        self.retry_backoff_base = retry_backoff_base
        self._http = httpx.Client(base_url=self.server_url, timeout=timeout)

    def _headers(self) -> dict[str, str]:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _backoff(self, attempt: int) -> bool:
        """Sleep before the next attempt; False when attempts are exhausted."""
        if attempt >= self.max_retries - 1:
            return False
        time.sleep(self.retry_backoff_base * (2 ** attempt))
        return True

    def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        last_error = ""
        for attempt in range(self.max_retries):
            try:
                resp = self._http.get(
                    f"{self.api_prefix}{path}", params=params, headers=self._headers(),
                )
            except httpx.TimeoutException:
                last_error = "timeout"
                if self._backoff(attempt):
                    continue
                break
            except httpx.HTTPError as e:
                last_error = str(e)
                if self._backoff(attempt):
                    continue
                break

            if resp.status_code >= 500 or resp.status_code == 429:
                last_error = f"HTTP {resp.status_code}"
                if self._backoff(attempt):
                    continue
                raise CatalogClientError(
                    f"Server error: {resp.status_code}", "SERVER_ERROR", resp.status_code,
                )
            if resp.status_code == 404:
                raise CatalogClientError(_detail(resp), "NOT_FOUND", 404)
            if resp.status_code in (401, 403):
                raise CatalogClientError(_detail(resp), "UNAUTHORIZED", resp.status_code)
            if resp.status_code >= 400:
                raise CatalogClientError(
                    f"Client error: {resp.status_code}", "CLIENT_ERROR", resp.status_code,
                )
            try:
                return resp.json()
            except ValueError:
                raise CatalogClientError("Invalid JSON response", "JSON_ERROR", resp.status_code)

        raise CatalogClientError(
            f"All {self.max_retries} retries exhausted: {last_error}", "CONNECTION_ERROR",
        )

    def list_services(
        self,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_dir: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> ClientListResult:
        params = {
            k: v for k, v in {
                "search": search,
                "sort_by": sort_by,
                "sort_dir": sort_dir,
                "page": page,
                "page_size": page_size,
            }.items() if v is not None
        }
        data = self._get("/services", params=params)
        return ClientListResult(
            items=[_parse_service(s) for s in data.get("items", [])],
            total=data.get("total", 0),
            page=data.get("page", 1),
            page_size=data.get("pageSize", 12),
            total_pages=data.get("totalPages", 0),
        )

    def get_service(self, service_id: int) -> ClientService:
        return _parse_service(self._get(f"/services/{service_id}"))

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "CatalogClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


def _detail(resp: httpx.Response) -> str:
    try:
        return resp.json().get("detail", "")
    except ValueError:
        return resp.text
