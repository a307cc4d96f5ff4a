"""Bearer-token authentication and role checks."""

from dataclasses import dataclass, field

from fastapi import Header, HTTPException

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class Principal:
    """Authenticated caller available to request handlers."""
    subject: str
    roles: frozenset[str] = field(default_factory=frozenset)

    def has_any(self, roles: frozenset[str]) -> bool:
        return bool(self.roles & roles)


def authenticate(authorization: str | None) -> Principal:
    """Resolve an ``Authorization`` header value into a Principal.

    Raises 401 for a missing, malformed, or unknown token.
    """
    from service_catalog.common.config import get_settings

    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise HTTPException(status_code=401, detail="Unauthorized")

    token = authorization[len(BEARER_PREFIX):].strip()
    grant = get_settings().grant_for(token)
    if grant is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    return Principal(subject=grant.subject, roles=frozenset(grant.roles))


def require_roles(*allowed: str):
    """Build a FastAPI dependency admitting callers holding any of ``allowed``."""
    allowed_set = frozenset(allowed)

    async def dependency(
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> Principal:
        principal = authenticate(authorization)
        if not principal.has_any(allowed_set):
            raise HTTPException(status_code=403, detail="Forbidden")
        return principal

    return dependency
