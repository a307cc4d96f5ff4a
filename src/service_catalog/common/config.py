"""Service Catalog configuration via pydantic-settings."""

import warnings
from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

# Placeholder bearer tokens. They stand in for a real credential validator
# and must be replaced outside development.
_PLACEHOLDER_TOKENS: dict[str, dict] = {
    "admin-token": {"subject": "admin", "roles": ["admin"]},
    "viewer-token": {"subject": "viewer", "roles": ["viewer"]},
}


class TokenGrant(BaseModel):
    """Caller identity and roles granted to one bearer token."""
    subject: str
    roles: list[str] = []


class CatalogSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CATALOG_")

    environment: str = "development"

    # Database
    db_url: str = "sqlite+aiosqlite:///./data/services.db"
    seed_on_startup: bool = True

    # API
    api_title: str = "Service Catalog"
    api_version: str = "0.1.0"
    api_prefix: str = "/api/v1"
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    # Auth: JSON mapping of bearer token to grant, e.g.
    # '{"s3cr3t": {"subject": "ops", "roles": ["admin"]}}'
    auth_tokens: dict[str, TokenGrant] = {
        token: TokenGrant(**grant) for token, grant in _PLACEHOLDER_TOKENS.items()
    }

    # Pagination
    default_page_size: int = 12  # matches the 12-card grid of the web UI
    max_page_size: int = 100

    def grant_for(self, token: str) -> TokenGrant | None:
        """Return the grant for a bearer token, or None if unknown."""
        return self.auth_tokens.get(token)

    def validate_for_production(self) -> None:
        """Raise if placeholder tokens are used in non-development environments."""
        placeholders = sorted(
            token for token in _PLACEHOLDER_TOKENS if token in self.auth_tokens
        )
        if not placeholders:
            return

        if self.environment != "development":
            raise RuntimeError(
                f"Placeholder auth tokens detected in '{self.environment}' environment: "
                f"{', '.join(placeholders)}. Set CATALOG_AUTH_TOKENS to a JSON mapping "
                "of real tokens to roles."
            )

        warnings.warn(
            "Using placeholder auth tokens — set CATALOG_AUTH_TOKENS for production",
            UserWarning,
            stacklevel=2,
        )


@lru_cache
def get_settings() -> CatalogSettings:
    settings = CatalogSettings()
    settings.validate_for_production()
    return settings
