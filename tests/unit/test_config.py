"""Tests for settings defaults and production validation."""

import json

import pytest

from service_catalog.common.config import CatalogSettings


class TestDefaults:
    def test_pagination_defaults(self):
        settings = CatalogSettings()
        assert settings.default_page_size == 12
        assert settings.max_page_size == 100
        assert settings.api_prefix == "/api/v1"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("CATALOG_DEFAULT_PAGE_SIZE", "24")
        monkeypatch.setenv("CATALOG_AUTH_TOKENS", json.dumps(
            {"t": {"subject": "dash", "roles": ["viewer"]}}
        ))
        settings = CatalogSettings()
        assert settings.default_page_size == 24
        grant = settings.grant_for("t")
        assert grant.subject == "dash"
        assert grant.roles == ["viewer"]

    def test_grant_for_unknown(self):
        assert CatalogSettings().grant_for("nope") is None

    def test_placeholder_subjects(self):
        grant = CatalogSettings().grant_for("viewer-token")
        assert grant.subject == "viewer"


class TestValidateForProduction:
    def test_placeholders_rejected_in_production(self):
        settings = CatalogSettings(environment="production")
        with pytest.raises(RuntimeError, match="CATALOG_AUTH_TOKENS"):
            settings.validate_for_production()

    def test_placeholders_warn_in_development(self):
        settings = CatalogSettings(environment="development")
        with pytest.warns(UserWarning, match="placeholder"):
            settings.validate_for_production()

    def test_real_tokens_pass(self):
        settings = CatalogSettings(
            environment="production",
            auth_tokens={"k3y": {"subject": "ops", "roles": ["admin"]}},
        )
        settings.validate_for_production()
