"""Settings tests."""

import pytest

from account_api.auth.jwt import ConfigurationError
from account_api.config import GATEABLE_ROUTES, Settings
from account_api.main import create_app


def test_defaults(monkeypatch):
    monkeypatch.delenv("ACCOUNT_BCRYPT_ROUNDS", raising=False)
    settings = Settings()
    assert settings.mongo_uri == "mongodb://localhost:27017"
    assert settings.mongo_database == "account"
    assert settings.access_token_expire_minutes == 15
    assert settings.refresh_token_expire_hours == 8
    assert settings.bcrypt_rounds == 12
    assert settings.static_gate_routes == set(GATEABLE_ROUTES)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ACCOUNT_MONGO_URI", "mongodb://db.internal:27017")
    monkeypatch.setenv("ACCOUNT_STATIC_GATE_ROUTES", '["login", "register"]')
    settings = Settings()
    assert settings.mongo_uri == "mongodb://db.internal:27017"
    assert settings.static_gate_routes == {"login", "register"}
    assert settings.is_gated("login")
    assert not settings.is_gated("not_found")


def test_production_requires_secrets(monkeypatch):
    monkeypatch.delenv("ACCOUNT_SIGNING_KEY")
    with pytest.raises(ValueError, match="ACCOUNT_SIGNING_KEY"):
        Settings(environment="production")


def test_bcrypt_rounds_bounds():
    with pytest.raises(ValueError):
        Settings(bcrypt_rounds=3)


def test_app_refuses_empty_signing_secret():
    settings = Settings(environment="development", refresh_signing_key="")
    with pytest.raises(ConfigurationError):
        create_app(settings)
