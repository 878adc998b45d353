"""
Name: Settings Tests

Responsibilities:
  - Required secrets fail fast
  - Production secret policy
  - Value validation and helpers
"""

import pytest
from pydantic import ValidationError

from smartpass.config import Settings

pytestmark = pytest.mark.unit


def test_missing_jwt_secret_fails(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValidationError):
        Settings()


def test_missing_database_url_fails(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ValidationError):
        Settings()


def test_blank_jwt_secret_fails(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "   ")
    with pytest.raises(ValidationError):
        Settings()


def test_defaults():
    settings = Settings()

    assert settings.jwt_expires_days == 7
    assert settings.port == 3000
    assert settings.allow_open_registration is False
    assert settings.db_statement_timeout_ms == 5000
    assert settings.max_body_bytes == 1024 * 1024


def test_bcrypt_rounds_are_read_from_env():
    assert Settings().bcrypt_rounds == 4


@pytest.mark.parametrize("rounds", ["3", "32"])
def test_bcrypt_rounds_out_of_range(monkeypatch, rounds):
    monkeypatch.setenv("BCRYPT_ROUNDS", rounds)
    with pytest.raises(ValidationError):
        Settings()


def test_production_rejects_known_weak_secret(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("JWT_SECRET", "fallbacksecret123")
    with pytest.raises(ValidationError):
        Settings()


def test_production_rejects_short_secret(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("JWT_SECRET", "x" * 31)
    with pytest.raises(ValidationError):
        Settings()


def test_production_accepts_strong_secret(monkeypatch):
    monkeypatch.setenv("APP_ENV", "Production")
    monkeypatch.setenv("JWT_SECRET", "k" * 48)

    settings = Settings()

    assert settings.is_production() is True
    assert settings.is_test() is False


def test_pool_max_below_min_fails(monkeypatch):
    monkeypatch.setenv("DB_POOL_MIN_SIZE", "5")
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "2")
    with pytest.raises(ValidationError):
        Settings()


def test_allowed_origins_list(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test,,")
    assert Settings().get_allowed_origins_list() == ["http://a.test", "http://b.test"]


def test_public_app_url_trailing_slash_stripped(monkeypatch):
    monkeypatch.setenv("PUBLIC_APP_URL", "https://cards.example.com/")
    assert Settings().public_app_url == "https://cards.example.com"


def test_testing_alias_counts_as_test(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    assert Settings().is_test() is True
