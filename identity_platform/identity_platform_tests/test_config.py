import pytest
from pydantic import ValidationError

from identity_platform.identity_platform.auth_service.config import DEV_JWT_SECRET, Settings, get_settings


def test_defaults(monkeypatch):
    for name in ("JWT_SECRET", "TOKEN_TTL_SECONDS", "PASSWORD_HASH_ROUNDS", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.JWT_ALGORITHM == "HS256"
    assert settings.TOKEN_TTL_SECONDS == 7200
    assert settings.PASSWORD_HASH_SCHEME == "pbkdf2_sha256"
    assert settings.uses_dev_secret is True


def test_loaded_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-env-secret-key-that-is-long-enough")
    monkeypatch.setenv("TOKEN_TTL_SECONDS", "60")
    settings = Settings(_env_file=None)
    assert settings.JWT_SECRET == "from-env-secret-key-that-is-long-enough"
    assert settings.TOKEN_TTL_SECONDS == 60
    assert settings.uses_dev_secret is False


def test_settings_are_immutable(settings):
    with pytest.raises(ValidationError):
        settings.JWT_SECRET = DEV_JWT_SECRET


def test_negative_ttl_is_rejected():
    with pytest.raises(ValidationError):
        Settings(TOKEN_TTL_SECONDS=-1, _env_file=None)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()


def test_non_hmac_algorithm_is_rejected():
    with pytest.raises(ValidationError):
        Settings(JWT_ALGORITHM="RS256", _env_file=None)
