from datetime import datetime, timedelta, timezone
import logging

import pytest
from fastapi.testclient import TestClient

from identity_platform.identity_platform.auth_service.config import Settings
from identity_platform.identity_platform.auth_service.directory import InMemoryUserDirectory
from identity_platform.identity_platform.auth_service.hashing import PasswordHasher
from identity_platform.identity_platform.auth_service.main import create_app
from identity_platform.identity_platform.auth_service.service import AuthService
from identity_platform.identity_platform.auth_service.tokens import TokenCodec

TEST_SECRET = "test-secret-key-with-at-least-32-bytes!"


class FakeClock:
    def __init__(self, now=None):
        self.now = now or datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


@pytest.fixture(autouse=True)
def restore_root_logging():
    # create_app() reconfigures the root logger
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        JWT_SECRET=TEST_SECRET,
        TOKEN_TTL_SECONDS=3600,
        PASSWORD_HASH_ROUNDS=1000,
        DATABASE_URL=f"sqlite:///{tmp_path / 'auth.db'}",
        _env_file=None,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=1000)


@pytest.fixture
def codec(clock):
    return TokenCodec(TEST_SECRET, ttl_seconds=3600, clock=clock)


@pytest.fixture
def directory():
    return InMemoryUserDirectory()


@pytest.fixture
def service(directory, hasher, codec):
    return AuthService(directory=directory, hasher=hasher, codec=codec)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c
