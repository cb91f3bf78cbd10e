import asyncio
import inspect
import os

os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from argon2 import PasswordHasher  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from jwtpizza.auth import password as password_module  # noqa: E402
from jwtpizza.auth.jwt import TokenCodec  # noqa: E402
from jwtpizza.core.config import Settings  # noqa: E402
from jwtpizza.core.database import Database  # noqa: E402
from jwtpizza.main import create_app  # noqa: E402

TEST_SECRET = "test-secret-key-for-testing-only-do-not-use-in-production"


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Cheap Argon2 parameters; production parameters cost ~64MB per hash."""
    monkeypatch.setattr(
        password_module,
        "ph",
        PasswordHasher(time_cost=1, memory_cost=8, parallelism=1, hash_len=16, salt_len=16),
    )


@pytest.fixture
def settings(tmp_path):
    return Settings(
        jwt_secret_key=TEST_SECRET,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'jwtpizza_test.db'}",
        default_admin_password="admin",
        log_level="WARNING",
        log_json=False,
    )


@pytest.fixture
def codec(settings):
    return TokenCodec(settings.jwt_secret_key)


@pytest.fixture
def database(settings):
    """
    Fresh schema in a per-test SQLite file.

    NullPool: every async test runs in its own event loop, so connections
    must not outlive the loop that opened them.
    """
    db = Database(settings.database_url, poolclass=NullPool)
    asyncio.run(db.init())
    yield db
    asyncio.run(db.close())


@pytest.fixture
def client(settings):
    """HTTP client against an app with its own database (admin a@jwt.com / admin)."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def pytest_pyfunc_call(pyfuncitem):
    if inspect.iscoroutinefunction(pyfuncitem.obj):
        call_kwargs = {
            name: pyfuncitem.funcargs[name]
            for name in pyfuncitem._fixtureinfo.argnames
            if name in pyfuncitem.funcargs
        }
        asyncio.run(pyfuncitem.obj(**call_kwargs))
        return True
    return None
