"""
Root conftest for the pytest test suite.

This file contains the main fixtures that are used across the entire test suite.

Each test that needs storage gets a fresh in-memory sqlite record store, and
HTTP tests talk to the real application through an httpx ``AsyncClient`` on an
``ASGITransport``, so requests run on the same event loop as the store.

Key Fixtures:
- `initialize_test_db`: Opens a fresh in-memory store and seeds staff accounts.
- `app_for_testing`: The FastAPI application instance.
- `client`: A non-authenticated AsyncClient.
- `admin_headers` / `worker_headers` / `viewer_headers` / `roleless_headers`:
  Bearer headers for the seeded accounts.
- `admin_user` / `worker_user`: The seeded User rows.
"""

import os

# Must be set before the application module is imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from typing import Any, AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from jewelry_api.core.store import RecordStore
from jewelry_api.features.auth.models import User
from jewelry_api.features.auth.security import get_password_hash

# Import the app
from jewelry_api.main import app as actual_app

TEST_PASSWORD = "password123"
# Hashed once; bcrypt is deliberately slow
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)

ADMIN_EMAIL = "admin@example.com"
WORKER_EMAIL = "worker@example.com"
VIEWER_EMAIL = "viewer@example.com"
ROLELESS_EMAIL = "roleless@example.com"


async def add_user(email: str, name: str, role) -> User:
    return await User.create(
        email=email,
        name=name,
        hashed_password=TEST_PASSWORD_HASH,
        role=role,
    )


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture(scope="function")
async def initialize_test_db() -> AsyncGenerator[RecordStore, None]:
    """
    Opens a fresh in-memory record store with its schema and the seeded
    staff accounts, and closes it after the test.
    """
    async with RecordStore("sqlite://:memory:", generate_schemas=True) as store:
        await add_user(ADMIN_EMAIL, "Admin Fixture", "admin")
        await add_user(WORKER_EMAIL, "Worker Fixture", "worker")
        await add_user(VIEWER_EMAIL, "Viewer Fixture", "viewer")
        await add_user(ROLELESS_EMAIL, "Roleless Fixture", None)
        yield store


@pytest.fixture(scope="function")
def app_for_testing() -> FastAPI:
    """
    The application under test. ASGITransport does not run the lifespan, so
    the production record store is never opened; `initialize_test_db`
    provides the store instead.
    """
    return actual_app


@pytest_asyncio.fixture(scope="function")
async def client(
    app_for_testing: FastAPI, initialize_test_db: RecordStore
) -> AsyncGenerator[AsyncClient, Any]:
    """
    Provides a non-authenticated AsyncClient.
    """
    transport = ASGITransport(app=app_for_testing)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


async def _headers_for(app: FastAPI, email: str) -> dict[str, str]:
    user = await User.get(email=email)
    return bearer(app.state.token_verifier.issue(user))


@pytest_asyncio.fixture(scope="function")
async def admin_user(initialize_test_db: RecordStore) -> User:
    return await User.get(email=ADMIN_EMAIL)


@pytest_asyncio.fixture(scope="function")
async def worker_user(initialize_test_db: RecordStore) -> User:
    return await User.get(email=WORKER_EMAIL)


@pytest_asyncio.fixture(scope="function")
async def admin_headers(app_for_testing: FastAPI, initialize_test_db: RecordStore) -> dict[str, str]:
    return await _headers_for(app_for_testing, ADMIN_EMAIL)


@pytest_asyncio.fixture(scope="function")
async def worker_headers(app_for_testing: FastAPI, initialize_test_db: RecordStore) -> dict[str, str]:
    return await _headers_for(app_for_testing, WORKER_EMAIL)


@pytest_asyncio.fixture(scope="function")
async def viewer_headers(app_for_testing: FastAPI, initialize_test_db: RecordStore) -> dict[str, str]:
    """Authenticated, but with a role outside every staff allow-list."""
    return await _headers_for(app_for_testing, VIEWER_EMAIL)


@pytest_asyncio.fixture(scope="function")
async def roleless_headers(app_for_testing: FastAPI, initialize_test_db: RecordStore) -> dict[str, str]:
    """A user whose stored role is unset and therefore read as "worker"."""
    return await _headers_for(app_for_testing, ROLELESS_EMAIL)
