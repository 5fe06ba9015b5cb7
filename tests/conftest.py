"""Pytest configuration and fixtures for webcore.

Environment is set before any app import so Settings, the limiter and the
lazily created engine all see the test configuration. Tables are dropped and
recreated for every test that requests the database fixture.
"""

import os
import tempfile
import uuid

_TEST_DB_PATH = os.path.join(tempfile.gettempdir(), f"webcore-test-{uuid.uuid4().hex}.db")
os.environ["DATABASE_URL"] = os.environ.get(
    "TEST_DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_DB_PATH}"
)
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import select  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.infrastructure.persistence import database  # noqa: E402
from app.infrastructure.persistence.models import Role  # noqa: E402
from app.infrastructure.services.seed_service import (  # noqa: E402
    ADMIN_DEFAULT_PASSWORD,
    ADMIN_EMAIL,
    SeedResult,
    SeedService,
)
from app.main import app  # noqa: E402
from tests.helpers import REGULAR_EMAIL, REGULAR_PASSWORD, login  # noqa: E402


def pytest_sessionfinish(session, exitstatus) -> None:
    if os.path.exists(_TEST_DB_PATH):
        os.remove(_TEST_DB_PATH)


@pytest.fixture
async def database_ready() -> None:
    """Fresh schema on the process engine; engine disposed afterwards."""
    database._ensure_engine()
    assert database.engine is not None
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.drop_all)
        await conn.run_sync(database.Base.metadata.create_all)
    yield
    await database.dispose_engine()


@pytest.fixture
async def db_session(database_ready) -> AsyncSession:
    """Session for repository/service tests. Commits are up to the test."""
    assert database.AsyncSessionLocal is not None
    async with database.AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def seeded(database_ready) -> SeedResult:
    """Run the seed once and commit."""
    assert database.AsyncSessionLocal is not None
    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            result = await SeedService(session).run()
    return result


@pytest.fixture
async def client(database_ready) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def admin_headers(client: AsyncClient, seeded: SeedResult) -> dict[str, str]:
    return await login(client, ADMIN_EMAIL, ADMIN_DEFAULT_PASSWORD)


@pytest.fixture
async def user_role_id(seeded: SeedResult) -> str:
    assert database.AsyncSessionLocal is not None
    async with database.AsyncSessionLocal() as session:
        result = await session.execute(select(Role.id).where(Role.name == "user"))
        return result.scalar_one()


@pytest.fixture
async def regular_user(
    client: AsyncClient, admin_headers: dict[str, str], user_role_id: str
) -> dict:
    """A user holding only the 'user' role (no permissions), created via the API."""
    response = await client.post(
        "/api/users",
        json={
            "email": REGULAR_EMAIL,
            "username": "janedoe",
            "password": REGULAR_PASSWORD,
            "first_name": "Jane",
            "last_name": "Doe",
            "role_ids": [user_role_id],
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["user"]


@pytest.fixture
async def user_headers(client: AsyncClient, regular_user: dict) -> dict[str, str]:
    return await login(client, REGULAR_EMAIL, REGULAR_PASSWORD)
