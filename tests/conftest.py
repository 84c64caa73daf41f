"""
Pytest configuration and fixtures.
"""

from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from repairdesk.core.database import Database, get_db
from repairdesk.main import app


# In-memory SQLite shared by every session of one test
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def test_db() -> AsyncGenerator[Database, None]:
    """Create a fresh test database."""
    database = Database(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await database.connect()
    await database.create_all()

    yield database

    await database.close()


@pytest.fixture
async def db_session(test_db: Database) -> AsyncGenerator[AsyncSession, None]:
    """Session for inspecting or preparing data outside of requests."""
    async with test_db.session() as session:
        yield session


@pytest.fixture
async def client(test_db: Database) -> AsyncGenerator[AsyncClient, None]:
    """Create test client; each request gets its own session and transaction."""

    async def override_get_db():
        async with test_db.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def auth_client(client: AsyncClient) -> AsyncClient:
    """Create authenticated test client."""
    response = await client.get("/get-token")
    tokens = response.json()

    client.headers["Authorization"] = f"Bearer {tokens['access_token']}"

    return client


@pytest.fixture
def create_client(auth_client: AsyncClient):
    """Factory: POST /clients and return the stored client."""

    async def _create(first_name: str = "Ada", last_name: str = "Lovelace", **extra) -> dict:
        payload = {"firstName": first_name, "lastName": last_name, **extra}
        response = await auth_client.post("/clients", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_device(auth_client: AsyncClient):
    """Factory: POST /devices for a client and return the stored device."""

    async def _create(client_id: str, type: str = "laptop", **extra) -> dict:
        payload = {"clientId": client_id, "type": type, **extra}
        response = await auth_client.post("/devices", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_job(auth_client: AsyncClient):
    """Factory: POST /repairs on an existing client and device."""

    async def _create(client_id: str, device_id: str, **job) -> dict:
        payload = {
            "client": {"_id": client_id},
            "device": {"_id": device_id},
            "job": job,
        }
        response = await auth_client.post("/repairs", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
