"""Server test fixtures — in-memory database + in-process HTTP client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Tables created explicitly: ASGITransport does not run the lifespan
"""

import httpx
import pytest

from notesync.config import Settings
from notesync.infrastructure.database import DatabaseSessionManager
from notesync.server.main import create_app


@pytest.fixture
async def server_db():
    db = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def server_app(server_db):
    return create_app(Settings(), db=server_db)


@pytest.fixture
async def http(server_app):
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=server_app), base_url="http://test",
    ) as c:
        yield c


async def _login(http, email: str, password: str = "password1") -> dict:
    await http.post("/register", json={"email": email, "password": password})
    res = await http.post("/login", json={"email": email, "password": password})
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
async def auth_headers(http):
    return await _login(http, "ana@example.com")


@pytest.fixture
async def other_headers(http):
    return await _login(http, "bob@example.com")
