"""Shared fixtures: in-memory SQLite per test, ASGI client with get_db overridden."""

import os

# Must be set before app modules read settings
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["DATABASE_URI"] = "sqlite+aiosqlite://"
os.environ["REDIS_URL"] = ""
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_SECRET"] = ""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.services.seeding import seed_catalog

API = "/api/v1"
PASSWORD = "correct-horse-9"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def seeded(session_maker):
    async with session_maker() as session:
        await seed_catalog(session)
        await session.commit()


async def register(client, email="ana@example.com", password=PASSWORD, name="Ana"):
    return await client.post(
        f"{API}/auth/register",
        json={"name": name, "email": email, "password": password},
    )


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth(client):
    """Registered user: {"user", "access_token", "refresh_token", "headers"}."""
    resp = await register(client)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    body["headers"] = bearer(body["access_token"])
    return body


@pytest.fixture
async def other_auth(client):
    resp = await register(client, email="ben@example.com", name="Ben")
    assert resp.status_code == 201, resp.text
    body = resp.json()
    body["headers"] = bearer(body["access_token"])
    return body
