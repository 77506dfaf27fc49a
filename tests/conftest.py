"""Test fixtures — a fresh in-memory SQLite database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own aiosqlite in-memory engine (StaticPool keeps the
   single connection alive, so every session sees the same database).
2. Tables are created from the ORM metadata, then dropped afterwards.
3. The app's get_db dependency is overridden to yield the test session.

Env vars are set before tasktrack is imported so the settings singleton
picks them up: cheap bcrypt rounds and a throwaway SQLite URL.
"""

import os

os.environ.setdefault("TASKTRACK_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TASKTRACK_BCRYPT_ROUNDS", "4")
os.environ.setdefault("TASKTRACK_JWT_SECRET", "test-secret-key-with-at-least-32-bytes!")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from tasktrack.db.engine import get_db  # noqa: E402
from tasktrack.db.models import Base  # noqa: E402
from tasktrack.main import app  # noqa: E402
from tasktrack.services.user_service import UserService  # noqa: E402

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"
PASSWORD = "password_123"


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a brand-new in-memory database."""
    engine = create_async_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture()
async def make_client(db_session):
    """Factory for HTTP clients that share the test database.

    Learn: Auth lives in cookies, and httpx keeps one cookie jar per
    client — so "user A" and "user B" each need their own client.
    """
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    clients = []

    def _make() -> AsyncClient:
        transport = ASGITransport(app=app)
        ac = AsyncClient(transport=transport, base_url="http://test")
        clients.append(ac)
        return ac

    yield _make

    for ac in clients:
        await ac.aclose()
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client(make_client):
    """Anonymous HTTP client (no cookies yet)."""
    return make_client()


async def register_and_login(ac: AsyncClient, email: str, name: str = "User") -> None:
    """Register `email` and log in, leaving the token cookies in `ac`."""
    r = await ac.post(
        "/api/v1/users/register",
        json={"name": name, "email": email, "password": PASSWORD},
    )
    assert r.status_code == 201, r.text
    r = await ac.post(
        "/api/v1/auth/login",
        json={"email": email, "password": PASSWORD},
    )
    assert r.status_code == 200, r.text


@pytest_asyncio.fixture()
async def alice(make_client):
    ac = make_client()
    await register_and_login(ac, "alice@example.com", "Alice")
    return ac


@pytest_asyncio.fixture()
async def bob(make_client):
    ac = make_client()
    await register_and_login(ac, "bob@example.com", "Bob")
    return ac


@pytest_asyncio.fixture()
async def users(db_session):
    """Two registered users, created directly through the service layer."""
    svc = UserService(db_session)
    u1 = await svc.register("User One", "one@example.com", PASSWORD)
    u2 = await svc.register("User Two", "two@example.com", PASSWORD)
    return u1, u2
