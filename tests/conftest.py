"""Shared fixtures: an in-memory database, an API client and identities."""

from collections.abc import Callable
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Register every model on Base.metadata
import app.domains.itinerary.models  # noqa: F401
import app.domains.user.models  # noqa: F401
from app.core.auth import Identity, create_access_token
from app.infra.database import Base, get_db
from app.main import create_application


@pytest_asyncio.fixture
async def engine():
    """One shared in-memory SQLite connection with working savepoints."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def application(session_factory):
    """The API with its database dependency pointed at the test engine."""
    application = create_application()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest_asyncio.fixture
async def client(application):
    async with AsyncClient(
        transport=ASGITransport(app=application),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def alice() -> Identity:
    return Identity(id=UUID("11111111-1111-4111-8111-111111111111"), email="alice@example.com")


@pytest.fixture
def bob() -> Identity:
    return Identity(id=UUID("22222222-2222-4222-8222-222222222222"), email="bob@example.com")


@pytest.fixture
def auth_headers() -> Callable[[Identity], dict[str, str]]:
    """Build an Authorization header for an identity."""

    def _headers(identity: Identity) -> dict[str, str]:
        token = create_access_token(identity.id, identity.email)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def tokyo_payload() -> dict:
    """A daily itinerary as the web client sends it."""
    return {
        "title": "Tokyo Week",
        "description": "Seven days of ramen and temples",
        "destination": "Tokyo, Japan",
        "isPublic": True,
        "budgetLevel": 3,
        "tags": ["food tour", "Adventure"],
        "days": [
            {
                "dayNumber": 1,
                "date": "2025-04-01",
                "title": "Arrival",
                "activities": [
                    {"title": "Check in", "location": "Shinjuku", "startTime": "15:00"},
                    {"title": "Ramen dinner", "location": "Omoide Yokocho"},
                ],
            },
            {
                "dayNumber": 2,
                "title": "Asakusa",
                "activities": [
                    {"title": "Senso-ji", "startTime": "09:00", "endTime": "11:00"},
                ],
            },
        ],
    }
