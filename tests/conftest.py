"""Shared test fixtures for the Journey API."""

import os

# Point the application engine at SQLite before journey.core.database is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from journey.core.database import get_db
from journey.core.init_db import init_db
from journey.dependencies.notifications import get_dispatcher, get_mailer
from journey.main import app
from journey.services.mailer import Mailer
from journey.services.notifications import NotificationDispatcher


class RecordingTransport:
    """Stands in for the SMTP transport and records every message."""

    def __init__(self):
        self.sent = []
        self.error = None

    def __call__(self, to_email: str, subject: str, body: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append({"to": to_email, "subject": subject, "body": body})


@pytest_asyncio.fixture
async def engine(tmp_path):
    """A fresh SQLite database per test with foreign keys enforced."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'journey.db'}")

    @event.listens_for(test_engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def mailer(session_factory, transport):
    return Mailer(session_factory=session_factory, transport=transport)


@pytest_asyncio.fixture
async def dispatcher():
    dispatcher = NotificationDispatcher()
    yield dispatcher
    await dispatcher.drain()


@pytest_asyncio.fixture
async def client(session_factory, mailer, dispatcher):
    """HTTP client bound to the app with storage and mail wired to the test fixtures."""

    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def trip_payload():
    return {
        "destination": "Florianópolis",
        "starts_at": "2024-06-01T10:00:00",
        "ends_at": "2024-06-10T18:00:00",
        "emails_to_invite": ["ana@example.com", "bruno@example.com"],
        "owner_name": "Carla Souza",
        "owner_email": "carla@example.com",
    }


@pytest_asyncio.fixture
async def trip_id(client, trip_payload):
    response = await client.post("/trips", json=trip_payload)
    assert response.status_code == 201
    return response.json()["trip_id"]
