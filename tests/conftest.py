"""
Noteful Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── sample_note_data: Field values of one stored note
    ├── db_schema: Empty notes table on the SQLite test database
    ├── seeded_notes: db_schema plus the SEED_NOTES rows
    └── test_client: HTTPX AsyncClient talking to the FastAPI app
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, List, Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

# Override settings BEFORE any noteful import: the engine is built from
# DATABASE_URL when noteful.database is first imported
_TEST_DIR = tempfile.mkdtemp(prefix="noteful_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["DB_CREATE_SCHEMA"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy import func, select  # noqa: E402

from noteful.database import (  # noqa: E402
    async_session_factory,
    create_schema,
    dispose_engine,
    drop_schema,
)
from noteful.models.note import Note  # noqa: E402


# Deliberately out of chronological order so listing has to sort
SEED_NOTES = [
    {"title": "7 things Lady Gaga has in common with cats", "content": "Posuere sollicitudin aliquam.", "minutes": 3},
    {"title": "5 life lessons learned from cats", "content": "Lorem ipsum dolor sit amet.", "minutes": 0},
    {"title": "What the government doesn't want you to know about cats", "content": "Tempus imperdiet nulla.", "minutes": 1},
    {"title": "The most boring article about dogs you'll ever read", "content": None, "minutes": 4},
    {"title": "10 ways cats can help you live to 100", "content": "Feugiat in ante metus.", "minutes": 2},
    {"title": "100% pure cats: 50_50 odds", "content": "Wildcard characters in the title.", "minutes": 5},
]

SEED_BASE_TIME = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_note(mock_db_session):
            mock_db_session.get.return_value = note
            result = await note_service.get_note(mock_db_session, str(note.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_note_data():
    return {
        "id": uuid4(),
        "title": "Why do cats purr?",
        "content": "Nobody is entirely sure.",
        "created": datetime.now(timezone.utc),
    }


# ══════════════════════════════════════════════════════════════════════════
# Database fixtures (SQLite via aiosqlite)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_schema() -> AsyncGenerator[None, None]:
    """
    Fresh notes table for one test, dropped afterwards.

    The engine is disposed at teardown so no pooled connection outlives
    the test's event loop.
    """
    await create_schema()
    yield
    await drop_schema()
    await dispose_engine()


@pytest_asyncio.fixture
async def seeded_notes(db_schema) -> List[Note]:
    """Insert SEED_NOTES and return them as stored."""
    notes = [
        Note(
            title=seed["title"],
            content=seed["content"],
            created=SEED_BASE_TIME + timedelta(minutes=seed["minutes"]),
        )
        for seed in SEED_NOTES
    ]
    async with async_session_factory() as session:
        session.add_all(notes)
        await session.commit()
    return notes


@pytest_asyncio.fixture
async def test_client(db_schema) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from noteful.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def count_notes():
    """Async callable returning the number of stored notes."""
    async def _count() -> int:
        async with async_session_factory() as session:
            result = await session.execute(select(func.count(Note.id)))
            return result.scalar_one()
    return _count


@pytest.fixture
def fetch_note():
    """Async callable loading a note straight from the store (bypassing the API)."""
    async def _fetch(note_id: UUID) -> Optional[Note]:
        async with async_session_factory() as session:
            return await session.get(Note, note_id)
    return _fetch
