"""
SpacingCard — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── db_engine: In-memory SQLite with tables created, disposed afterwards
    ├── test_client: HTTPX AsyncClient talking to the FastAPI app
    ├── sample_record: A SpacingResponse with default spacing
    ├── mock_api: AsyncMock standing in for SpacingApiClient
    └── local_storage: LocalStorage backed by a temp file
"""

import os

# Override settings for testing BEFORE any application imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_WAIT_ATTEMPTS"] = "3"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from spacingcard.client.api import SpacingApiClient  # noqa: E402
from spacingcard.client.storage import LocalStorage  # noqa: E402
from spacingcard.database import create_tables, dispose_engine, engine  # noqa: E402
from spacingcard.schemas.spacing import SpacingResponse  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
            result = await spacing_service.get_spacing(mock_db_session, "abc")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite database with all tables created.

    Disposing the engine afterwards drops the in-memory database, so every
    test starts from empty tables.
    """
    await create_tables()
    yield engine
    await dispose_engine()


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    HTTPX AsyncClient routed straight into the FastAPI app (no server).

    ASGITransport does not run the lifespan, so startup never waits for a
    real database.
    """
    from spacingcard.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Client Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def sample_record():
    """A freshly created record: every side auto/px."""
    return SpacingResponse(
        id=1,
        user_id=str(uuid4()),
        project_id=str(uuid4()),
        component_id=str(uuid4()),
    )


@pytest.fixture
def mock_api(sample_record):
    """AsyncMock with the SpacingApiClient interface, serving sample_record."""
    api = AsyncMock(spec=SpacingApiClient)
    api.get_spacing.return_value = sample_record
    api.post_spacing.return_value = sample_record.component_id
    api.patch_spacing.return_value = "success"
    return api


@pytest.fixture
def local_storage(tmp_path):
    """LocalStorage in a per-test temporary directory."""
    return LocalStorage(str(tmp_path / "state" / "local_storage.json"))
