"""
NoteTime Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite file under pytest's tmp_path, an app
       built by create_app() against it, and the schema created up front.

Fixture Hierarchy:
    ├── test_settings: Settings pointing at a scratch database
    ├── app: FastAPI instance with tables created
    ├── test_client: HTTPX AsyncClient talking to `app` in-process
    ├── db_session: AsyncSession on the same database (service tests)
    └── mock_db_session: AsyncMock session for failure-path unit tests
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE notetime imports: notetime.main builds a default app at import
_scratch = tempfile.mkdtemp(prefix="notetime_test_")
os.environ["DB_PATH"] = os.path.join(_scratch, "default.db")
os.environ["STATIC_DIR"] = os.path.join(_scratch, "no-frontend")
os.environ["LOG_LEVEL"] = "WARNING"

from notetime.config import Settings  # noqa: E402
from notetime.database import init_db  # noqa: E402
from notetime.main import create_app  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings for a fresh database and no frontend bundle."""
    return Settings(
        db_path=str(tmp_path / "notetime.db"),
        static_dir=str(tmp_path / "frontend"),
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(test_settings):
    """
    Application with its schema created.

    ASGITransport does not run the lifespan, so init_db is called here the
    way the lifespan would on startup.
    """
    application = create_app(test_settings)
    await init_db(application.state.engine)
    yield application
    await application.state.engine.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed directly to the app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def db_session(app):
    """A real AsyncSession on the test database."""
    async with app.state.session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        await note_service.list_notes(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_note_payload():
    """Body for POST /api/notes."""
    return {"title": "X", "content": "Y"}
