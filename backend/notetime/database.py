"""
NoteTime Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine factory, session factory, schema bootstrap
       and the FastAPI session dependency.
How:   `create_engine()` builds an async engine for the configured URL and
       enables SQLite foreign keys on every new connection. The application
       factory stores the engine and session factory on `app.state`; each
       request gets its own session through `get_db_session()`.
Who:   Used by main.py (lifespan), route handlers (Depends), the seed tool
       and Alembic.

Connection Model:
    SQLite serializes writers itself; the application performs no locking.
    Each request's session is its unit of work: statements issued by one
    NoteService call commit or roll back together.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notetime.config import Settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, `init_db()` and Alembic.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turns on FK enforcement; SQLite leaves it off per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Build the async engine for the configured store.

    ON DELETE CASCADE on `lines.note_id` only fires while the foreign_keys
    pragma is on, so it is installed as a connect hook for SQLite URLs.
    """
    url = settings.sqlalchemy_url
    engine = create_async_engine(
        url,
        pool_pre_ping=True,
        # Echo SQL queries in DEBUG mode for development visibility
        echo=settings.log_level == "DEBUG",
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    logger.info("Using database at: %s", engine.url.render_as_string(hide_password=True))
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps ORM attributes readable after a commit, so
    NoteService can build responses from objects it has just committed.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Schema Bootstrap ──────────────────────────────────────────────────────
async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables and indexes that do not exist yet.

    Idempotent (CREATE ... IF NOT EXISTS semantics). Errors propagate so a
    store that cannot be opened aborts startup.
    """
    # Registers Note and Line with Base.metadata
    from notetime.models import note  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory on `app.state`
        2. Yields it to the route handler
        3. On success: commits anything the handler left pending
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
