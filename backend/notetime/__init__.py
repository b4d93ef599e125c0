"""
NoteTime Backend — Application Package Initializer
===================================================

What: Marks the `notetime` directory as a Python package.
Who:  Used by uvicorn (`notetime.main:app`), Alembic, pytest and the seed tool.

Architecture Note:
    The backend is a thin HTTP-to-SQL layer:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     NoteService (Data Access)       │  ← SQL statements, row mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy on SQLite
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
