"""
NoteTime Backend — Note and Line SQLAlchemy Models
===================================================

What:  ORM models for the `notes` and `lines` tables.
How:   Inherit from the shared DeclarativeBase; `init_db()` and Alembic both
       read Base.metadata.
Who:   Used by NoteService for every statement it issues.

Table Design:
    - INTEGER PRIMARY KEY AUTOINCREMENT on both tables: ids grow
      monotonically and are never handed out twice, even after deletes.
    - lines.note_id → notes.id ON DELETE CASCADE: deleting a note removes
      its lines inside the database.
    - Timestamps are UTC. SQLite has no timezone-aware column type, so
      UTCDateTime stores naive UTC and hands back aware datetimes.

Indexes:
    idx_notes_created_at     ORDER BY created_at DESC (sort=creation_date)
    idx_notes_last_modified  ORDER BY last_modified DESC (default listing, search)
    idx_lines_note_id        WHERE note_id = :id
    idx_lines_timestamp      ORDER BY timestamp ASC
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import TypeDecorator

from notetime.database import Base


DEFAULT_NOTE_TITLE = "Untitled Diary"


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """DateTime column that always round-trips as timezone-aware UTC."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


class Note(Base):
    """
    A titled diary note.

    Lifecycle:
        1. Created by POST /api/notes (created_at == last_modified)
        2. Title/content overwritten by PUT /api/notes/{id}
        3. last_modified bumped whenever a line is appended
        4. Deleted by DELETE /api/notes/{id}, taking its lines with it
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=DEFAULT_NOTE_TITLE,
        comment="Title of the note, defaults to 'Untitled Diary'",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Free-form body of the note",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        comment="When the note was created (UTC)",
    )

    last_modified: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        comment="Last edit or line append (UTC)",
    )

    lines: Mapped[List["Line"]] = relationship(
        back_populates="note",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Line.timestamp",
    )

    __table_args__ = (
        Index("idx_notes_created_at", "created_at"),
        Index("idx_notes_last_modified", "last_modified"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', last_modified='{self.last_modified}')>"


class Line(Base):
    """
    One timestamped line appended to a note. Immutable once written.
    """

    __tablename__ = "lines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    note_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=False,
        comment="Parent note",
    )

    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    timestamp: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        comment="When the line was appended (UTC), set by the server",
    )

    note: Mapped[Note] = relationship(back_populates="lines")

    __table_args__ = (
        Index("idx_lines_note_id", "note_id"),
        Index("idx_lines_timestamp", "timestamp"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Line(id={self.id}, note_id={self.note_id}, timestamp='{self.timestamp}')>"
