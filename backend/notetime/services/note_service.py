"""
NoteTime Backend — Note Service (Data Access Layer)
====================================================

What:  One method per API operation on notes and lines: builds the SQL
       statement, runs it in the caller's session, maps rows to schemas.
How:   SQLAlchemy 2.0 `select` / `update` / `delete` constructs; every value
       is a bound parameter and every ORDER BY column comes from a fixed map.
Who:   Called by the route handlers and the seed tool.

Transactions:
    Write operations commit before returning, so the response always
    describes persisted state. add_line() issues two statements (insert the
    line, bump the parent's last_modified) and commits them together; if
    either fails both are rolled back.

Error Handling:
    Any SQLAlchemyError is rolled back and re-raised as StoreError carrying
    the driver's message. A missing note on a read becomes NotFoundError.
    Update and delete do not check for existence.
"""

import logging
from typing import Dict, List

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from notetime.exceptions import NotFoundError, StoreError
from notetime.models.note import DEFAULT_NOTE_TITLE, Line, Note, utcnow
from notetime.schemas.note import (
    LineResponse,
    NoteResponse,
    NoteSort,
    UpdatedNoteResponse,
)

logger = logging.getLogger(__name__)


# SQLite INTEGER range; ids outside it cannot name a stored note
MAX_NOTE_ID = 2**63 - 1

# Sort key → ORDER BY column. The only path from ?sort= into SQL.
SORT_COLUMNS: Dict[NoteSort, InstrumentedAttribute] = {
    NoteSort.CREATION_DATE: Note.created_at,
    NoteSort.LAST_MODIFIED: Note.last_modified,
}


class NoteService:
    """
    Data access for notes and their lines.

    Stateless: every method receives the session it should use.
    """

    async def _fail(self, db: AsyncSession, operation: str, exc: SQLAlchemyError) -> StoreError:
        """Roll back the unit of work and build the StoreError to raise."""
        logger.error("Database error during %s: %s", operation, exc)
        await db.rollback()
        # DBAPIError wraps the driver exception; report its text, not the SQL
        orig = getattr(exc, "orig", None)
        message = str(orig) if orig is not None else str(exc)
        return StoreError(message=message, context={"operation": operation})

    @staticmethod
    def _in_range(note_id: int) -> bool:
        return -MAX_NOTE_ID - 1 <= note_id <= MAX_NOTE_ID

    # ── Notes ─────────────────────────────────────────────────────────────

    async def list_notes(
        self,
        db: AsyncSession,
        sort: NoteSort = NoteSort.LAST_MODIFIED,
    ) -> List[NoteResponse]:
        """
        Return every note, newest first by the chosen timestamp column.

        Query plan (default sort):
            SELECT ... FROM notes ORDER BY last_modified DESC, id DESC
            → idx_notes_last_modified
        """
        order_column = SORT_COLUMNS[sort]
        try:
            result = await db.execute(
                select(Note).order_by(order_column.desc(), Note.id.desc())
            )
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            raise await self._fail(db, "list_notes", e)

        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by id.

        Raises:
            NotFoundError: no note has this id (→ 404)
            StoreError: query execution failed (→ 500)
        """
        if not self._in_range(note_id):
            raise NotFoundError(resource="Note", resource_id=note_id)

        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise await self._fail(db, "get_note", e)

        if note is None:
            raise NotFoundError(resource="Note", resource_id=note_id)

        return NoteResponse.model_validate(note)

    async def create_note(self, db: AsyncSession, title: str, content: str) -> NoteResponse:
        """
        Insert a note with created_at == last_modified == now.

        An empty title is stored as DEFAULT_NOTE_TITLE.
        """
        now = utcnow()
        note = Note(
            title=title or DEFAULT_NOTE_TITLE,
            content=content,
            created_at=now,
            last_modified=now,
        )
        try:
            db.add(note)
            await db.commit()
        except SQLAlchemyError as e:
            raise await self._fail(db, "create_note", e)

        logger.info("Note %d created", note.id)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: int,
        title: str,
        content: str,
    ) -> UpdatedNoteResponse:
        """
        Overwrite title and content and set last_modified = now.

        No partial updates and no existence check: updating a missing id
        changes nothing and still succeeds, echoing the submitted fields
        with created_at = None.
        """
        now = utcnow()
        if not self._in_range(note_id):
            return UpdatedNoteResponse(
                id=note_id, title=title, content=content, created_at=None, last_modified=now
            )

        try:
            await db.execute(
                update(Note)
                .where(Note.id == note_id)
                .values(title=title, content=content, last_modified=now)
            )
            result = await db.execute(select(Note.created_at).where(Note.id == note_id))
            created_at = result.scalar_one_or_none()
            await db.commit()
        except SQLAlchemyError as e:
            raise await self._fail(db, "update_note", e)

        if created_at is None:
            logger.debug("Update of note %d matched no row", note_id)

        return UpdatedNoteResponse(
            id=note_id,
            title=title,
            content=content,
            created_at=created_at,
            last_modified=now,
        )

    async def delete_note(self, db: AsyncSession, note_id: int) -> None:
        """
        Delete a note; its lines go with it (ON DELETE CASCADE).

        Deleting an id that does not exist is not an error.
        """
        if not self._in_range(note_id):
            return

        try:
            await db.execute(delete(Note).where(Note.id == note_id))
            await db.commit()
        except SQLAlchemyError as e:
            raise await self._fail(db, "delete_note", e)

        logger.info("Note %d deleted", note_id)

    async def search_notes(self, db: AsyncSession, term: str) -> List[NoteResponse]:
        """
        Notes whose title or content contains `term`, most recently modified first.

        `term` is matched literally: LIKE wildcards in it are escaped. Case
        folding follows SQLite's LIKE (ASCII case-insensitive).
        """
        try:
            result = await db.execute(
                select(Note)
                .where(
                    or_(
                        Note.title.contains(term, autoescape=True),
                        Note.content.contains(term, autoescape=True),
                    )
                )
                .order_by(Note.last_modified.desc(), Note.id.desc())
            )
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            raise await self._fail(db, "search_notes", e)

        return [NoteResponse.model_validate(note) for note in notes]

    # ── Lines ─────────────────────────────────────────────────────────────

    async def list_lines(self, db: AsyncSession, note_id: int) -> List[LineResponse]:
        """Lines of a note in chronological order (empty for unknown notes)."""
        if not self._in_range(note_id):
            return []

        try:
            result = await db.execute(
                select(Line)
                .where(Line.note_id == note_id)
                .order_by(Line.timestamp.asc(), Line.id.asc())
            )
            lines = result.scalars().all()
        except SQLAlchemyError as e:
            raise await self._fail(db, "list_lines", e)

        return [LineResponse.model_validate(line) for line in lines]

    async def add_line(self, db: AsyncSession, note_id: int, content: str) -> LineResponse:
        """
        Append a line and move the parent's last_modified to its timestamp.

        Both writes share one transaction. Appending to a note that does not
        exist violates the foreign key and raises StoreError; an id beyond the
        INTEGER range cannot exist and raises NotFoundError.
        """
        if not self._in_range(note_id):
            raise NotFoundError(resource="Note", resource_id=note_id)

        now = utcnow()
        line = Line(note_id=note_id, content=content, timestamp=now)
        try:
            db.add(line)
            await db.flush()
            await db.execute(
                update(Note)
                .where(Note.id == note_id)
                .values(last_modified=now)
            )
            await db.commit()
        except SQLAlchemyError as e:
            raise await self._fail(db, "add_line", e)

        logger.info("Line %d appended to note %d", line.id, note_id)
        return LineResponse.model_validate(line)


note_service = NoteService()
