"""
NoteTime Backend — Note Service Unit Tests
===========================================

What:  Tests for NoteService against a real SQLite session, plus mocked
       sessions for store failures.

What we test:
    ✅ Create defaults and timestamps
    ✅ Get / NotFoundError
    ✅ Update overwrite semantics and last_modified
    ✅ Delete cascades to lines
    ✅ Line append bumps the parent in the same transaction
    ✅ Sort keys and search escaping
    ✅ Driver errors become StoreError with the raw message
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from notetime.exceptions import NotFoundError, StoreError
from notetime.models.note import Line, Note
from notetime.schemas.note import NoteSort
from notetime.services.note_service import NoteService


class TestNoteServiceCreate:
    """Tests for create_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_note_sets_equal_timestamps(self, db_session):
        note = await self.service.create_note(db_session, title="X", content="Y")

        assert note.id == 1
        assert note.title == "X"
        assert note.content == "Y"
        assert note.created_at == note.last_modified
        assert note.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_create_note_empty_title_uses_default(self, db_session):
        note = await self.service.create_note(db_session, title="", content="body")

        assert note.title == "Untitled Diary"

    @pytest.mark.asyncio
    async def test_ids_are_not_reused_after_delete(self, db_session):
        first = await self.service.create_note(db_session, title="a", content="")
        await self.service.delete_note(db_session, first.id)

        second = await self.service.create_note(db_session, title="b", content="")

        assert second.id == first.id + 1


class TestNoteServiceGet:
    """Tests for get_note retrieval."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_get_note_found(self, db_session):
        created = await self.service.create_note(db_session, title="X", content="Y")

        fetched = await self.service.get_note(db_session, created.id)

        assert fetched == created

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_note(db_session, 42)

        assert exc_info.value.message == "Note not found"
        assert exc_info.value.context["resource_id"] == 42


class TestNoteServiceUpdate:
    """Tests for update_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_update_overwrites_and_bumps_last_modified(self, db_session):
        created = await self.service.create_note(db_session, title="old", content="old body")

        updated = await self.service.update_note(db_session, created.id, title="new", content="")

        assert updated.title == "new"
        assert updated.content == ""
        assert updated.created_at == created.created_at
        assert updated.last_modified > created.last_modified

        stored = await self.service.get_note(db_session, created.id)
        assert stored.title == "new"
        assert stored.content == ""
        assert stored.last_modified == updated.last_modified

    @pytest.mark.asyncio
    async def test_update_missing_note_is_silent(self, db_session):
        updated = await self.service.update_note(db_session, 99, title="t", content="c")

        assert updated.id == 99
        assert updated.created_at is None
        count = await db_session.scalar(select(func.count(Note.id)))
        assert count == 0


class TestNoteServiceDelete:
    """Tests for delete_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_delete_cascades_to_lines(self, db_session):
        note = await self.service.create_note(db_session, title="t", content="")
        await self.service.add_line(db_session, note.id, "one")
        await self.service.add_line(db_session, note.id, "two")

        await self.service.delete_note(db_session, note.id)

        assert await self.service.list_lines(db_session, note.id) == []
        remaining = await db_session.scalar(
            select(func.count(Line.id)).where(Line.note_id == note.id)
        )
        assert remaining == 0

    @pytest.mark.asyncio
    async def test_delete_missing_note_is_silent(self, db_session):
        await self.service.delete_note(db_session, 12345)


class TestNoteServiceLines:
    """Tests for add_line / list_lines."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_add_line_updates_parent_last_modified(self, db_session):
        note = await self.service.create_note(db_session, title="t", content="")

        line = await self.service.add_line(db_session, note.id, "hi")

        assert line.id == 1
        assert line.note_id == note.id
        assert line.content == "hi"
        parent = await self.service.get_note(db_session, note.id)
        assert parent.last_modified == line.timestamp
        assert parent.last_modified >= parent.created_at

    @pytest.mark.asyncio
    async def test_list_lines_is_chronological(self, db_session):
        note = await self.service.create_note(db_session, title="t", content="")
        for text in ("first", "second", "third"):
            await self.service.add_line(db_session, note.id, text)

        lines = await self.service.list_lines(db_session, note.id)

        assert [line.content for line in lines] == ["first", "second", "third"]
        stamps = [line.timestamp for line in lines]
        assert stamps == sorted(stamps)

    @pytest.mark.asyncio
    async def test_add_line_to_missing_note_raises_store_error(self, db_session):
        with pytest.raises(StoreError) as exc_info:
            await self.service.add_line(db_session, 777, "orphan")

        assert "FOREIGN KEY constraint failed" in exc_info.value.message
        assert "[SQL:" not in exc_info.value.message
        count = await db_session.scalar(select(func.count(Line.id)))
        assert count == 0

    @pytest.mark.asyncio
    async def test_out_of_range_id_never_reaches_the_driver(self, mock_db_session):
        huge = 2**64

        with pytest.raises(NotFoundError):
            await self.service.get_note(mock_db_session, huge)
        with pytest.raises(NotFoundError):
            await self.service.add_line(mock_db_session, huge, "x")
        assert await self.service.list_lines(mock_db_session, huge) == []
        await self.service.delete_note(mock_db_session, huge)

        mock_db_session.execute.assert_not_awaited()
        mock_db_session.add.assert_not_called()


class TestNoteServiceListAndSearch:
    """Tests for list_notes sort keys and search_notes."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_sort_keys_order_by_different_columns(self, db_session):
        older = await self.service.create_note(db_session, title="older", content="")
        newer = await self.service.create_note(db_session, title="newer", content="")
        # Touch the older note so its last_modified is now the latest
        await self.service.add_line(db_session, older.id, "bump")

        by_modified = await self.service.list_notes(db_session, NoteSort.LAST_MODIFIED)
        by_created = await self.service.list_notes(db_session, NoteSort.CREATION_DATE)

        assert [n.id for n in by_modified] == [older.id, newer.id]
        assert [n.id for n in by_created] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_search_matches_title_or_content(self, db_session):
        groceries = await self.service.create_note(db_session, title="Groceries", content="milk, eggs")
        work = await self.service.create_note(db_session, title="Work", content="buy milk for office")
        await self.service.create_note(db_session, title="Travel", content="passport")

        results = await self.service.search_notes(db_session, "milk")

        assert {n.id for n in results} == {groceries.id, work.id}
        # Most recently modified first
        assert results[0].id == work.id

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, db_session):
        percent = await self.service.create_note(db_session, title="Progress", content="100% done")
        await self.service.create_note(db_session, title="Count", content="100 items")

        results = await self.service.search_notes(db_session, "100%")

        assert [n.id for n in results] == [percent.id]
        assert await self.service.search_notes(db_session, "_") == []


class TestNoteServiceStoreErrors:
    """Driver failures surface as StoreError with the driver's text."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_list_notes_wraps_operational_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("database is locked"))
        )

        with pytest.raises(StoreError) as exc_info:
            await self.service.list_notes(mock_db_session)

        assert exc_info.value.message == "database is locked"
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_add_line_rolls_back_when_parent_update_fails(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("UPDATE notes", {}, Exception("disk I/O error"))
        )

        with pytest.raises(StoreError):
            await self.service.add_line(mock_db_session, 1, "text")

        mock_db_session.flush.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()
        mock_db_session.rollback.assert_awaited_once()
