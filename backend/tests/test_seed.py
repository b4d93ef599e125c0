"""
NoteTime Backend — Seed Tool Tests
===================================
"""

import pytest
from sqlalchemy import select

from notetime.models.note import Line, Note
from notetime.seed import SAMPLE_LINES, SAMPLE_TITLE, run, seed


class TestSeed:

    @pytest.mark.asyncio
    async def test_seed_inserts_sample_notes_once(self, app):
        session_factory = app.state.session_factory

        assert await seed(session_factory) == 2
        assert await seed(session_factory) == 0

        async with session_factory() as session:
            notes = (await session.execute(select(Note).order_by(Note.id))).scalars().all()
            lines = (await session.execute(select(Line).order_by(Line.timestamp))).scalars().all()

        assert [n.title for n in notes] == ["Untitled Diary", SAMPLE_TITLE]
        assert [line.content for line in lines] == [content for _, content in SAMPLE_LINES]
        assert all(line.note_id == notes[1].id for line in lines)
        assert notes[1].last_modified == lines[-1].timestamp

    @pytest.mark.asyncio
    async def test_run_bootstraps_schema(self, test_settings):
        assert await run(test_settings) == 2
