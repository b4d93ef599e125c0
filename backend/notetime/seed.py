"""
Seed the database with sample diary notes.

Creates the schema if needed, then inserts an empty "Untitled Diary" note and
a note with three timestamped lines written over the last hour. Does nothing
when the notes table already has rows.

Usage:
    python -m notetime.seed [--db-path ./notetime.db]
"""

import argparse
import asyncio
import logging
from datetime import timedelta
from typing import List, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from notetime.config import Settings
from notetime.database import create_engine, create_session_factory, init_db
from notetime.models.note import DEFAULT_NOTE_TITLE, Line, Note, utcnow

logger = logging.getLogger(__name__)

SAMPLE_TITLE = "trying the note taking app that I wanted"

# (minutes ago, content)
SAMPLE_LINES: List[Tuple[int, str]] = [
    (60, "trying the note taking app that I wanted"),
    (50, "it's 11:35 note"),
    (45, "every new line creates with timestamp on the left side"),
]


async def seed(session_factory: async_sessionmaker[AsyncSession]) -> int:
    """Insert the sample notes; returns how many notes were created."""
    async with session_factory() as session:
        existing = await session.scalar(select(func.count(Note.id)))
        if existing:
            logger.info("Database already has %d notes; skipping seed", existing)
            return 0

        now = utcnow()
        hour_ago = now - timedelta(hours=1)

        session.add(Note(title=DEFAULT_NOTE_TITLE, content="", created_at=now, last_modified=now))

        diary = Note(title=SAMPLE_TITLE, content="", created_at=hour_ago, last_modified=hour_ago)
        for minutes_ago, content in SAMPLE_LINES:
            stamp = now - timedelta(minutes=minutes_ago)
            diary.lines.append(Line(content=content, timestamp=stamp))
            diary.last_modified = max(diary.last_modified, stamp)
        session.add(diary)

        await session.commit()

    logger.info("Seeded 2 notes and %d lines", len(SAMPLE_LINES))
    return 2


async def run(settings: Settings) -> int:
    engine = create_engine(settings)
    try:
        await init_db(engine)
        return await seed(create_session_factory(engine))
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Insert sample NoteTime notes")
    parser.add_argument("--db-path", default=None, help="SQLite file (default: DB_PATH)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    settings = Settings()
    if args.db_path:
        settings = settings.model_copy(update={"db_path": args.db_path, "database_url": None})

    asyncio.run(run(settings))


if __name__ == "__main__":
    main()
