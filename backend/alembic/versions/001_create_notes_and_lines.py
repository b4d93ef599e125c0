"""Create notes and lines tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Initial schema: `notes` and its timestamped `lines`, with the four
       indexes used by listing, sorting and search.
How:   INTEGER AUTOINCREMENT keys (ids are never reused) and an
       ON DELETE CASCADE foreign key from lines to notes.

Rollback: downgrade() drops both tables (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create both tables, the cascading foreign key and all indexes."""
    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("last_modified", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index("idx_notes_created_at", "notes", ["created_at"])
    op.create_index("idx_notes_last_modified", "notes", ["last_modified"])

    op.create_table(
        "lines",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("note_id", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["note_id"], ["notes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index("idx_lines_note_id", "lines", ["note_id"])
    op.create_index("idx_lines_timestamp", "lines", ["timestamp"])


def downgrade() -> None:
    """Drop both tables, children first."""
    op.drop_index("idx_lines_timestamp", table_name="lines")
    op.drop_index("idx_lines_note_id", table_name="lines")
    op.drop_table("lines")
    op.drop_index("idx_notes_last_modified", table_name="notes")
    op.drop_index("idx_notes_created_at", table_name="notes")
    op.drop_table("notes")
