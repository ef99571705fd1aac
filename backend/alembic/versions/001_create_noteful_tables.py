"""Create folders, tags, notes and note_tags tables

Revision ID: 001
Revises: None
Create Date: 2024-01-01 00:00:00.000000+00:00

What:  Initial schema for the three collections and the ordered note → tag list.
How:   folders.name and tags.name carry unique constraints; notes.folder_id
       and note_tags.tag_id are plain UUID columns (weak references).

Rollback: downgrade() drops every table (destructive).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False,
                  comment="When this row was created (UTC)"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False,
                  comment="When this row was last modified (UTC)"),
    ]


def upgrade() -> None:
    op.create_table(
        "folders",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Unique identifier assigned by the store"),
        sa.Column("name", sa.Text(), nullable=False, comment="Folder name, unique across all folders"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "tags",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Unique identifier assigned by the store"),
        sa.Column("name", sa.Text(), nullable=False, comment="Tag name, unique across all tags"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "notes",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Unique identifier assigned by the store"),
        sa.Column("title", sa.Text(), nullable=False, comment="Note title (required)"),
        sa.Column("content", sa.Text(), nullable=True, comment="Free-form note body"),
        sa.Column("folder_id", sa.Uuid(), nullable=True,
                  comment="Weak reference to folders.id; cleared when the folder is deleted"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_notes_created_at", "notes", ["created_at"])
    op.create_index("idx_notes_folder_id", "notes", ["folder_id"])

    op.create_table(
        "note_tags",
        sa.Column("note_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("tag_id", sa.Uuid(), nullable=False,
                  comment="Weak reference to tags.id; rows are removed when the tag is deleted"),
        sa.ForeignKeyConstraint(["note_id"], ["notes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("note_id", "position"),
    )
    op.create_index("idx_note_tags_tag_id", "note_tags", ["tag_id"])


def downgrade() -> None:
    op.drop_index("idx_note_tags_tag_id", table_name="note_tags")
    op.drop_table("note_tags")
    op.drop_index("idx_notes_folder_id", table_name="notes")
    op.drop_index("idx_notes_created_at", table_name="notes")
    op.drop_table("notes")
    op.drop_table("tags")
    op.drop_table("folders")
