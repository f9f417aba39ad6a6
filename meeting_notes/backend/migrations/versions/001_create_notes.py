"""create notes table

Revision ID: 001
Revises:
Create Date: 2025-06-20 00:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category", sa.Text(), nullable=True),
        sa.Column("meeting_date", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notes_category", "notes", ["category"])
    op.create_index("ix_notes_meeting_date", "notes", ["meeting_date"])
    op.create_index("ix_notes_is_deleted", "notes", ["is_deleted"])


def downgrade() -> None:
    op.drop_index("ix_notes_is_deleted", table_name="notes")
    op.drop_index("ix_notes_meeting_date", table_name="notes")
    op.drop_index("ix_notes_category", table_name="notes")
    op.drop_table("notes")
