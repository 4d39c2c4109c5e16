"""create discussion tables

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 09:12:40.318204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create discussion and discussion_vote tables."""
    op.create_table(
        "discussion",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category_id", sa.String(length=32), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False),
        sa.Column("downvotes", sa.Integer(), nullable=False),
        sa.Column("reply_count", sa.Integer(), nullable=False),
        sa.Column("is_pinned", sa.Boolean(), nullable=False),
        sa.Column("author_id", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_discussion_category_id", "discussion", ["category_id"])

    op.create_table(
        "discussion_vote",
        sa.Column("discussion_id", sa.String(length=32), nullable=False),
        sa.Column("voter_id", sa.Text(), nullable=False),
        sa.Column("direction", sa.SmallInteger(), nullable=False),
        sa.CheckConstraint("direction IN (1, -1)", name="ck_discussion_vote_direction"),
        sa.ForeignKeyConstraint(["discussion_id"], ["discussion.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("discussion_id", "voter_id"),
    )
    op.create_index("ix_discussion_vote_discussion_id", "discussion_vote", ["discussion_id"])


def downgrade() -> None:
    """Drop discussion tables."""
    op.drop_index("ix_discussion_vote_discussion_id", table_name="discussion_vote")
    op.drop_table("discussion_vote")
    op.drop_index("ix_discussion_category_id", table_name="discussion")
    op.drop_table("discussion")
