"""SQLAlchemy models for community discussions."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from safepath_community.db.session import Base
from safepath_community.db.time import utcnow


def new_discussion_id() -> str:
    """Return an opaque identifier for a new discussion."""
    return uuid.uuid4().hex


class Discussion(Base):
    """A community post carrying voting and reply metrics.

    Tallies are only ever changed by the store in response to vote intents;
    clients read them back through a full list fetch.
    """

    __tablename__ = "discussion"
    __table_args__ = (Index("ix_discussion_category_id", "category_id"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_discussion_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # One of the fixed category ids; not a foreign key because the set is not user-defined.
    category_id: Mapped[str] = mapped_column(String(32), nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reply_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Identity attached by the authorization gate; seeded rows may have none.
    author_id: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
