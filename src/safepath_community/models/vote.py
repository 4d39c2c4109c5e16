"""Models capturing voting interactions on discussions."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, SmallInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from safepath_community.db.session import Base

UPVOTE = 1
DOWNVOTE = -1


class DiscussionVote(Base):
    """Per-user vote on a discussion.

    The composite primary key keeps at most one live vote per voter, so the
    counters on ``Discussion`` can always be reconciled against these rows.
    """

    __tablename__ = "discussion_vote"
    __table_args__ = (
        CheckConstraint("direction IN (1, -1)", name="ck_discussion_vote_direction"),
        Index("ix_discussion_vote_discussion_id", "discussion_id"),
    )

    discussion_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("discussion.id", ondelete="CASCADE"),
        primary_key=True,
    )
    voter_id: Mapped[str] = mapped_column(Text, primary_key=True)

    # 1 = upvote, -1 = downvote.
    direction: Mapped[int] = mapped_column(SmallInteger, nullable=False)
