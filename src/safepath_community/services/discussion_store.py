"""Persistence operations for discussions and their vote tallies."""

from __future__ import annotations

import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from safepath_community.db.time import utcnow
from safepath_community.models import Discussion, DiscussionVote
from safepath_community.models.vote import DOWNVOTE, UPVOTE
from safepath_community.schemas.category import get_category
from safepath_community.schemas.discussion import DiscussionCreate
from safepath_community.schemas.vote import VoteIntent

logger = logging.getLogger(__name__)


class DiscussionStoreError(RuntimeError):
    """Base exception raised by the discussion store."""


class DiscussionNotFoundError(DiscussionStoreError):
    """Raised when a vote targets a discussion that does not exist."""


class UnknownCategoryError(DiscussionStoreError):
    """Raised when a discussion references a category outside the fixed set."""


def _direction_for(vote_type: str) -> int:
    return UPVOTE if vote_type == "upvote" else DOWNVOTE


class DiscussionStore:
    """Create, list and vote on discussions.

    Counter changes are issued as ``UPDATE ... SET upvotes = upvotes + n`` so
    concurrent voters against the same discussion never lose an increment.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def list_discussions(self) -> list[Discussion]:
        """Return every discussion, pinned first and most recently updated next."""
        return (
            self.db.query(Discussion)
            .order_by(Discussion.is_pinned.desc(), Discussion.updated_at.desc())
            .all()
        )

    def get_discussion(self, discussion_id: str) -> Discussion | None:
        return self.db.get(Discussion, discussion_id)

    def create_discussion(self, data: DiscussionCreate, author_id: str | None) -> Discussion:
        """Persist a new discussion attributed to ``author_id``."""
        if get_category(data.category_id) is None:
            raise UnknownCategoryError(f"Unknown category '{data.category_id}'")

        discussion = Discussion(
            title=data.title,
            content=data.content,
            category_id=data.category_id,
            tags=list(data.tags),
            author_id=author_id,
        )
        # A fresh discussion has never been edited.
        discussion.updated_at = discussion.created_at = utcnow()
        self.db.add(discussion)
        self.db.commit()
        self.db.refresh(discussion)
        logger.info("Created discussion %s in category %s", discussion.id, discussion.category_id)
        return discussion

    def apply_vote(self, intent: VoteIntent, voter_id: str) -> Discussion:
        """Apply one vote intent from ``voter_id`` and return the updated discussion.

        Casting the same direction twice withdraws the vote; casting the
        opposite direction moves it.
        """
        discussion = self.get_discussion(intent.target_id)
        if discussion is None:
            raise DiscussionNotFoundError(f"Discussion '{intent.target_id}' not found")

        direction = _direction_for(intent.vote_type)
        deltas = {UPVOTE: 0, DOWNVOTE: 0}

        key = (discussion.id, voter_id)
        existing = self.db.get(DiscussionVote, key)
        if existing is None and self._insert_vote(discussion.id, voter_id, direction):
            deltas[direction] += 1
        else:
            if existing is None:
                # A concurrent first vote from the same voter was stored first.
                existing = self.db.get(DiscussionVote, key)
            if existing.direction == direction:
                self.db.delete(existing)
                deltas[direction] -= 1
            else:
                deltas[existing.direction] -= 1
                deltas[direction] += 1
                existing.direction = direction

        self.db.execute(
            update(Discussion)
            .where(Discussion.id == discussion.id)
            .values(
                upvotes=Discussion.upvotes + deltas[UPVOTE],
                downvotes=Discussion.downvotes + deltas[DOWNVOTE],
            )
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        self.db.refresh(discussion)
        logger.debug(
            "Applied %s from %s to discussion %s (up=%d, down=%d)",
            intent.vote_type,
            voter_id,
            discussion.id,
            discussion.upvotes,
            discussion.downvotes,
        )
        return discussion

    def _insert_vote(self, discussion_id: str, voter_id: str, direction: int) -> bool:
        """Record a first vote; return ``False`` if one already exists for the voter."""
        try:
            with self.db.begin_nested():
                self.db.add(
                    DiscussionVote(
                        discussion_id=discussion_id, voter_id=voter_id, direction=direction
                    )
                )
        except IntegrityError:
            if self.db.get(DiscussionVote, (discussion_id, voter_id)) is None:
                raise
            logger.info(
                "Vote from %s on discussion %s already recorded; treating as a repeat",
                voter_id,
                discussion_id,
            )
            return False
        return True
