"""Feed controller: holds the fetched collection and the user's selection.

The controller is the boundary where fetch, create and vote failures are
recovered. Failures are logged and turned into state or outcomes the UI can
show; nothing raised by the API client escapes from here.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from pydantic import ValidationError

from safepath_community.feed import votes
from safepath_community.feed.client import CommunityApiClient, CommunityApiError
from safepath_community.feed.ranking import (
    FeedSummary,
    FilterSelection,
    rank_discussions,
    summarize,
)
from safepath_community.schemas.discussion import DiscussionCreate, DiscussionResponse
from safepath_community.schemas.vote import PublicVoteType

logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Failed to fetch discussions. Please try again later."
CREATE_ERROR_MESSAGE = "Failed to create discussion. Please check the details and try again."
VOTE_ERROR_MESSAGE = "Failed to record your vote. Please try again."


@dataclass(frozen=True)
class ActionOutcome:
    """Result of a user-initiated create or vote action."""

    ok: bool
    message: str | None = None
    discussion: DiscussionResponse | None = None


class FeedController:
    """Orchestrates fetching, ranking and mutations for the discussion feed.

    Each ``refresh`` replaces the held collection wholesale. When two
    refreshes overlap, whichever response resolves last is the one kept.
    """

    def __init__(
        self,
        client: CommunityApiClient,
        selection: FilterSelection | None = None,
    ) -> None:
        self.client = client
        self.selection = selection or FilterSelection()
        self.discussions: list[DiscussionResponse] = []
        self.loading = True
        self.error: str | None = None

    @property
    def visible(self) -> list[DiscussionResponse]:
        """The held collection filtered and ordered by the current selection."""
        return rank_discussions(self.discussions, self.selection)

    @property
    def summary(self) -> FeedSummary:
        return summarize(self.discussions)

    @property
    def has_active_filter(self) -> bool:
        return bool(self.selection.category or self.selection.search_query)

    def update_selection(self, **changes: str | None) -> FilterSelection:
        """Replace fields of the current selection and return the new value."""
        self.selection = dataclasses.replace(self.selection, **changes)
        return self.selection

    async def mount(self) -> None:
        await self.refresh()

    async def refresh(self) -> None:
        """Fetch the authoritative collection from the server."""
        self.loading = True
        try:
            discussions = await self.client.list_discussions()
        except CommunityApiError:
            logger.exception("Fetching discussions failed")
            self.error = FETCH_ERROR_MESSAGE
            # Clear rather than show tallies that may be out of date.
            self.discussions = []
        else:
            self.discussions = discussions
            self.error = None
        finally:
            self.loading = False

    async def create_discussion(
        self,
        title: str,
        content: str,
        category_id: str,
        tags: list[str] | None = None,
    ) -> ActionOutcome:
        """Submit a discussion and refresh the feed on success."""
        try:
            payload = DiscussionCreate(
                title=title,
                content=content,
                category_id=category_id,
                tags=tags or [],
            )
            created = await self.client.create_discussion(payload)
        except (CommunityApiError, ValidationError) as exc:
            logger.error("Failed to create discussion: %s", exc)
            return ActionOutcome(ok=False, message=CREATE_ERROR_MESSAGE)

        await self.refresh()
        return ActionOutcome(ok=True, discussion=created)

    async def vote(self, discussion_id: str, vote_type: PublicVoteType) -> ActionOutcome:
        """Cast a vote; displayed tallies only change through the follow-up refresh."""
        try:
            await votes.cast_vote(self.client, discussion_id, vote_type, self.refresh)
        except (CommunityApiError, ValueError) as exc:
            logger.error("Failed to vote on discussion %s: %s", discussion_id, exc)
            return ActionOutcome(ok=False, message=VOTE_ERROR_MESSAGE)
        return ActionOutcome(ok=True)
