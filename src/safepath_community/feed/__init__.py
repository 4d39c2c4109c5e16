"""Client-side discussion feed: API client, ranking and reconciliation."""

from .client import CommunityApiClient, CommunityApiError, CommunityAuthError
from .controller import ActionOutcome, FeedController
from .ranking import FeedSummary, FilterSelection, rank_discussions, summarize
from .votes import build_vote_intent, cast_vote

__all__ = [
    "ActionOutcome",
    "CommunityApiClient",
    "CommunityApiError",
    "CommunityAuthError",
    "FeedController",
    "FeedSummary",
    "FilterSelection",
    "build_vote_intent",
    "cast_vote",
    "rank_discussions",
    "summarize",
]
