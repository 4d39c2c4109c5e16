"""Vote-related Pydantic schemas and the public vote vocabulary."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .common import CamelModel

PublicVoteType = Literal["up", "down"]
StoreVoteType = Literal["upvote", "downvote"]

# Fixed, total translation from the two public vote types to the store's words.
VOTE_TYPE_MAP: dict[str, StoreVoteType] = {
    "up": "upvote",
    "down": "downvote",
}


def to_store_vote_type(vote_type: str) -> StoreVoteType:
    """Translate ``"up"``/``"down"`` into ``"upvote"``/``"downvote"``.

    Raises:
        ValueError: For any other input; there is no third vote type.
    """
    try:
        return VOTE_TYPE_MAP[vote_type]
    except KeyError as err:
        raise ValueError(f"Unsupported vote type: {vote_type!r}") from err


class VoteIntent(CamelModel):
    """Request to apply one upvote or downvote to a discussion."""

    target_id: str = Field(..., min_length=1)
    target_type: Literal["discussion"] = "discussion"
    vote_type: StoreVoteType


class VoteTally(BaseModel):
    """Tallies of a discussion after a vote intent was applied."""

    upvotes: int = Field(..., ge=0)
    downvotes: int = Field(..., ge=0)


class VoteResult(BaseModel):
    """``POST /community/vote`` response body."""

    status: Literal["success"] = "success"
    data: VoteTally
