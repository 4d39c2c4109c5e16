"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation
on both the server and the client side.
"""

from .category import DEFAULT_CATEGORIES, Category, get_category
from .discussion import (
    DiscussionCreate,
    DiscussionEnvelope,
    DiscussionListEnvelope,
    DiscussionResponse,
)
from .vote import VOTE_TYPE_MAP, VoteIntent, VoteResult, VoteTally, to_store_vote_type

__all__ = [
    "Category", "DEFAULT_CATEGORIES", "get_category",
    "DiscussionCreate", "DiscussionEnvelope", "DiscussionListEnvelope", "DiscussionResponse",
    "VOTE_TYPE_MAP", "VoteIntent", "VoteResult", "VoteTally", "to_store_vote_type",
]
