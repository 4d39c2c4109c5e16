"""Business logic services for the SafePath community service."""

from .discussion_store import (
    DiscussionNotFoundError,
    DiscussionStore,
    DiscussionStoreError,
    UnknownCategoryError,
)

__all__ = [
    "DiscussionStore",
    "DiscussionStoreError",
    "DiscussionNotFoundError",
    "UnknownCategoryError",
]
