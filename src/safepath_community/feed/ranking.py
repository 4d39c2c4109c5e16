"""Filtering and ordering of a fetched discussion collection.

Everything here is pure: the same collection and selection always produce
the same ordering, so the functions can be called from anywhere without
coordination.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from safepath_community.schemas.category import DEFAULT_CATEGORIES
from safepath_community.schemas.discussion import DiscussionResponse

SortMode = Literal["latest", "oldest", "popular", "most-replies"]

SORT_MODES: tuple[str, ...] = ("latest", "oldest", "popular", "most-replies")
DEFAULT_SORT: SortMode = "latest"


@dataclass
class FilterSelection:
    """Filter and sort choices held by the feed controller.

    ``time_range`` is carried for interface compatibility and never applied.
    """

    category: str | None = None
    search_query: str | None = None
    sort_by: str = DEFAULT_SORT
    time_range: str = "all"


@dataclass(frozen=True)
class FeedSummary:
    """Aggregate counters shown above the feed."""

    total_discussions: int
    total_replies: int
    total_upvotes: int
    category_count: int


def net_score(discussion: DiscussionResponse) -> int:
    """Return upvotes minus downvotes; may be negative."""
    return discussion.upvotes - discussion.downvotes


def matches_search(discussion: DiscussionResponse, query: str) -> bool:
    """Case-insensitive substring match over title, content and tags."""
    needle = query.lower()
    return (
        needle in discussion.title.lower()
        or needle in discussion.content.lower()
        or any(needle in tag.lower() for tag in discussion.tags)
    )


def matches_selection(discussion: DiscussionResponse, selection: FilterSelection) -> bool:
    """Return True when ``discussion`` passes both the category and search filters."""
    if selection.category and discussion.category.id != selection.category:
        return False
    if selection.search_query:
        return matches_search(discussion, selection.search_query)
    return True


def _sort_within_pin_groups(
    discussions: list[DiscussionResponse],
    sort_by: str,
) -> list[DiscussionResponse]:
    if sort_by == "popular":
        return sorted(discussions, key=net_score, reverse=True)
    if sort_by == "most-replies":
        return sorted(discussions, key=lambda d: d.reply_count, reverse=True)
    if sort_by == "oldest":
        return sorted(discussions, key=lambda d: d.created_at)
    # "latest" and anything unrecognised
    return sorted(discussions, key=lambda d: d.updated_at, reverse=True)


def rank_discussions(
    discussions: Iterable[DiscussionResponse],
    selection: FilterSelection,
) -> list[DiscussionResponse]:
    """Filter ``discussions`` by ``selection`` and order them for display.

    Pinned discussions always come first. Within each pin group the order
    follows ``selection.sort_by``; ties keep their input order because both
    passes use Python's stable sort (``reverse=True`` included).
    """
    filtered = [d for d in discussions if matches_selection(d, selection)]
    ordered = _sort_within_pin_groups(filtered, selection.sort_by)
    return sorted(ordered, key=lambda d: not d.is_pinned)


def summarize(discussions: Iterable[DiscussionResponse]) -> FeedSummary:
    """Totals over the unfiltered collection."""
    collection = list(discussions)
    return FeedSummary(
        total_discussions=len(collection),
        total_replies=sum(d.reply_count for d in collection),
        total_upvotes=sum(d.upvotes for d in collection),
        category_count=len(DEFAULT_CATEGORIES),
    )
