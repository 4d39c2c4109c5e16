"""Vote submission with refetch-based reconciliation.

A vote never touches the tallies the caller is displaying. The intent is sent
to the server and, only once the server accepts it, the caller's refresh
hook runs so that the displayed numbers come from a fresh authoritative
fetch.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from safepath_community.feed.client import CommunityApiClient
from safepath_community.schemas.vote import VoteIntent, VoteResult, to_store_vote_type

logger = logging.getLogger(__name__)

RefreshHook = Callable[[], Awaitable[object]]


def build_vote_intent(discussion_id: str, vote_type: str) -> VoteIntent:
    """Translate a public ``"up"``/``"down"`` vote into a store vote intent.

    Raises:
        ValueError: If ``vote_type`` is neither ``"up"`` nor ``"down"``.
    """
    return VoteIntent(
        target_id=discussion_id,
        target_type="discussion",
        vote_type=to_store_vote_type(vote_type),
    )


async def cast_vote(
    client: CommunityApiClient,
    discussion_id: str,
    vote_type: str,
    refresh: RefreshHook,
    *,
    token: str | None = None,
) -> VoteResult:
    """Send a vote intent and then reconcile through ``refresh``.

    Raises:
        ValueError: For an unknown vote type, before any request is sent.
        CommunityApiError: If the server rejects the vote; ``refresh`` is not
            called in that case.
    """
    intent = build_vote_intent(discussion_id, vote_type)
    result = await client.cast_vote(intent, token=token)
    logger.debug("Vote %s on %s accepted; refetching", intent.vote_type, discussion_id)
    await refresh()
    return result
