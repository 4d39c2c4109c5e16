"""Community discussion endpoints."""

from fastapi import APIRouter, HTTPException, status

from safepath_community.api.dependencies import CurrentUserIdDep, StoreDep
from safepath_community.schemas.category import DEFAULT_CATEGORIES
from safepath_community.schemas.discussion import (
    DiscussionCreate,
    DiscussionEnvelope,
    DiscussionListEnvelope,
    DiscussionResponse,
)
from safepath_community.schemas.vote import VoteIntent, VoteResult
from safepath_community.services.discussion_store import (
    DiscussionNotFoundError,
    UnknownCategoryError,
)

router = APIRouter(prefix="/community", tags=["community"])


@router.get("/discussions", response_model=DiscussionListEnvelope)
async def list_discussions(store: StoreDep) -> DiscussionListEnvelope:
    """List every discussion.

    Ranking and filtering happen on the client, so the full collection is
    returned in a stable store order.
    """
    discussions = [
        DiscussionResponse.model_validate(discussion)
        for discussion in store.list_discussions()
    ]
    return DiscussionListEnvelope.model_validate({"data": {"discussions": discussions}})


@router.post(
    "/discussions",
    response_model=DiscussionEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_discussion(
    discussion_data: DiscussionCreate,
    user_id: CurrentUserIdDep,
    store: StoreDep,
) -> DiscussionEnvelope:
    """Create a discussion attributed to the authenticated caller.

    Raises:
        HTTPException: If the category is not part of the fixed set
    """
    try:
        discussion = store.create_discussion(discussion_data, author_id=user_id)
    except UnknownCategoryError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    return DiscussionEnvelope.model_validate(
        {"data": {"discussion": DiscussionResponse.model_validate(discussion)}}
    )


@router.post("/vote", response_model=VoteResult)
async def cast_vote(
    intent: VoteIntent,
    user_id: CurrentUserIdDep,
    store: StoreDep,
) -> VoteResult:
    """Apply a vote intent from the authenticated caller.

    Raises:
        HTTPException: If the target discussion does not exist
    """
    try:
        discussion = store.apply_vote(intent, voter_id=user_id)
    except DiscussionNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Discussion not found",
        ) from exc

    return VoteResult.model_validate(
        {"data": {"upvotes": discussion.upvotes, "downvotes": discussion.downvotes}}
    )


@router.get("/categories")
async def list_categories() -> dict[str, dict[str, list[dict[str, str]]]]:
    """Return the fixed set of discussion categories."""
    return {"data": {"categories": [category.model_dump() for category in DEFAULT_CATEGORIES]}}
