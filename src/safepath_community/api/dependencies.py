"""Shared API dependencies for authorization and persistence."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from safepath_community.core.security import verify_authorization
from safepath_community.db.session import get_db
from safepath_community.services.discussion_store import DiscussionStore

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def require_identity(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Gate a request on its bearer token and return the verified identity.

    Args:
        request: Incoming request; the identity is attached to ``request.state``
        authorization: Raw ``Authorization`` header value, if any

    Returns:
        The identity claim carried by the token

    Raises:
        HTTPException: 401 with "No token" or "Invalid or expired token"
    """
    decision = verify_authorization(authorization)
    if not decision.accepted:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=decision.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    request.state.user_id = decision.user_id
    return decision.user_id


def get_discussion_store(db: SessionDep) -> DiscussionStore:
    """Return a discussion store bound to the request's session."""
    return DiscussionStore(db)


# Type alias for the verified caller identity
CurrentUserIdDep = Annotated[str, Depends(require_identity)]
StoreDep = Annotated[DiscussionStore, Depends(get_discussion_store)]
