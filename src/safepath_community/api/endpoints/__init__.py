"""API endpoint modules."""

from .community import router as community_router
from .system import router as system_router

__all__ = ["community_router", "system_router"]
