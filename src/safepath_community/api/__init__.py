"""HTTP API for the community discussion feed."""

from .endpoints import community_router, system_router

__all__ = ["community_router", "system_router"]
