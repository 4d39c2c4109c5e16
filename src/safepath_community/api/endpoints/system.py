"""Health endpoints for the SafePath community API."""

from __future__ import annotations

from fastapi import APIRouter

from safepath_community.api.dependencies import SessionDep
from safepath_community.db.session import database_connected
from safepath_community.db.time import utcnow

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check(db: SessionDep) -> dict[str, object]:
    """Report liveness and database connectivity."""
    return {
        "ok": True,
        "database": "connected" if database_connected(db) else "disconnected",
        "timestamp": utcnow().isoformat(),
    }
