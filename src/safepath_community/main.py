"""Main entry point for the SafePath community API."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from safepath_community.api import community_router, system_router
from safepath_community.core.settings import settings
from safepath_community.db.session import create_tables

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="SafePath Community API",
    description="Community discussions for the SafePath safety platform",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(community_router, prefix="/api")
app.include_router(system_router, prefix="/api")


@app.on_event("startup")
async def on_startup() -> None:
    create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/")
async def root() -> str:
    """Root endpoint confirming the backend is reachable."""
    return "SafePath community backend is live and running!"


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("safepath_community.main:app", host="0.0.0.0", port=4000, reload=settings.debug)
