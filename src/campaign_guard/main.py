# src/campaign_guard/main.py
"""Main entry point for the Campaign Guard application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from campaign_guard.api.v1 import moderation_router
from campaign_guard.core.logging import configure_logging
from campaign_guard.core.settings import settings
from campaign_guard.moderation.rules import default_rules

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Campaign Guard API",
    description="Content moderation and trust scoring for fundraising campaigns",
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
app.include_router(moderation_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    # Fail fast on a broken rules file instead of on the first request.
    rules = default_rules()
    logger.info("Loaded moderation rules version %s", rules.version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Content moderation and trust scoring for fundraising campaigns",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("campaign_guard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
