# src/campaign_guard/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .moderation import router as moderation_router

__all__ = ["moderation_router"]
