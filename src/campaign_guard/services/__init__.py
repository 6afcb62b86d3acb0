# src/campaign_guard/services/__init__.py
"""Business logic services for the Campaign Guard application."""

from .moderation import (
    CampaignNotFoundError,
    ModerationResultNotFoundError,
    ModerationService,
    PersistenceError,
)

__all__ = [
    "CampaignNotFoundError",
    "ModerationResultNotFoundError",
    "ModerationService",
    "PersistenceError",
]
