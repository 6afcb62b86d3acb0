# src/campaign_guard/models/__init__.py
"""SQLAlchemy models for the Campaign Guard service."""

from .campaign import Campaign
from .moderation import CampaignModeration, ImmutableRecordError

__all__ = [
    "Campaign",
    "CampaignModeration",
    "ImmutableRecordError",
]
