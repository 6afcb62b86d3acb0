# src/campaign_guard/schemas/__init__.py
"""
Pydantic schemas for moderation inputs, results and API payloads.

These schemas define the structure of API data for serialization and validation.
"""

from .campaign import BudgetItemIn, CampaignIn
from .moderation import (
    AnalyzeRequest,
    AnalyzeResponse,
    BatchItemError,
    ContentCheckRequest,
    ContentCheckResponse,
    ManualReviewRequest,
    ModerationDetails,
    ModerationResult,
    ModerationScores,
    QueuedCampaign,
)

__all__ = [
    "BudgetItemIn", "CampaignIn",
    "AnalyzeRequest", "AnalyzeResponse",
    "BatchItemError",
    "ContentCheckRequest", "ContentCheckResponse",
    "ManualReviewRequest",
    "ModerationDetails", "ModerationResult", "ModerationScores",
    "QueuedCampaign",
]
