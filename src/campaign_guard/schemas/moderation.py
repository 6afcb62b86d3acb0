"""Moderation-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .campaign import CampaignIn

DecisionKind = Literal["approved", "review", "rejected"]
ReviewType = Literal["automatic", "manual"]
ReviewActionName = Literal["approve", "reject", "request_changes"]


class ModerationScores(BaseModel):
    """Dimension scores and the composite score, each within [0, 100]."""

    model_config = ConfigDict(frozen=True)

    luxury: float = Field(ge=0, le=100)
    inappropriate: float = Field(ge=0, le=100)
    fraud: float = Field(ge=0, le=100)
    need_validation: float = Field(ge=0, le=100)
    trust: float = Field(ge=0, le=100)
    overall: float = Field(ge=0, le=100)


class ModerationDetails(BaseModel):
    """Matched terms kept for audit and display; never used for re-scoring."""

    model_config = ConfigDict(frozen=True)

    luxury_items: list[str] = Field(default_factory=list)
    inappropriate_content: list[str] = Field(default_factory=list)
    suspicious_patterns: list[str] = Field(default_factory=list)
    trust_indicators: list[str] = Field(default_factory=list)
    rules_version: str | None = None


class ModerationResult(BaseModel):
    """Outcome of one moderation run or one manual review."""

    model_config = ConfigDict(frozen=True)

    id: int | None = Field(default=None, description="Audit row id once persisted")
    campaign_id: str | None
    timestamp: datetime
    processing_time: float = Field(description="Milliseconds spent scoring")
    scores: ModerationScores
    decision: DecisionKind
    flags: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    details: ModerationDetails = Field(default_factory=ModerationDetails)

    review_type: ReviewType = "automatic"
    reviewed_by: str | None = None
    review_notes: str | None = None
    requested_changes: list[str] = Field(default_factory=list)
    parent_id: int | None = None


class BatchItemError(BaseModel):
    """Placeholder for a batch slot whose analysis raised."""

    model_config = ConfigDict(frozen=True)

    campaign_id: str | None
    decision: Literal["error"] = "error"
    error: str


class AnalyzeRequest(BaseModel):
    """Body for the analyze endpoint: inline campaign data or a stored campaign id."""

    campaign: CampaignIn | None = None
    campaign_id: str | None = None
    update_status: bool | None = Field(
        default=None,
        description="Override MODERATION_UPDATE_CAMPAIGN_STATUS for this call",
    )


class AnalyzeResponse(BaseModel):
    """Moderation result plus whether it reached storage."""

    result: ModerationResult
    persisted: bool
    error: str | None = None


class ManualReviewRequest(BaseModel):
    """Reviewer decision on a moderation result."""

    action: ReviewActionName
    notes: str = ""
    reviewer_id: str | None = None


class ContentCheckRequest(BaseModel):
    """Draft content for the quick content check; non-text content is JSON-encoded."""

    content: str | dict[str, Any] | list[Any]


class ContentCheckResponse(BaseModel):
    """Outcome of the quick content check."""

    passed: bool
    checks: dict[str, bool]


class QueuedCampaign(BaseModel):
    """Campaign waiting for manual review."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str | None
    need_type: str | None
    status: str
    moderation_score: float | None
    moderated_at: datetime | None
