"""Moderation-related endpoints for the Campaign Guard API."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Query, status

from campaign_guard.api.v1.dependencies import ModerationServiceDep
from campaign_guard.moderation.engine import check_content
from campaign_guard.schemas.moderation import (
    AnalyzeRequest,
    AnalyzeResponse,
    BatchItemError,
    ContentCheckRequest,
    ContentCheckResponse,
    ManualReviewRequest,
    ModerationResult,
    QueuedCampaign,
)
from campaign_guard.services.moderation import (
    CampaignNotFoundError,
    ModerationResultNotFoundError,
    PersistenceError,
)

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze_campaign(payload: AnalyzeRequest, service: ModerationServiceDep) -> AnalyzeResponse:
    """Moderate inline campaign data or a stored campaign.

    When storage fails the decision is still returned with ``persisted``
    set to false so the caller can display it.
    """
    campaign = payload.campaign
    if campaign is None and payload.campaign_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Campaign data is required",
        )

    try:
        if campaign is None:
            result = service.moderate_stored_campaign(
                payload.campaign_id,
                update_status=payload.update_status,
            )
        else:
            if campaign.id is None and payload.campaign_id is not None:
                campaign = campaign.model_copy(update={"id": payload.campaign_id})
            result = service.moderate_campaign(campaign, update_status=payload.update_status)
    except CampaignNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    except PersistenceError as err:
        if err.result is None:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=str(err),
            ) from err
        return AnalyzeResponse(result=err.result, persisted=err.result.id is not None, error=str(err))

    return AnalyzeResponse(result=result, persisted=True)


@router.post("/batch", response_model=list[ModerationResult | BatchItemError])
def batch_moderate(
    campaigns: list[dict[str, Any]],
    service: ModerationServiceDep,
) -> list[ModerationResult | BatchItemError]:
    """Moderate several campaigns; a campaign whose analysis fails only fails its own slot."""
    return service.batch_moderate(campaigns)


@router.get("/campaigns/{campaign_id}/history", response_model=list[ModerationResult])
def get_moderation_history(campaign_id: str, service: ModerationServiceDep) -> list[ModerationResult]:
    """Return all moderation results for a campaign, newest first."""
    return service.get_moderation_history(campaign_id)


@router.get("/results/{result_id}", response_model=ModerationResult)
def get_moderation_result(result_id: int, service: ModerationServiceDep) -> ModerationResult:
    """Return a single stored moderation result."""
    try:
        return service.get_result(result_id)
    except ModerationResultNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err


@router.post(
    "/results/{result_id}/review",
    response_model=ModerationResult,
    status_code=status.HTTP_201_CREATED,
)
def review_moderation_result(
    result_id: int,
    payload: ManualReviewRequest,
    service: ModerationServiceDep,
) -> ModerationResult:
    """Record a reviewer's approve, reject or request-changes decision."""
    try:
        return service.review(
            result_id,
            payload.action,
            notes=payload.notes,
            reviewer_id=payload.reviewer_id,
        )
    except ModerationResultNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    except PersistenceError as err:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(err),
        ) from err


@router.post("/check", response_model=ContentCheckResponse)
def check_draft_content(payload: ContentCheckRequest) -> ContentCheckResponse:
    """Quick screen of draft text without scoring or storing anything."""
    return check_content(payload.content)


@router.get("/queue", response_model=list[QueuedCampaign])
def get_moderation_queue(
    service: ModerationServiceDep,
    limit: int = Query(50, ge=1, le=100),
) -> list[QueuedCampaign]:
    """Return campaigns currently waiting for manual review."""
    return [QueuedCampaign.model_validate(campaign) for campaign in service.moderation_queue(limit)]
