"""Mapping of the overall score onto a moderation decision.

The three dispositions are separate frozen types so callers can branch on
``decision.kind`` (or ``isinstance``) exhaustively instead of probing a
loosely built dictionary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

APPROVE_THRESHOLD = 70.0
REVIEW_THRESHOLD = 40.0

FLAG_MANUAL_REVIEW = "manual_review_required"
FLAG_HIGH_RISK = "high_risk"

# Lifecycle values of campaigns.status.
CAMPAIGN_STATUS_DRAFT = "draft"
CAMPAIGN_STATUS_ACTIVE = "active"
CAMPAIGN_STATUS_UNDER_REVIEW = "under_review"
CAMPAIGN_STATUS_REJECTED = "rejected"

# Denormalised campaign status written after each decision.
CAMPAIGN_STATUS_BY_DECISION: dict[str, str] = {
    "approved": CAMPAIGN_STATUS_ACTIVE,
    "review": CAMPAIGN_STATUS_UNDER_REVIEW,
    "rejected": CAMPAIGN_STATUS_REJECTED,
}


@dataclass(frozen=True)
class Approved:
    kind: Literal["approved"] = "approved"
    flags: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ("Campaign looks good for publication",)


@dataclass(frozen=True)
class Review:
    kind: Literal["review"] = "review"
    flags: tuple[str, ...] = (FLAG_MANUAL_REVIEW,)
    recommendations: tuple[str, ...] = (
        "Campaign requires manual review",
        "Consider requesting additional documentation",
    )


@dataclass(frozen=True)
class Rejected:
    kind: Literal["rejected"] = "rejected"
    flags: tuple[str, ...] = (FLAG_HIGH_RISK,)
    recommendations: tuple[str, ...] = (
        "Campaign does not meet platform guidelines",
        "Significant concerns detected",
    )


Decision = Approved | Review | Rejected


def make_decision(overall: float) -> Decision:
    """Return the decision for an overall score.

    Boundary values belong to the higher band: 70 is approved, 40 is review.
    """
    if overall >= APPROVE_THRESHOLD:
        return Approved()
    if overall >= REVIEW_THRESHOLD:
        return Review()
    return Rejected()


def campaign_status_for(decision: str) -> str:
    """Return the campaign status that reflects a decision kind."""
    return CAMPAIGN_STATUS_BY_DECISION[decision]
