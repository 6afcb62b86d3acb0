"""Manual override of automatic moderation decisions."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from campaign_guard.schemas.moderation import ModerationResult, ModerationScores

FLAG_CHANGES_REQUESTED = "changes_requested"

LUXURY_CHANGE_THRESHOLD = 50.0
INAPPROPRIATE_CHANGE_THRESHOLD = 0.0
FRAUD_CHANGE_THRESHOLD = 40.0
TRUST_CHANGE_THRESHOLD = 50.0


class ReviewAction(str, Enum):
    """Actions available to a human reviewer."""

    APPROVE = "approve"
    REJECT = "reject"
    REQUEST_CHANGES = "request_changes"


_DECISION_BY_ACTION = {
    ReviewAction.APPROVE: "approved",
    ReviewAction.REJECT: "rejected",
    ReviewAction.REQUEST_CHANGES: "review",
}


def recommended_changes(scores: ModerationScores) -> list[str]:
    """Return the edits a creator should make, based on which scores raised concern."""
    changes: list[str] = []
    if scores.luxury > LUXURY_CHANGE_THRESHOLD:
        changes.append("Remove references to luxury or non-essential items")
    if scores.inappropriate > INAPPROPRIATE_CHANGE_THRESHOLD:
        changes.append("Remove inappropriate content")
    if scores.fraud > FRAUD_CHANGE_THRESHOLD:
        changes.append("Add specific details about how funds will be used")
    if scores.trust < TRUST_CHANGE_THRESHOLD:
        changes.append("Add transparency such as receipts or documentation")
    return changes


def apply_manual_review(
    result: ModerationResult,
    action: ReviewAction | str,
    notes: str = "",
    reviewer_id: str | None = None,
    *,
    now: datetime | None = None,
) -> ModerationResult:
    """Build the manual ModerationResult recording a reviewer's decision.

    The reviewed result is left untouched; the returned result copies its
    scores and details, points back to it through ``parent_id`` and is tagged
    ``review_type="manual"``.

    Args:
        result: The automatic result being reviewed.
        action: approve, reject or request_changes.
        notes: Free-text reviewer notes.
        reviewer_id: Identifier of the reviewer, if known.
        now: Timestamp to record; defaults to the current UTC time.

    Returns:
        A new, unpersisted ModerationResult.

    Raises:
        ValueError: If ``action`` is not a known review action.
    """
    action = ReviewAction(action)
    changes: list[str] = []
    flags: list[str] = []
    recommendations = list(result.recommendations)

    if action is ReviewAction.REQUEST_CHANGES:
        changes = recommended_changes(result.scores)
        flags.append(FLAG_CHANGES_REQUESTED)
        recommendations = changes

    return ModerationResult(
        campaign_id=result.campaign_id,
        timestamp=now or datetime.now(UTC),
        processing_time=0.0,
        scores=result.scores,
        decision=_DECISION_BY_ACTION[action],
        flags=flags,
        recommendations=recommendations,
        details=result.details,
        review_type="manual",
        reviewed_by=reviewer_id,
        review_notes=notes,
        requested_changes=changes,
        parent_id=result.id,
    )
