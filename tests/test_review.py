# tests/test_review.py
"""Tests for manual review overrides."""

from datetime import UTC, datetime

import pytest

from campaign_guard.moderation.engine import analyze_campaign
from campaign_guard.moderation.review import (
    ReviewAction,
    apply_manual_review,
    recommended_changes,
)
from campaign_guard.schemas.moderation import ModerationScores


def test_approve_creates_manual_result(rules, luxury_campaign_data) -> None:
    original = analyze_campaign(luxury_campaign_data, rules).model_copy(update={"id": 7})
    reviewed_at = datetime(2026, 1, 2, tzinfo=UTC)

    manual = apply_manual_review(
        original,
        ReviewAction.APPROVE,
        notes="Car is for a mobility conversion",
        reviewer_id="admin-1",
        now=reviewed_at,
    )

    assert manual.decision == "approved"
    assert manual.review_type == "manual"
    assert manual.reviewed_by == "admin-1"
    assert manual.review_notes == "Car is for a mobility conversion"
    assert manual.parent_id == 7
    assert manual.id is None
    assert manual.timestamp == reviewed_at
    assert manual.scores == original.scores
    assert manual.details == original.details
    # the reviewed result is untouched
    assert original.decision == "review"
    assert original.review_type == "automatic"


def test_reject_accepts_plain_string(rules, benign_campaign_data) -> None:
    original = analyze_campaign(benign_campaign_data, rules)

    manual = apply_manual_review(original, "reject", reviewer_id="admin-2")

    assert manual.decision == "rejected"
    assert manual.requested_changes == []
    assert manual.parent_id is None


def test_request_changes_lists_concerns(rules, luxury_campaign_data) -> None:
    original = analyze_campaign(luxury_campaign_data, rules)

    manual = apply_manual_review(original, ReviewAction.REQUEST_CHANGES)

    assert manual.decision == "review"
    assert manual.flags == ["changes_requested"]
    assert manual.requested_changes == ["Remove references to luxury or non-essential items"]
    assert manual.recommendations == manual.requested_changes


def test_unknown_action_raises(rules, benign_campaign_data) -> None:
    original = analyze_campaign(benign_campaign_data, rules)

    with pytest.raises(ValueError):
        apply_manual_review(original, "escalate")


def test_recommended_changes_thresholds() -> None:
    scores = ModerationScores(
        luxury=60,
        inappropriate=25,
        fraud=45,
        need_validation=100,
        trust=45,
        overall=20,
    )

    assert recommended_changes(scores) == [
        "Remove references to luxury or non-essential items",
        "Remove inappropriate content",
        "Add specific details about how funds will be used",
        "Add transparency such as receipts or documentation",
    ]


def test_recommended_changes_clean_scores() -> None:
    scores = ModerationScores(
        luxury=50,
        inappropriate=0,
        fraud=40,
        need_validation=100,
        trust=50,
        overall=75,
    )

    assert recommended_changes(scores) == []
