# tests/test_scorers.py
"""Tests for the individual moderation dimension scorers."""

from typing import Any

import pytest

from campaign_guard.moderation.extractor import extract_text_content
from campaign_guard.moderation.scorers import (
    clamp_score,
    score_fraud,
    score_inappropriate,
    score_luxury,
    score_need_validation,
    score_trust,
    trust_categories_present,
)
from campaign_guard.schemas.campaign import CampaignIn


def _campaign(**fields: Any) -> tuple[str, CampaignIn]:
    campaign = CampaignIn(**fields)
    return extract_text_content(campaign), campaign


@pytest.mark.parametrize("value,expected", [(-5, 0.0), (0, 0.0), (42.5, 42.5), (100, 100.0), (250, 100.0)])
def test_clamp_score(value: float, expected: float) -> None:
    assert clamp_score(value) == expected


def test_luxury_counts_lavish_terms(rules) -> None:
    """Each luxury term match adds points."""
    text, campaign = _campaign(
        story="I need a brand new Mercedes and a Rolex",
        budget_breakdown=[{"item": "Rent", "amount": 500}],
    )

    assert score_luxury(text, campaign, rules.luxury) == 45.0


def test_luxury_budget_thresholds(rules) -> None:
    """Large items add points; the first threshold does not apply to medical needs."""
    items = [{"item": "Equipment", "amount": 1500}, {"item": "Ward", "amount": 6000}]
    text, other = _campaign(need_type="other", budget_breakdown=items)
    _, medical = _campaign(need_type="medical", budget_breakdown=items)

    # 1500 -> +20, 6000 -> +20 +30
    assert score_luxury(text, other, rules.luxury) == 70.0
    # only the >5000 penalty applies to medical needs
    assert score_luxury(text, medical, rules.luxury) == 30.0


def test_luxury_goal_tiers(rules) -> None:
    text, modest = _campaign(goal_amount=50000)
    _, large = _campaign(goal_amount=60000)
    _, huge = _campaign(goal_amount=150000)

    assert score_luxury(text, modest, rules.luxury) == 0.0
    assert score_luxury(text, large, rules.luxury) == 25.0
    assert score_luxury(text, huge, rules.luxury) == 60.0


def test_luxury_is_clamped(rules) -> None:
    text, campaign = _campaign(
        story="luxury yacht mansion rolex ferrari gucci prada diamond gold",
        goal_amount=500000,
    )

    assert score_luxury(text, campaign, rules.luxury) == 100.0


def test_inappropriate_points_per_match(rules) -> None:
    text, _ = _campaign(story="This is not a scam and there are no drugs")

    assert score_inappropriate(text, rules.inappropriate) == 50.0


def test_inappropriate_clean_text(rules, benign_campaign_data) -> None:
    campaign = CampaignIn.model_validate(benign_campaign_data)

    assert score_inappropriate(extract_text_content(campaign), rules.inappropriate) == 0.0


def test_fraud_empty_budget_scores_higher(rules) -> None:
    """An empty budget breakdown is penalised relative to a real one."""
    story = "We are rebuilding the community kitchen that burned down. " * 5
    text_empty, empty = _campaign(story=story, budget_breakdown=[])
    text_full, full = _campaign(
        story=story,
        budget_breakdown=[
            {"item": "Stove", "amount": 450},
            {"item": "Pots", "amount": 275.5},
        ],
    )

    assert score_fraud(text_empty, empty, rules.fraud) > score_fraud(text_full, full, rules.fraud)
    assert score_fraud(text_empty, empty, rules.fraud) == 20.0
    assert score_fraud(text_full, full, rules.fraud) == 0.0


def test_fraud_missing_budget_treated_as_empty(rules) -> None:
    story = "x" * 250
    text, campaign = _campaign(story=story, budget_breakdown=None)

    assert score_fraud(text, campaign, rules.fraud) == 20.0


def test_fraud_short_story_and_urgency(rules) -> None:
    text, campaign = _campaign(
        story="Urgent! Emergency! Please help immediately, the deadline is critical.",
        budget_breakdown=[{"item": "Rent", "amount": 725}],
    )

    # 5 urgency words -> +15, story under 200 characters -> +10
    assert score_fraud(text, campaign, rules.fraud) == 25.0


def test_fraud_round_amounts(rules) -> None:
    story = "y" * 250
    round_items = [{"item": name, "amount": 100 * i} for i, name in enumerate(["a", "b", "c"], 1)]
    text, rounded = _campaign(story=story, budget_breakdown=round_items)
    _, two_items = _campaign(story=story, budget_breakdown=round_items[:2])

    assert score_fraud(text, rounded, rules.fraud) == 15.0
    assert score_fraud(text, two_items, rules.fraud) == 0.0


def test_fraud_round_amounts_handle_huge_values(rules) -> None:
    """Amounts far beyond decimal precision are still checked for roundness."""
    story = "y" * 250
    items = [{"item": "a", "amount": 1e30}, {"item": "b", "amount": 100}, {"item": "c", "amount": 200}]
    text, huge = _campaign(story=story, budget_breakdown=items)
    fractional = [dict(items[0], amount="123456789012345678901234567890.5"), *items[1:]]
    _, not_round = _campaign(story=story, budget_breakdown=fractional)

    assert score_fraud(text, huge, rules.fraud) == 15.0
    assert score_fraud(text, not_round, rules.fraud) == 0.0



def test_fraud_patterns(rules) -> None:
    story = ("Guaranteed returns if you send a wire transfer. " * 6)
    text, campaign = _campaign(story=story, budget_breakdown=[{"item": "Fee", "amount": 33}])

    assert score_fraud(text, campaign, rules.fraud) == 100.0


def test_need_validation_medical_terms(rules) -> None:
    """Medical campaigns without medical vocabulary lose confidence."""
    text_vague, vague = _campaign(need_type="medical", story="Please send money for my situation.")
    text_clear, clear = _campaign(
        need_type="medical",
        story="Please send money for my surgery at the hospital after the diagnosis.",
    )

    vague_score = score_need_validation(text_vague, vague, rules.need_validation)
    clear_score = score_need_validation(text_clear, clear, rules.need_validation)

    assert vague_score < clear_score
    assert clear_score == 100.0
    assert vague_score == 70.0


def test_need_validation_suspicious_medical(rules) -> None:
    text, campaign = _campaign(
        need_type="Medical",
        story="A miracle cure at the clinic overseas.",
    )

    assert score_need_validation(text, campaign, rules.need_validation) == 60.0


def test_need_validation_education(rules) -> None:
    text_ok, ok = _campaign(need_type="education", story="Tuition for my final semester at university.")
    text_bad, bad = _campaign(need_type="education", story="I want to pay for grades online.")

    assert score_need_validation(text_ok, ok, rules.need_validation) == 100.0
    # no legitimate term -30 and a suspicious one -40
    assert score_need_validation(text_bad, bad, rules.need_validation) == 30.0


def test_need_validation_emergency_story_length(rules) -> None:
    text_short, short = _campaign(need_type="emergency", story="Flood took our home.")
    text_long, long = _campaign(need_type="emergency", story="Flood took our home. " * 20)

    assert score_need_validation(text_short, short, rules.need_validation) == 75.0
    assert score_need_validation(text_long, long, rules.need_validation) == 100.0


def test_need_validation_unknown_type_keeps_baseline(rules) -> None:
    text, campaign = _campaign(need_type="community", story="")

    assert score_need_validation(text, campaign, rules.need_validation) == 100.0


def test_trust_counts_each_pattern_once(rules) -> None:
    """Repeating a trust word cannot farm points."""
    once = score_trust("we will share a receipt", rules.trust)
    repeated = score_trust("receipt receipt receipt receipt receipt", rules.trust)

    assert once == repeated == 55.0


def test_trust_adds_once_per_matching_pattern(rules) -> None:
    """Two transparency patterns add the category points twice, not once."""
    one_pattern = score_trust("receipt invoice proof", rules.trust)
    two_patterns = score_trust("receipt and an itemized list", rules.trust)
    three_patterns = score_trust("receipt, itemized, transparent", rules.trust)

    assert one_pattern == 55.0
    assert two_patterns == 60.0
    assert three_patterns == 65.0


def test_trust_categories(rules) -> None:
    text = "every receipt goes to our church and the community"

    assert score_trust(text, rules.trust) == 62.0
    assert trust_categories_present(text, rules.trust) == ["transparency", "scripture", "community"]


def test_trust_baseline(rules) -> None:
    assert score_trust("", rules.trust) == 50.0
    assert trust_categories_present("", rules.trust) == []


def test_scores_are_bounded(rules, scam_campaign_data) -> None:
    campaign = CampaignIn.model_validate(scam_campaign_data)
    text = extract_text_content(campaign)

    scores = [
        score_luxury(text, campaign, rules.luxury),
        score_inappropriate(text, rules.inappropriate),
        score_fraud(text, campaign, rules.fraud),
        score_need_validation(text, campaign, rules.need_validation),
        score_trust(text, rules.trust),
    ]

    assert all(0.0 <= score <= 100.0 for score in scores)
