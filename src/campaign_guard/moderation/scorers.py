"""Dimension scorers for campaign moderation.

Each scorer is a pure function of the extracted text, the campaign snapshot
and its slice of the rule set, returning a value in [0, 100]. For luxury,
inappropriate and fraud a higher value means more concern; for need
validation and trust a higher value means more confidence.
"""

from __future__ import annotations

from decimal import Decimal

from campaign_guard.moderation.extractor import any_match, count_matches
from campaign_guard.moderation.rules import (
    FraudRules,
    KeywordRules,
    LuxuryRules,
    NeedValidationRules,
    TrustRules,
)
from campaign_guard.schemas.campaign import CampaignIn

SCORE_MIN = 0.0
SCORE_MAX = 100.0
_ZERO = Decimal(0)


def clamp_score(value: float) -> float:
    """Clamp a raw score into [0, 100]."""
    return max(SCORE_MIN, min(SCORE_MAX, float(value)))


def _is_multiple(amount: Decimal, multiple: int) -> bool:
    # Decimal % raises DivisionImpossible once the quotient exceeds the context precision.
    integral = amount.to_integral_value()
    return amount == integral and int(integral) % multiple == 0


def _need_type(campaign: CampaignIn) -> str:
    return (campaign.need_type or "").strip().lower()


def score_luxury(text: str, campaign: CampaignIn, rules: LuxuryRules) -> float:
    """Score lavish-lifestyle content and outsized budget figures."""
    score = count_matches(text, rules.patterns) * rules.points_per_match

    exempt = _need_type(campaign) in rules.item_exempt_need_types
    for item in campaign.budget_items:
        amount = item.amount or _ZERO
        if amount > rules.item_threshold and not exempt:
            score += rules.item_penalty
        if amount > rules.large_item_threshold:
            score += rules.large_item_penalty

    goal = campaign.goal_amount or _ZERO
    for tier in rules.goal_tiers:
        if goal > tier.above:
            score += tier.penalty

    return clamp_score(score)


def score_inappropriate(text: str, rules: KeywordRules) -> float:
    """Score banned-category vocabulary (scams, drugs, weapons, hate, adult)."""
    return clamp_score(count_matches(text, rules.patterns) * rules.points_per_match)


def score_fraud(text: str, campaign: CampaignIn, rules: FraudRules) -> float:
    """Score suspicious financial phrasing plus structural red flags."""
    score = count_matches(text, rules.patterns) * rules.points_per_match

    if count_matches(text, (rules.urgency_pattern,)) > rules.urgency_max_matches:
        score += rules.urgency_penalty

    if len(campaign.story or "") < rules.short_story_length:
        score += rules.short_story_penalty

    items = campaign.budget_items
    if not items:
        score += rules.missing_budget_penalty
    elif len(items) >= rules.round_min_items and all(
        _is_multiple(item.amount or _ZERO, rules.round_multiple) for item in items
    ):
        # Every line a round figure suggests the numbers were made up.
        score += rules.round_penalty

    return clamp_score(score)


def score_need_validation(text: str, campaign: CampaignIn, rules: NeedValidationRules) -> float:
    """Score how well the content supports the declared need type.

    Starts from the baseline and subtracts need-type specific penalties.
    Need types without rules keep the baseline.
    """
    score = rules.baseline
    need_rules = rules.need_types.get(_need_type(campaign))
    if need_rules is None:
        return clamp_score(score)

    if need_rules.legitimate and not any_match(text, need_rules.legitimate):
        score -= need_rules.missing_legitimate_penalty
    if need_rules.suspicious and any_match(text, need_rules.suspicious):
        score -= need_rules.suspicious_penalty
    if need_rules.min_story_length and len(campaign.story or "") < need_rules.min_story_length:
        score -= need_rules.short_story_penalty

    return clamp_score(score)


def score_trust(text: str, rules: TrustRules) -> float:
    """Score positive trust signals.

    Each pattern of a category scores at most once, adding the category
    increment however often it matches; a category with several matching
    patterns therefore adds its increment once per matching pattern.
    """
    score = rules.baseline
    for category in rules.categories:
        for pattern in category.patterns:
            if pattern.search(text):
                score += category.points
    return clamp_score(score)


def trust_categories_present(text: str, rules: TrustRules) -> list[str]:
    """Return the names of trust categories with at least one match."""
    return [
        category.name
        for category in rules.categories
        if any_match(text, category.patterns)
    ]
