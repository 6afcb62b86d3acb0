"""Combination of dimension scores into the overall moderation score."""

from __future__ import annotations

from dataclasses import dataclass

from campaign_guard.moderation.rules import ScoreWeights
from campaign_guard.moderation.scorers import clamp_score


@dataclass(frozen=True)
class DimensionScores:
    """The five independent sub-scores of one campaign."""

    luxury: float
    inappropriate: float
    fraud: float
    need_validation: float
    trust: float


def compose_overall(scores: DimensionScores, weights: ScoreWeights) -> float:
    """Return the weighted composite score in [0, 100].

    The baseline is a neutral prior; luxury, inappropriate and fraud carry
    negative weights while need validation and trust carry positive ones.
    The sum is rounded to two decimals before clamping so float noise cannot
    move a score across a decision boundary.
    """
    weighted = (
        weights.baseline
        + scores.luxury * weights.luxury
        + scores.inappropriate * weights.inappropriate
        + scores.fraud * weights.fraud
        + scores.need_validation * weights.need_validation
        + scores.trust * weights.trust
    )
    return clamp_score(round(weighted, 2))
