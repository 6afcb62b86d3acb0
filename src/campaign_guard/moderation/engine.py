"""Campaign moderation pipeline.

extract text -> five dimension scorers -> composite score -> decision.
Nothing here touches storage; persisting results is the job of
:mod:`campaign_guard.services.moderation`.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import Executor
from datetime import UTC, datetime
from functools import partial
from typing import Any

from campaign_guard.moderation.compositor import DimensionScores, compose_overall
from campaign_guard.moderation.decision import make_decision
from campaign_guard.moderation.extractor import extract_text_content, matched_terms
from campaign_guard.moderation.rules import RuleSet, default_rules
from campaign_guard.moderation.scorers import (
    score_fraud,
    score_inappropriate,
    score_luxury,
    score_need_validation,
    score_trust,
    trust_categories_present,
)
from campaign_guard.schemas.campaign import CampaignIn
from campaign_guard.schemas.moderation import (
    BatchItemError,
    ContentCheckResponse,
    ModerationDetails,
    ModerationResult,
    ModerationScores,
)

logger = logging.getLogger(__name__)

CampaignLike = CampaignIn | Mapping[str, Any]


def as_campaign(campaign: CampaignLike) -> CampaignIn:
    """Return a validated, immutable campaign snapshot."""
    if isinstance(campaign, CampaignIn):
        return campaign
    return CampaignIn.model_validate(campaign)


def score_dimensions(
    text: str,
    campaign: CampaignIn,
    rules: RuleSet,
    executor: Executor | None = None,
) -> DimensionScores:
    """Run the five scorers, optionally fanned out on ``executor``.

    The scorers share no state, so sequential and parallel execution give
    identical results.
    """
    tasks: list[Callable[[], float]] = [
        partial(score_luxury, text, campaign, rules.luxury),
        partial(score_inappropriate, text, rules.inappropriate),
        partial(score_fraud, text, campaign, rules.fraud),
        partial(score_need_validation, text, campaign, rules.need_validation),
        partial(score_trust, text, rules.trust),
    ]
    if executor is None:
        values = [task() for task in tasks]
    else:
        futures = [executor.submit(task) for task in tasks]
        values = [future.result() for future in futures]
    return DimensionScores(*values)


def analyze_campaign(
    campaign: CampaignLike,
    rules: RuleSet | None = None,
    *,
    executor: Executor | None = None,
) -> ModerationResult:
    """Score a campaign and decide whether it can be published.

    Args:
        campaign: Campaign snapshot or a mapping with the same fields.
        rules: Rule set to apply; defaults to the configured rules.
        executor: Optional executor used to run the scorers in parallel.

    Returns:
        An unpersisted ModerationResult (``id`` is ``None``).

    Raises:
        pydantic.ValidationError: If ``campaign`` is neither a mapping nor
            an object with campaign attributes. Unreadable field values do
            not raise; they count as missing.
    """
    rules = rules or default_rules()
    started = time.perf_counter()
    snapshot = as_campaign(campaign)

    text = extract_text_content(snapshot)
    dimensions = score_dimensions(text, snapshot, rules, executor)
    overall = compose_overall(dimensions, rules.weights)
    decision = make_decision(overall)

    details = ModerationDetails(
        luxury_items=matched_terms(text, rules.luxury.patterns),
        inappropriate_content=matched_terms(text, rules.inappropriate.patterns),
        suspicious_patterns=matched_terms(text, rules.fraud.patterns),
        trust_indicators=trust_categories_present(text, rules.trust),
        rules_version=rules.version,
    )
    elapsed_ms = (time.perf_counter() - started) * 1000

    logger.debug(
        "Campaign %s scored %.2f (%s) in %.1fms",
        snapshot.id,
        overall,
        decision.kind,
        elapsed_ms,
    )
    return ModerationResult(
        campaign_id=snapshot.id,
        timestamp=datetime.now(UTC),
        processing_time=round(elapsed_ms, 3),
        scores=ModerationScores(
            luxury=dimensions.luxury,
            inappropriate=dimensions.inappropriate,
            fraud=dimensions.fraud,
            need_validation=dimensions.need_validation,
            trust=dimensions.trust,
            overall=overall,
        ),
        decision=decision.kind,
        flags=list(decision.flags),
        recommendations=list(decision.recommendations),
        details=details,
    )


def _campaign_id_of(campaign: Any) -> str | None:
    if isinstance(campaign, Mapping):
        value = campaign.get("id")
    else:
        value = getattr(campaign, "id", None)
    return None if value is None else str(value)


def batch_moderate(
    campaigns: Iterable[CampaignLike],
    rules: RuleSet | None = None,
    *,
    analyze: Callable[[CampaignLike, RuleSet], ModerationResult] | None = None,
) -> list[ModerationResult | BatchItemError]:
    """Analyse campaigns one after another, isolating per-item failures.

    A campaign whose analysis raises occupies its slot with a
    :class:`BatchItemError`; the remaining campaigns are still processed.

    Args:
        campaigns: Campaign snapshots or mappings.
        rules: Rule set shared by the whole batch.
        analyze: Per-item analysis function; defaults to :func:`analyze_campaign`.

    Returns:
        One entry per input campaign, in input order.
    """
    rules = rules or default_rules()
    analyze = analyze or analyze_campaign
    results: list[ModerationResult | BatchItemError] = []
    for campaign in campaigns:
        try:
            results.append(analyze(campaign, rules))
        except Exception as exc:
            campaign_id = _campaign_id_of(campaign)
            logger.warning("Error moderating campaign %s: %s", campaign_id, exc)
            results.append(BatchItemError(campaign_id=campaign_id, error=str(exc)))
    return results


def check_content(content: Any, rules: RuleSet | None = None) -> ContentCheckResponse:
    """Quick screen of draft content without running the full pipeline.

    Non-string content is serialised to JSON first. The check passes when no
    luxury, inappropriate or suspicious term is present; ``has_trust`` is
    reported but does not affect the outcome.
    """
    rules = rules or default_rules()
    text = content if isinstance(content, str) else json.dumps(content, default=str)
    checks = {name: bool(pattern.search(text)) for name, pattern in rules.quick_checks.items()}
    passed = not any(value for name, value in checks.items() if name != "has_trust")
    return ContentCheckResponse(passed=passed, checks=checks)
