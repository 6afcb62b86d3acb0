# src/campaign_guard/services/moderation.py
"""Moderation services: run the engine and keep the audit trail."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campaign_guard.core.settings import settings
from campaign_guard.db.time import as_utc
from campaign_guard.models import Campaign, CampaignModeration
from campaign_guard.models.campaign import CAMPAIGN_STATUS_UNDER_REVIEW
from campaign_guard.moderation.decision import campaign_status_for
from campaign_guard.moderation.engine import CampaignLike, analyze_campaign, batch_moderate
from campaign_guard.moderation.review import ReviewAction, apply_manual_review
from campaign_guard.moderation.rules import RuleSet, default_rules
from campaign_guard.schemas.campaign import CampaignIn
from campaign_guard.schemas.moderation import (
    BatchItemError,
    ModerationDetails,
    ModerationResult,
    ModerationScores,
)

# Configure logger for this module
logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """Raised when a moderation result or campaign status could not be written.

    The computed result travels with the exception so callers can still show
    the decision while storage is unavailable.
    """

    def __init__(self, message: str, result: ModerationResult | None = None) -> None:
        super().__init__(message)
        self.result = result


class CampaignNotFoundError(LookupError):
    """Raised when a stored campaign does not exist."""


class ModerationResultNotFoundError(LookupError):
    """Raised when a moderation result id does not exist."""


def to_moderation_result(row: CampaignModeration) -> ModerationResult:
    """Convert a CampaignModeration row into the API schema."""
    return ModerationResult(
        id=row.id,
        campaign_id=row.campaign_id,
        timestamp=as_utc(row.moderated_at),
        processing_time=row.processing_time,
        scores=ModerationScores(
            luxury=row.luxury_score,
            inappropriate=row.inappropriate_score,
            fraud=row.fraud_score,
            need_validation=row.need_validation_score,
            trust=row.trust_score,
            overall=row.moderation_score,
        ),
        decision=row.decision,
        flags=list(row.flags or []),
        recommendations=list(row.recommendations or []),
        details=ModerationDetails.model_validate(row.details or {}),
        review_type=row.review_type,
        reviewed_by=row.reviewed_by,
        review_notes=row.review_notes,
        requested_changes=list(row.requested_changes or []),
        parent_id=row.parent_id,
    )


class ModerationService:
    """Service running campaign moderation against one database session.

    Scoring itself is delegated to :mod:`campaign_guard.moderation`; this
    class only adds storage of results, campaign status updates and history.
    """

    def __init__(self, db: Session, rules: RuleSet | None = None) -> None:
        self.db = db
        self.rules = rules or default_rules()

    # -- persistence ---------------------------------------------------------

    def store_moderation_result(self, result: ModerationResult) -> ModerationResult:
        """Insert a result as a new audit row.

        Args:
            result: Result to store; any ``id`` it carries is ignored.

        Returns:
            The same result with the id of the new row.

        Raises:
            PersistenceError: If the insert fails.
        """
        row = CampaignModeration(
            campaign_id=result.campaign_id,
            moderation_score=result.scores.overall,
            luxury_score=result.scores.luxury,
            inappropriate_score=result.scores.inappropriate,
            fraud_score=result.scores.fraud,
            need_validation_score=result.scores.need_validation,
            trust_score=result.scores.trust,
            decision=result.decision,
            flags=list(result.flags),
            details=result.details.model_dump(),
            recommendations=list(result.recommendations),
            processing_time=result.processing_time,
            moderated_at=result.timestamp,
            review_type=result.review_type,
            reviewed_by=result.reviewed_by,
            review_notes=result.review_notes,
            requested_changes=list(result.requested_changes),
            parent_id=result.parent_id,
        )
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(
                "Error storing moderation result for campaign %s",
                result.campaign_id,
                exc_info=True,
            )
            raise PersistenceError("Failed to store moderation result", result) from exc

        return result.model_copy(update={"id": row.id})

    def update_campaign_status(self, campaign_id: str, result: ModerationResult) -> str:
        """Reflect a decision on the campaign's denormalised status columns.

        Args:
            campaign_id: Campaign to update.
            result: Result whose decision, score and timestamp are written.

        Returns:
            The new campaign status.

        Raises:
            CampaignNotFoundError: If the campaign does not exist.
            PersistenceError: If the update fails.
        """
        new_status = campaign_status_for(result.decision)
        try:
            campaign = self.db.get(Campaign, campaign_id)
            if campaign is None:
                raise CampaignNotFoundError(f"Campaign {campaign_id} not found")
            campaign.status = new_status
            campaign.moderation_score = result.scores.overall
            campaign.moderated_at = result.timestamp
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error updating campaign %s status", campaign_id, exc_info=True)
            raise PersistenceError("Failed to update campaign status", result) from exc

        return new_status

    # -- moderation ----------------------------------------------------------

    def moderate_campaign(
        self,
        campaign: CampaignLike,
        *,
        update_status: bool | None = None,
    ) -> ModerationResult:
        """Analyse a campaign, store the result and optionally update its status.

        Args:
            campaign: Campaign snapshot or mapping.
            update_status: Whether to write the campaign status; defaults to
                ``MODERATION_UPDATE_CAMPAIGN_STATUS``.

        Returns:
            The stored result, carrying its audit row id.

        Raises:
            PersistenceError: If storing the result or the status fails. The
                computed (and, for status failures, stored) result is attached.
        """
        if update_status is None:
            update_status = settings.moderation_update_campaign_status

        result = analyze_campaign(campaign, self.rules)
        stored = self.store_moderation_result(result)
        logger.info(
            "Campaign %s moderated: %s (score %.2f)",
            stored.campaign_id,
            stored.decision,
            stored.scores.overall,
        )

        if update_status and stored.campaign_id is not None:
            try:
                self.update_campaign_status(stored.campaign_id, stored)
            except CampaignNotFoundError:
                logger.debug("Campaign %s is not stored locally; status left alone", stored.campaign_id)
            except PersistenceError as exc:
                raise PersistenceError(str(exc), stored) from exc

        if stored.decision == "review":
            logger.info("Campaign %s queued for manual review", stored.campaign_id)
        return stored

    def load_campaign(self, campaign_id: str) -> CampaignIn:
        """Snapshot a stored campaign for moderation.

        Raises:
            CampaignNotFoundError: If the campaign does not exist.
        """
        campaign = self.db.get(Campaign, campaign_id)
        if campaign is None:
            raise CampaignNotFoundError(f"Campaign {campaign_id} not found")
        return CampaignIn.model_validate(campaign)

    def moderate_stored_campaign(
        self,
        campaign_id: str,
        *,
        update_status: bool | None = None,
    ) -> ModerationResult:
        """Re-moderate a campaign already in the database."""
        return self.moderate_campaign(self.load_campaign(campaign_id), update_status=update_status)

    def batch_moderate(
        self,
        campaigns: Iterable[CampaignLike],
        *,
        update_status: bool | None = None,
    ) -> list[ModerationResult | BatchItemError]:
        """Moderate and store campaigns one after another.

        Analysis failures become :class:`BatchItemError` slots. When storage
        fails the computed result is still returned in its slot so no scoring
        work is lost.
        """

        def _moderate(campaign: CampaignLike, _rules: RuleSet) -> ModerationResult:
            try:
                return self.moderate_campaign(campaign, update_status=update_status)
            except PersistenceError as exc:
                if exc.result is None:
                    raise
                logger.warning("Moderation result for %s not persisted: %s", exc.result.campaign_id, exc)
                return exc.result

        return batch_moderate(campaigns, self.rules, analyze=_moderate)

    # -- audit trail ---------------------------------------------------------

    def get_result(self, result_id: int) -> ModerationResult:
        """Return one stored result.

        Raises:
            ModerationResultNotFoundError: If no row has that id.
        """
        row = self.db.get(CampaignModeration, result_id)
        if row is None:
            raise ModerationResultNotFoundError(f"Moderation result {result_id} not found")
        return to_moderation_result(row)

    def get_moderation_history(self, campaign_id: str) -> list[ModerationResult]:
        """Return every stored result for a campaign, newest first."""
        rows = (
            self.db.query(CampaignModeration)
            .filter(CampaignModeration.campaign_id == campaign_id)
            .order_by(CampaignModeration.moderated_at.desc(), CampaignModeration.id.desc())
            .all()
        )
        return [to_moderation_result(row) for row in rows]

    def review(
        self,
        result_id: int,
        action: ReviewAction | str,
        notes: str = "",
        reviewer_id: str | None = None,
    ) -> ModerationResult:
        """Record a reviewer's decision on a stored result.

        A new manual row is appended and the campaign status is updated to
        match the reviewer's decision; the reviewed row is not modified.

        Raises:
            ModerationResultNotFoundError: If ``result_id`` does not exist.
            ValueError: If ``action`` is unknown.
            PersistenceError: If the review cannot be stored.
        """
        original = self.get_result(result_id)
        manual = apply_manual_review(original, action, notes, reviewer_id)
        stored = self.store_moderation_result(manual)
        logger.info(
            "Manual review of result %s by %s: %s",
            result_id,
            reviewer_id or "unknown reviewer",
            stored.decision,
        )

        if stored.campaign_id is not None:
            try:
                self.update_campaign_status(stored.campaign_id, stored)
            except CampaignNotFoundError:
                logger.debug("Campaign %s is not stored locally; status left alone", stored.campaign_id)
            except PersistenceError as exc:
                raise PersistenceError(str(exc), stored) from exc
        return stored

    def moderation_queue(self, limit: int | None = None) -> list[Campaign]:
        """Return campaigns waiting for manual review, oldest decision first."""
        limit = limit or settings.moderation_queue_limit
        return (
            self.db.query(Campaign)
            .filter(Campaign.status == CAMPAIGN_STATUS_UNDER_REVIEW)
            .order_by(Campaign.moderated_at.asc(), Campaign.id.asc())
            .limit(limit)
            .all()
        )
