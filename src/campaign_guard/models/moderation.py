# src/campaign_guard/models/moderation.py
"""Append-only audit records produced by campaign moderation."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, Text, event
from sqlalchemy.orm import Mapped, mapped_column

from campaign_guard.db.session import Base
from campaign_guard.db.time import utcnow

REVIEW_TYPE_AUTOMATIC = "automatic"
REVIEW_TYPE_MANUAL = "manual"


class ImmutableRecordError(RuntimeError):
    """Raised when code attempts to modify a stored moderation record."""


class CampaignModeration(Base):
    """One moderation run (automatic) or reviewer decision (manual).

    Rows are never updated. Re-moderating a campaign or overriding a
    decision inserts a new row; manual rows point at the automatic row they
    override through ``parent_id``.
    """

    __tablename__ = "campaign_moderation"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Plain index rather than a foreign key: ad-hoc payloads may not exist in campaigns yet.
    campaign_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)

    moderation_score: Mapped[float] = mapped_column(Float, nullable=False)
    luxury_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    inappropriate_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    fraud_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    need_validation_score: Mapped[float] = mapped_column(Float, nullable=False, default=100.0)
    trust_score: Mapped[float] = mapped_column(Float, nullable=False, default=50.0)

    # approved | review | rejected
    decision: Mapped[str] = mapped_column(String(16), nullable=False)
    flags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    details: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    recommendations: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    # Milliseconds spent in the scoring pipeline; diagnostic only.
    processing_time: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    moderated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    review_type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=REVIEW_TYPE_AUTOMATIC,
    )
    reviewed_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
    review_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    requested_changes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("campaign_moderation.id"),
        nullable=True,
    )


@event.listens_for(CampaignModeration, "before_update")
def _reject_updates(mapper: Any, connection: Any, target: CampaignModeration) -> None:
    raise ImmutableRecordError(
        f"campaign_moderation row {target.id} is append-only and cannot be updated"
    )
