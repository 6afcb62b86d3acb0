# src/campaign_guard/models/campaign.py
"""SQLAlchemy model for the campaign rows read by moderation."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, DateTime, Float, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campaign_guard.db.session import Base
from campaign_guard.db.time import utcnow
from campaign_guard.moderation.decision import (
    CAMPAIGN_STATUS_ACTIVE,
    CAMPAIGN_STATUS_DRAFT,
    CAMPAIGN_STATUS_REJECTED,
    CAMPAIGN_STATUS_UNDER_REVIEW,
)

__all__ = [
    "CAMPAIGN_STATUS_ACTIVE",
    "CAMPAIGN_STATUS_DRAFT",
    "CAMPAIGN_STATUS_REJECTED",
    "CAMPAIGN_STATUS_UNDER_REVIEW",
    "Campaign",
]


class Campaign(Base):
    """Fundraising campaign submitted by a creator.

    Campaign CRUD lives elsewhere; moderation only reads the content columns
    and writes the denormalised status, score and timestamp.
    """

    __tablename__ = "campaigns"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    creator_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    story: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    need_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    goal_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    # List of {"item", "description", "amount"} objects in creator order.
    budget_breakdown: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)

    # Denormalised moderation outcome: draft, active, under_review, rejected.
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=CAMPAIGN_STATUS_DRAFT,
        index=True,
    )
    moderation_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    moderated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
