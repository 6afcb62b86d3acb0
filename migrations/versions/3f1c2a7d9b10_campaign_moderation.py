"""campaign moderation tables

Revision ID: 3f1c2a7d9b10
Revises:
Create Date: 2026-10-19 10:12:41.512304

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1c2a7d9b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create campaigns and the append-only campaign_moderation audit table."""
    op.create_table(
        "campaigns",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("creator_id", sa.String(length=64), nullable=True),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("story", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("need_type", sa.String(length=32), nullable=True),
        sa.Column("goal_amount", sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column("budget_breakdown", sa.JSON(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="draft"),
        sa.Column("moderation_score", sa.Float(), nullable=True),
        sa.Column("moderated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_campaigns_status", "campaigns", ["status"])

    op.create_table(
        "campaign_moderation",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("campaign_id", sa.String(length=64), nullable=True),
        sa.Column("moderation_score", sa.Float(), nullable=False),
        sa.Column("luxury_score", sa.Float(), nullable=False),
        sa.Column("inappropriate_score", sa.Float(), nullable=False),
        sa.Column("fraud_score", sa.Float(), nullable=False),
        sa.Column("need_validation_score", sa.Float(), nullable=False),
        sa.Column("trust_score", sa.Float(), nullable=False),
        sa.Column("decision", sa.String(length=16), nullable=False),
        sa.Column("flags", sa.JSON(), nullable=False),
        sa.Column("details", sa.JSON(), nullable=False),
        sa.Column("recommendations", sa.JSON(), nullable=False),
        sa.Column("processing_time", sa.Float(), nullable=False),
        sa.Column("moderated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("review_type", sa.String(length=16), nullable=False, server_default="automatic"),
        sa.Column("reviewed_by", sa.String(length=64), nullable=True),
        sa.Column("review_notes", sa.Text(), nullable=True),
        sa.Column("requested_changes", sa.JSON(), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["parent_id"], ["campaign_moderation.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_campaign_moderation_campaign_id",
        "campaign_moderation",
        ["campaign_id"],
    )
    op.create_index(
        "ix_campaign_moderation_moderated_at",
        "campaign_moderation",
        ["moderated_at"],
    )


def downgrade() -> None:
    """Drop the moderation tables."""
    op.drop_index("ix_campaign_moderation_moderated_at", table_name="campaign_moderation")
    op.drop_index("ix_campaign_moderation_campaign_id", table_name="campaign_moderation")
    op.drop_table("campaign_moderation")
    op.drop_index("ix_campaigns_status", table_name="campaigns")
    op.drop_table("campaigns")
