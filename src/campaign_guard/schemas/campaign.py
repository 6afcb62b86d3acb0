"""Campaign input schemas consumed by the moderation engine."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def lenient_text(value: Any) -> str | None:
    """Return text for strings and numbers, ``None`` for anything else."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    return None


def lenient_amount(value: Any) -> Decimal | None:
    """Parse a currency amount, mapping unparseable or non-finite input to ``None``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    elif not isinstance(value, (int, float, Decimal)):
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


class BudgetItemIn(BaseModel):
    """One line of a campaign budget breakdown."""

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    item: str | None = Field(default=None, description="What the money is for")
    category: str | None = Field(default=None, description="Alternative label used by older clients")
    description: str | None = None
    amount: Decimal | None = Field(default=None, description="Currency amount for this line")

    @field_validator("item", "category", "description", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str | None:
        return lenient_text(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> Decimal | None:
        return lenient_amount(value)

    @property
    def label(self) -> str:
        """Return the item name, falling back to the category."""
        return self.item or self.category or ""


class CampaignIn(BaseModel):
    """Immutable snapshot of the campaign fields moderation looks at.

    Every field is optional and loosely typed so that partially filled or
    sloppy campaigns still score: ids and text accept numbers, unreadable
    amounts count as zero and budget lines that are not objects are skipped.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        from_attributes=True,
        coerce_numbers_to_str=True,
    )

    id: str | None = None
    title: str | None = None
    story: str | None = None
    description: str | None = None
    need_type: str | None = Field(
        default=None,
        description="medical, education, emergency, community or other",
    )
    goal_amount: Decimal | None = None
    budget_breakdown: list[BudgetItemIn] | None = None

    @field_validator("id", "title", "story", "description", "need_type", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str | None:
        return lenient_text(value)

    @field_validator("goal_amount", mode="before")
    @classmethod
    def _goal_amount(cls, value: Any) -> Decimal | None:
        return lenient_amount(value)

    @field_validator("budget_breakdown", mode="before")
    @classmethod
    def _budget_breakdown(cls, value: Any) -> list[Any] | None:
        if value is None or isinstance(value, (str, bytes, Mapping)):
            return None
        try:
            items = list(value)
        except TypeError:
            return None
        return [item for item in items if isinstance(item, (Mapping, BudgetItemIn))]

    @property
    def budget_items(self) -> list[BudgetItemIn]:
        """Return the budget breakdown, or an empty list when absent."""
        return list(self.budget_breakdown or [])
