# src/campaign_guard/db/time.py
"""Timestamp helpers shared by models and services."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive timestamps read back from the database.

    SQLite drops the offset of ``DateTime(timezone=True)`` columns; every
    stored moderation timestamp is written in UTC, so a naive value is UTC.
    """
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)
