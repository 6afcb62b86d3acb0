"""Flattening of campaign content into one searchable text blob."""

from __future__ import annotations

import re
from collections.abc import Iterable

from campaign_guard.schemas.campaign import CampaignIn


def extract_text_content(campaign: CampaignIn) -> str:
    """Return the lower-cased text moderation patterns are matched against.

    Title, story and description come first, followed by ``"{item}
    {description}"`` for every budget line in the order given. Missing
    fields contribute an empty string.
    """
    parts = [
        campaign.title or "",
        campaign.story or "",
        campaign.description or "",
    ]
    parts.extend(f"{item.label} {item.description or ''}" for item in campaign.budget_items)
    return " ".join(parts).lower()


def count_matches(text: str, patterns: Iterable[re.Pattern[str]]) -> int:
    """Count every occurrence of every pattern in ``text``."""
    return sum(1 for pattern in patterns for _ in pattern.finditer(text))


def any_match(text: str, patterns: Iterable[re.Pattern[str]]) -> bool:
    """Return True if at least one pattern occurs in ``text``."""
    return any(pattern.search(text) for pattern in patterns)


def matched_terms(text: str, patterns: Iterable[re.Pattern[str]]) -> list[str]:
    """Return the distinct matched substrings, in first-seen order."""
    seen: dict[str, None] = {}
    for pattern in patterns:
        for match in pattern.finditer(text):
            seen.setdefault(match.group(0).strip(), None)
    return list(seen)
