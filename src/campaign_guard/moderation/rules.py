"""Loading of the moderation rule tables.

The keyword catalogues, point values, thresholds and composite weights are
data shipped in ``default_rules.yaml``. They are parsed once into a tree of
frozen dataclasses holding compiled patterns, so scoring functions receive an
immutable :class:`RuleSet` and never consult module-level state.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from campaign_guard.core.settings import settings

DEFAULT_RULES_FILE = "default_rules.yaml"


class RulesConfigError(ValueError):
    """Raised when a rules file is missing, unreadable or malformed."""


@dataclass(frozen=True)
class ScoreWeights:
    """Baseline and per-dimension coefficients of the composite score."""

    baseline: float
    luxury: float
    inappropriate: float
    fraud: float
    need_validation: float
    trust: float


@dataclass(frozen=True)
class GoalTier:
    """Penalty applied when the campaign goal exceeds ``above``."""

    above: Decimal
    penalty: float


@dataclass(frozen=True)
class LuxuryRules:
    patterns: tuple[re.Pattern[str], ...]
    points_per_match: float
    item_threshold: Decimal
    item_penalty: float
    item_exempt_need_types: frozenset[str]
    large_item_threshold: Decimal
    large_item_penalty: float
    goal_tiers: tuple[GoalTier, ...]


@dataclass(frozen=True)
class KeywordRules:
    patterns: tuple[re.Pattern[str], ...]
    points_per_match: float


@dataclass(frozen=True)
class FraudRules:
    patterns: tuple[re.Pattern[str], ...]
    points_per_match: float
    urgency_pattern: re.Pattern[str]
    urgency_max_matches: int
    urgency_penalty: float
    short_story_length: int
    short_story_penalty: float
    missing_budget_penalty: float
    round_multiple: int
    round_min_items: int
    round_penalty: float


@dataclass(frozen=True)
class NeedTypeRules:
    """Legitimacy checks for one need type; unused fields keep their zero defaults."""

    legitimate: tuple[re.Pattern[str], ...] = ()
    suspicious: tuple[re.Pattern[str], ...] = ()
    missing_legitimate_penalty: float = 0.0
    suspicious_penalty: float = 0.0
    min_story_length: int = 0
    short_story_penalty: float = 0.0


@dataclass(frozen=True)
class NeedValidationRules:
    baseline: float
    need_types: Mapping[str, NeedTypeRules]


@dataclass(frozen=True)
class TrustCategory:
    name: str
    points: float
    patterns: tuple[re.Pattern[str], ...]


@dataclass(frozen=True)
class TrustRules:
    baseline: float
    categories: tuple[TrustCategory, ...]


@dataclass(frozen=True)
class RuleSet:
    """Complete, immutable configuration of the moderation engine."""

    version: str
    weights: ScoreWeights
    luxury: LuxuryRules
    inappropriate: KeywordRules
    fraud: FraudRules
    need_validation: NeedValidationRules
    trust: TrustRules
    quick_checks: Mapping[str, re.Pattern[str]]


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        raise RulesConfigError(f"Invalid pattern {pattern!r}: {exc}") from exc


def _compile_all(patterns: Any) -> tuple[re.Pattern[str], ...]:
    if not isinstance(patterns, list):
        raise RulesConfigError(f"Expected a list of patterns, got {type(patterns).__name__}")
    return tuple(_compile(p) for p in patterns)


def _positive_int(value: Any, name: str) -> int:
    number = int(value)
    if number <= 0 or number != value:
        raise RulesConfigError(f"{name} must be a positive whole number, got {value!r}")
    return number


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if not isinstance(value, Mapping):
        raise RulesConfigError(f"Missing or invalid section: {key!r}")
    return value


def _build_need_type(data: Mapping[str, Any]) -> NeedTypeRules:
    return NeedTypeRules(
        legitimate=_compile_all(data.get("legitimate", [])),
        suspicious=_compile_all(data.get("suspicious", [])),
        missing_legitimate_penalty=float(data.get("missing_legitimate_penalty", 0)),
        suspicious_penalty=float(data.get("suspicious_penalty", 0)),
        min_story_length=int(data.get("min_story_length", 0)),
        short_story_penalty=float(data.get("short_story_penalty", 0)),
    )


def parse_rules(data: Mapping[str, Any]) -> RuleSet:
    """Build a :class:`RuleSet` from an already-parsed rules document.

    Args:
        data: Mapping with the structure of ``default_rules.yaml``.

    Returns:
        The compiled rule set.

    Raises:
        RulesConfigError: If a section is missing or a value has the wrong type.
    """
    try:
        weights = _section(data, "weights")
        luxury = _section(data, "luxury")
        luxury_budget = _section(luxury, "budget")
        inappropriate = _section(data, "inappropriate")
        fraud = _section(data, "fraud")
        urgency = _section(fraud, "urgency")
        short_story = _section(fraud, "short_story")
        round_amounts = _section(fraud, "round_amounts")
        need_validation = _section(data, "need_validation")
        trust = _section(data, "trust")

        return RuleSet(
            version=str(data.get("version", "unversioned")),
            weights=ScoreWeights(
                baseline=float(weights["baseline"]),
                luxury=float(weights["luxury"]),
                inappropriate=float(weights["inappropriate"]),
                fraud=float(weights["fraud"]),
                need_validation=float(weights["need_validation"]),
                trust=float(weights["trust"]),
            ),
            luxury=LuxuryRules(
                patterns=_compile_all(luxury["patterns"]),
                points_per_match=float(luxury["points_per_match"]),
                item_threshold=Decimal(str(luxury_budget["item_threshold"])),
                item_penalty=float(luxury_budget["item_penalty"]),
                item_exempt_need_types=frozenset(luxury_budget.get("item_exempt_need_types", [])),
                large_item_threshold=Decimal(str(luxury_budget["large_item_threshold"])),
                large_item_penalty=float(luxury_budget["large_item_penalty"]),
                goal_tiers=tuple(
                    GoalTier(above=Decimal(str(tier["above"])), penalty=float(tier["penalty"]))
                    for tier in luxury.get("goal_tiers", [])
                ),
            ),
            inappropriate=KeywordRules(
                patterns=_compile_all(inappropriate["patterns"]),
                points_per_match=float(inappropriate["points_per_match"]),
            ),
            fraud=FraudRules(
                patterns=_compile_all(fraud["patterns"]),
                points_per_match=float(fraud["points_per_match"]),
                urgency_pattern=_compile(urgency["pattern"]),
                urgency_max_matches=int(urgency["max_matches"]),
                urgency_penalty=float(urgency["penalty"]),
                short_story_length=int(short_story["min_length"]),
                short_story_penalty=float(short_story["penalty"]),
                missing_budget_penalty=float(fraud["missing_budget_penalty"]),
                round_multiple=_positive_int(round_amounts["multiple_of"], "fraud.round_amounts.multiple_of"),
                round_min_items=int(round_amounts["min_items"]),
                round_penalty=float(round_amounts["penalty"]),
            ),
            need_validation=NeedValidationRules(
                baseline=float(need_validation["baseline"]),
                need_types=MappingProxyType(
                    {
                        str(name): _build_need_type(rules)
                        for name, rules in _section(need_validation, "need_types").items()
                    }
                ),
            ),
            trust=TrustRules(
                baseline=float(trust["baseline"]),
                categories=tuple(
                    TrustCategory(
                        name=str(name),
                        points=float(category["points"]),
                        patterns=_compile_all(category["patterns"]),
                    )
                    for name, category in _section(trust, "categories").items()
                ),
            ),
            quick_checks=MappingProxyType(
                {
                    str(name): _compile(pattern)
                    for name, pattern in dict(data.get("quick_check") or {}).items()
                }
            ),
        )
    except RulesConfigError:
        raise
    except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
        raise RulesConfigError(f"Malformed rules document: {exc}") from exc


@lru_cache(maxsize=8)
def load_rules(path: str | None = None) -> RuleSet:
    """Load and compile a rules file, caching the result per path.

    Args:
        path: Filesystem path of a YAML rules file; ``None`` selects the
            packaged defaults.

    Returns:
        The compiled rule set.

    Raises:
        RulesConfigError: If the file cannot be read or parsed.
    """
    try:
        if path is None:
            text = (
                resources.files("campaign_guard.moderation")
                .joinpath(DEFAULT_RULES_FILE)
                .read_text(encoding="utf-8")
            )
        else:
            text = Path(path).read_text(encoding="utf-8")
        data = yaml.safe_load(text)
    except (OSError, yaml.YAMLError) as exc:
        raise RulesConfigError(f"Could not load moderation rules from {path or DEFAULT_RULES_FILE}") from exc

    if not isinstance(data, Mapping):
        raise RulesConfigError("Rules document must be a mapping")
    return parse_rules(data)


def default_rules() -> RuleSet:
    """Return the rule set selected by ``MODERATION_RULES_PATH``."""
    return load_rules(settings.moderation_rules_path)
