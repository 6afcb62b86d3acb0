"""Campaign content moderation and trust scoring."""

from .decision import Approved, Decision, Rejected, Review, campaign_status_for, make_decision
from .engine import analyze_campaign, batch_moderate, check_content
from .review import ReviewAction, apply_manual_review, recommended_changes
from .rules import RuleSet, RulesConfigError, default_rules, load_rules

__all__ = [
    "Approved", "Decision", "Rejected", "Review",
    "ReviewAction",
    "RuleSet", "RulesConfigError",
    "analyze_campaign",
    "apply_manual_review",
    "batch_moderate",
    "campaign_status_for",
    "check_content",
    "default_rules",
    "load_rules",
    "make_decision",
    "recommended_changes",
]
