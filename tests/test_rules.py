# tests/test_rules.py
"""Tests for loading and validating moderation rule files."""

from importlib import resources

import pytest
import yaml

from campaign_guard.moderation.rules import RulesConfigError, load_rules, parse_rules


def _default_document() -> dict:
    text = resources.files("campaign_guard.moderation").joinpath("default_rules.yaml").read_text()
    return yaml.safe_load(text)


def test_default_rules_load() -> None:
    rules = load_rules()

    assert rules.version == "2024.1"
    assert rules.weights.baseline == 50.0
    assert rules.weights.luxury == -0.25
    assert rules.luxury.points_per_match == 15.0
    assert rules.inappropriate.points_per_match == 25.0
    assert rules.fraud.urgency_max_matches == 2
    assert set(rules.need_validation.need_types) == {"medical", "education", "emergency"}
    assert [category.name for category in rules.trust.categories] == [
        "transparency",
        "scripture",
        "community",
    ]
    assert set(rules.quick_checks) == {"has_luxury", "has_inappropriate", "has_suspicious", "has_trust"}


def test_load_rules_is_cached() -> None:
    assert load_rules() is load_rules()


def test_rules_are_immutable() -> None:
    rules = load_rules()

    with pytest.raises(AttributeError):
        rules.version = "changed"  # type: ignore[misc]
    with pytest.raises(TypeError):
        rules.need_validation.need_types["other"] = None  # type: ignore[index]


def test_load_rules_from_path(tmp_path) -> None:
    document = _default_document()
    document["version"] = "test-1"
    document["weights"]["baseline"] = 40
    path = tmp_path / "rules.yaml"
    path.write_text(yaml.safe_dump(document))

    rules = load_rules(str(path))

    assert rules.version == "test-1"
    assert rules.weights.baseline == 40.0


def test_load_rules_missing_file(tmp_path) -> None:
    with pytest.raises(RulesConfigError):
        load_rules(str(tmp_path / "missing.yaml"))


def test_load_rules_rejects_non_mapping(tmp_path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(RulesConfigError, match="mapping"):
        load_rules(str(path))


def test_parse_rules_missing_section() -> None:
    document = _default_document()
    del document["fraud"]

    with pytest.raises(RulesConfigError, match="fraud"):
        parse_rules(document)


def test_parse_rules_missing_key() -> None:
    document = _default_document()
    del document["weights"]["trust"]

    with pytest.raises(RulesConfigError):
        parse_rules(document)


def test_parse_rules_invalid_pattern() -> None:
    document = _default_document()
    document["inappropriate"]["patterns"] = ["(unclosed"]

    with pytest.raises(RulesConfigError, match="Invalid pattern"):
        parse_rules(document)


def test_parse_rules_bad_number() -> None:
    document = _default_document()
    document["luxury"]["budget"]["item_threshold"] = "a lot"

    with pytest.raises(RulesConfigError):
        parse_rules(document)


@pytest.mark.parametrize("multiple", [0, -100, 2.5])
def test_parse_rules_round_multiple_must_be_positive_whole(multiple) -> None:
    document = _default_document()
    document["fraud"]["round_amounts"]["multiple_of"] = multiple

    with pytest.raises(RulesConfigError, match="multiple_of"):
        parse_rules(document)
