import logging

import pytest

from services.timezones import distance_hours, is_known_label, resolve_offset_hours


@pytest.mark.parametrize("label,expected", [
    ("Central Europe (CET)", 1),
    ("UK / Ireland (GMT)", 0),
    ("US – Pacific Time (PST)", -8),
    ("US – Central Time (CST)", -6),
    ("US – Eastern Time (EST)", -5),
    ("Australia (AEST)", 10),
    ("Europe (CET/CEST)", 1),
    ("US Eastern (EST/EDT)", -5),
])
def test_exact_survey_labels(label, expected):
    assert resolve_offset_hours(label) == expected


def test_keyword_fallback_for_hand_typed_labels():
    assert resolve_offset_hours("Berlin (CEST)") == 1
    assert resolve_offset_hours("pacific / pdt") == -8
    assert resolve_offset_hours("  London BST ") == 0


def test_keywords_match_whole_words_only():
    # "forest" contains "est" but is not Eastern time
    assert resolve_offset_hours("Forest Hills") == 0
    assert not is_known_label("Forest Hills")


def test_missing_label_is_utc():
    assert resolve_offset_hours(None) == 0
    assert resolve_offset_hours("   ") == 0
    assert not is_known_label(None)


def test_unknown_label_warns_once(caplog):
    with caplog.at_level(logging.WARNING, logger="services.timezones"):
        assert resolve_offset_hours("Mars Colony Standard") == 0
        assert resolve_offset_hours("Mars Colony Standard") == 0
    warnings = [r for r in caplog.records if "Mars Colony Standard" in r.getMessage()]
    assert len(warnings) == 1


def test_distance_is_absolute_and_symmetric():
    cet = "Central Europe (CET)"
    pst = "US – Pacific Time (PST)"
    assert distance_hours(cet, pst) == 9
    assert distance_hours(pst, cet) == 9
    assert distance_hours(cet, cet) == 0
