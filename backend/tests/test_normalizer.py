"""
Key normalization: deterministic, no fuzzy matching.
"""
import pytest


@pytest.mark.parametrize("raw,expected", [
    ("Fatty Fish", "fatty_fish"),
    ("  fatty-fish ", "fatty_fish"),
    ("Extra Virgin Olive Oil", "extra_virgin_olive_oil"),
    ("High Fructose Corn Syrup", "hfcs"),
    ("high-fructose corn syrup", "hfcs"),
    ("Acesulfame Potassium", "acesulfame_k"),
    ("E171", "titanium_dioxide"),
    ("Monosodium Glutamate (MSG)", "monosodium_glutamate_msg"),
    ("Polysorbate 80", "polysorbate_80"),
    ("BHT", "bha_bht"),
])
def test_normalize_key(raw, expected):
    from ultrascore.normalization.normalizer import normalize_key
    assert normalize_key(raw) == expected


@pytest.mark.parametrize("raw", ["", None, 42, "   ", "---"])
def test_normalize_key_empty(raw):
    from ultrascore.normalization.normalizer import normalize_key
    assert normalize_key(raw) == ""


def test_lookup_known_and_unknown():
    from ultrascore.evidence.tables import ADDITIVE_SCORES, SWEETENER_SCORES
    from ultrascore.normalization.normalizer import lookup
    assert lookup(ADDITIVE_SCORES, "Titanium Dioxide").score == -2
    assert lookup(SWEETENER_SCORES, "Splenda").score == -0.5
    assert lookup(ADDITIVE_SCORES, "unobtainium") is None
    assert lookup(ADDITIVE_SCORES, "") is None


def test_lookup_is_not_substring_match():
    from ultrascore.evidence.tables import ADDITIVE_SCORES
    from ultrascore.normalization.normalizer import lookup
    assert lookup(ADDITIVE_SCORES, "citric acid powder") is None
