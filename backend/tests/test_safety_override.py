"""
Safety override: gate below 20, fail open on any oracle problem, Avoid/F on a misleading verdict.
Ollama calls are mocked.
"""
import pytest
import requests
from unittest.mock import patch, MagicMock

from ultrascore.models.analysis import (
    HealthierAlternative,
    NutrientProfile,
    ProcessingLevel,
    ProductAnalysis,
    ProductCategory,
)


@pytest.fixture(autouse=True)
def _safety_enabled(monkeypatch):
    from ultrascore import config
    monkeypatch.setattr(config, "SAFETY_CHECK_ENABLED", True)


def _water(name="Cyanide Water"):
    return ProductAnalysis(
        is_consumer_product=True,
        product_name=name,
        product_category=ProductCategory.BEVERAGE,
        beverage_type="water",
        processing_level=ProcessingLevel.UNPROCESSED,
        healthier_alternative=HealthierAlternative("Tap Water", "Also water"),
    )


def _scored(analysis):
    from ultrascore.scoring.dispatcher import calculate_health_score
    return calculate_health_score(analysis)


def _misleading_oracle(corrected=0, reason="Cyanide is a lethal poison"):
    from ultrascore.safety.override import OracleVerdict
    oracle = MagicMock()
    oracle.judge.return_value = OracleVerdict(True, corrected, reason)
    return oracle


def test_misleading_verdict_overrides():
    from ultrascore.safety.override import apply_safety_override
    analysis = _water()
    before = _scored(analysis)
    assert before.final_score == 100
    oracle = _misleading_oracle()

    after = apply_safety_override(analysis, before, oracle)

    oracle.judge.assert_called_once_with("Cyanide Water", 100, "Excellent")
    assert after.final_score == 0
    assert (after.category, after.grade) == ("Avoid", "F")
    assert after.override_reason == "Cyanide is a lethal poison"
    assert after.warnings[-1] == "Cyanide is a lethal poison"
    assert after.healthier_alternative is None
    assert len(after.breakdown.adjustments) == 1
    line = after.breakdown.adjustments[0]
    assert line.points == -100
    assert line.reason == "Safety Override: Cyanide is a lethal poison"
    # Base score and confidence carry over; the input result is untouched
    assert after.breakdown.base_score == before.breakdown.base_score
    assert after.confidence == before.confidence
    assert before.final_score == 100
    assert before.override_reason is None


def test_corrected_score_used():
    from ultrascore.safety.override import apply_safety_override
    analysis = _water()
    after = apply_safety_override(analysis, _scored(analysis), _misleading_oracle(corrected=5))
    assert after.final_score == 5
    assert after.grade == "F"


def test_gate_below_20_never_calls_oracle():
    from ultrascore.safety.override import apply_safety_override
    analysis = ProductAnalysis(
        is_consumer_product=True,
        product_name="Cola",
        product_category=ProductCategory.BEVERAGE,
        beverage_type="soda",
        nutrients=NutrientProfile(added_sugar=10),
        processing_level=ProcessingLevel.ULTRA_PROCESSED,
    )
    before = _scored(analysis)
    assert before.final_score < 20
    oracle = _misleading_oracle()
    assert apply_safety_override(analysis, before, oracle) is before
    oracle.judge.assert_not_called()


def test_disabled_by_config(monkeypatch):
    from ultrascore import config
    from ultrascore.safety.override import apply_safety_override
    monkeypatch.setattr(config, "SAFETY_CHECK_ENABLED", False)
    analysis = _water()
    before = _scored(analysis)
    oracle = _misleading_oracle()
    assert apply_safety_override(analysis, before, oracle) is before
    oracle.judge.assert_not_called()


def test_no_oracle_passes_through():
    from ultrascore.safety.override import apply_safety_override
    analysis = _water()
    before = _scored(analysis)
    assert apply_safety_override(analysis, before, None) is before


class TestFailOpen:
    def test_oracle_returns_none(self):
        from ultrascore.safety.override import apply_safety_override
        analysis = _water()
        before = _scored(analysis)
        oracle = MagicMock()
        oracle.judge.return_value = None
        assert apply_safety_override(analysis, before, oracle) == before

    def test_oracle_raises(self):
        from ultrascore.safety.override import apply_safety_override
        analysis = _water()
        before = _scored(analysis)
        oracle = MagicMock()
        oracle.judge.side_effect = RuntimeError("boom")
        assert apply_safety_override(analysis, before, oracle) == before

    def test_not_misleading(self):
        from ultrascore.safety.override import OracleVerdict, apply_safety_override
        analysis = _water("Spring Water")
        before = _scored(analysis)
        oracle = MagicMock()
        oracle.judge.return_value = OracleVerdict(False)
        assert apply_safety_override(analysis, before, oracle) == before

    @patch("ultrascore.llm.requests.post")
    def test_ollama_timeout(self, mock_post):
        from ultrascore.safety.override import OllamaSafetyOracle, apply_safety_override
        mock_post.side_effect = requests.Timeout("timed out")
        analysis = _water()
        before = _scored(analysis)
        assert apply_safety_override(analysis, before, OllamaSafetyOracle(timeout=1)) == before

    @patch("ultrascore.llm.requests.post")
    def test_ollama_garbage(self, mock_post):
        from ultrascore.safety.override import OllamaSafetyOracle, apply_safety_override
        mock_post.return_value = MagicMock(json=lambda: {"response": "I think it is fine!"})
        mock_post.return_value.raise_for_status = MagicMock()
        analysis = _water()
        before = _scored(analysis)
        assert apply_safety_override(analysis, before, OllamaSafetyOracle(timeout=1)) == before


@pytest.mark.parametrize("payload", [
    None,
    "isMisleading",
    {},
    {"isMisleading": "true"},
    {"isMisleading": 1},
    {"isMisleading": True, "correctedScore": 150},
    {"isMisleading": True, "correctedScore": -1},
    {"isMisleading": True, "correctedScore": "zero"},
])
def test_verdict_shape_rejected(payload):
    from ultrascore.safety.override import OracleVerdict
    assert OracleVerdict.from_payload(payload) is None


def test_verdict_defaults():
    from ultrascore.safety.override import OracleVerdict
    v = OracleVerdict.from_payload({"isMisleading": True})
    assert v.is_misleading is True
    assert v.corrected_score == 0
    assert v.reason
    v = OracleVerdict.from_payload({"isMisleading": False, "correctedScore": "ignored"})
    assert v == OracleVerdict(False)


@patch("ultrascore.llm.requests.post")
def test_ollama_oracle_parses_fenced_json(mock_post):
    from ultrascore.safety.override import OllamaSafetyOracle
    mock_post.return_value = MagicMock(json=lambda: {
        "response": '```json\n{"isMisleading": true, "correctedScore": 0, "reason": "Toxic substance"}\n```'
    })
    mock_post.return_value.raise_for_status = MagicMock()
    v = OllamaSafetyOracle(timeout=3).judge("Bleach Smoothie", 88, "Excellent")
    assert v.is_misleading is True
    assert v.reason == "Toxic substance"
    _, kwargs = mock_post.call_args
    assert kwargs["timeout"] == 3
    assert "Bleach Smoothie" in kwargs["json"]["prompt"]


@patch("ultrascore.llm.requests.post")
def test_ollama_oracle_http_error(mock_post):
    from ultrascore.safety.override import OllamaSafetyOracle
    mock_post.return_value = MagicMock()
    mock_post.return_value.raise_for_status.side_effect = requests.HTTPError("500")
    assert OllamaSafetyOracle(timeout=1).judge("Water", 100, "Excellent") is None
