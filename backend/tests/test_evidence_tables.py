"""
Evidence tables: shape, read-only access, band coverage.
"""
import pytest


def test_evidence_weights():
    from ultrascore.evidence import tables as t
    assert t.STRONG == 1.0
    assert t.MODERATE == 0.75
    assert t.EMERGING == 0.5
    assert t.CONFLICTING == 0.25
    assert t.EVIDENCE_WEIGHTS["CONFLICTING"] == 0.25


def test_tables_are_read_only():
    from ultrascore.evidence import tables as t
    with pytest.raises(TypeError):
        t.BEVERAGE_BASE_SCORES["water"] = 0
    with pytest.raises(TypeError):
        t.ADDITIVE_SCORES["new_thing"] = None


def test_nova_multipliers_ordered():
    from ultrascore.evidence.tables import NOVA_MULTIPLIERS
    from ultrascore.models.analysis import ProcessingLevel
    values = [NOVA_MULTIPLIERS[level] for level in ProcessingLevel]
    assert values == [1.05, 1.00, 0.92, 0.78]


def test_beverage_table_has_thirteen_entries():
    from ultrascore.evidence.tables import BEVERAGE_BASE_SCORES
    assert len(BEVERAGE_BASE_SCORES) == 13
    assert BEVERAGE_BASE_SCORES["water"] == 100
    assert BEVERAGE_BASE_SCORES["soda"] == 20
    assert BEVERAGE_BASE_SCORES["energy_drink"] == 35


def test_score_bands_cover_0_to_100():
    from ultrascore.evidence.tables import SCORE_BANDS
    from ultrascore.scoring.grading import grade_for_score
    assert [b.min_score for b in SCORE_BANDS] == [80, 60, 40, 20, 0]
    seen = {grade_for_score(score) for score in range(0, 101)}
    assert seen == {(b.label, b.grade) for b in SCORE_BANDS}
    assert grade_for_score(79) == ("Good", "B")
    assert grade_for_score(80) == ("Excellent", "A")


def test_personal_care_rules_case_insensitive():
    from ultrascore.evidence.tables import PERSONAL_CARE_PENALTIES
    sulfates = next(r for r in PERSONAL_CARE_PENALTIES if r.key == "sulfates_sls_sles")
    assert sulfates.matches("Sodium Laureth Sulfate")
    assert sulfates.matches("SLES")
    assert not sulfates.matches("Glycerin")
    fragrance = next(r for r in PERSONAL_CARE_PENALTIES if r.flag == "has_fragrance")
    assert not fragrance.matches("Parfum")
