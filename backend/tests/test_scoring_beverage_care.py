"""
Beverage and personal care scorers, plus the category dispatcher.
"""
import pytest

from ultrascore.models.analysis import (
    NutrientProfile,
    PersonalCareDetails,
    ProcessingLevel,
    ProductAnalysis,
    ProductCategory,
)


def _beverage(beverage_type, nutrients=None, **kwargs):
    return ProductAnalysis(
        is_consumer_product=True,
        product_name=kwargs.pop("product_name", "Test Drink"),
        product_category=ProductCategory.BEVERAGE,
        beverage_type=beverage_type,
        nutrients=nutrients,
        **kwargs,
    )


def _care(details, **kwargs):
    return ProductAnalysis(
        is_consumer_product=True,
        product_name=kwargs.pop("product_name", "Test Lotion"),
        product_category=ProductCategory.PERSONAL_CARE,
        personal_care_details=details,
        **kwargs,
    )


class TestBeverage:
    def test_soda_with_sugar_clamps_to_zero(self):
        from ultrascore.scoring.beverage import score_beverage
        r = score_beverage(_beverage(
            "soda", NutrientProfile(added_sugar=10), processing_level=ProcessingLevel.ULTRA_PROCESSED,
        ))
        assert r.breakdown.base_score == 20
        assert r.breakdown.negative_points == pytest.approx(30)
        assert r.final_score == 0
        assert (r.category, r.grade) == ("Avoid", "F")
        assert r.nutrients == {"addedSugar": 10}

    def test_sugar_penalty_capped_at_40(self):
        from ultrascore.scoring.beverage import score_beverage
        r = score_beverage(_beverage("fruit_juice", NutrientProfile(added_sugar=25)))
        assert r.breakdown.negative_points == pytest.approx(40)
        assert r.final_score == 0

    def test_water_unprocessed(self):
        from ultrascore.models.result import ConfidenceLevel
        from ultrascore.scoring.beverage import score_beverage
        r = score_beverage(_beverage("Water", processing_level=ProcessingLevel.UNPROCESSED))
        assert r.final_score == 100
        assert (r.category, r.grade) == ("Excellent", "A")
        assert r.confidence.level == ConfidenceLevel.HIGH
        assert r.confidence.data_completeness == 80
        assert r.nutrients is None

    def test_sweetener_penalty_and_warning(self):
        from ultrascore.evidence.tables import WARNING_FLAGS
        from ultrascore.scoring.beverage import score_beverage
        r = score_beverage(_beverage(
            "diet soda",
            NutrientProfile(added_sugar=0),
            sweeteners=["aspartame", "acesulfame k"],
            processing_level=ProcessingLevel.ULTRA_PROCESSED,
        ))
        # (60 - 5 * 0.25) * 0.78 = 45.825
        assert r.breakdown.negative_points == pytest.approx(1.25)
        assert r.final_score == 46
        assert WARNING_FLAGS["ARTIFICIAL_SWEETENERS"] in r.warnings

    def test_potassium_bonus(self):
        from ultrascore.scoring.beverage import score_beverage
        r = score_beverage(_beverage("coconut_water", NutrientProfile(added_sugar=3, potassium=250)))
        # 80 - 9 + 2
        assert r.final_score == 73
        assert r.breakdown.positive_points == 2

    def test_potassium_at_threshold_no_bonus(self):
        from ultrascore.scoring.beverage import score_beverage
        r = score_beverage(_beverage("coconut_water", NutrientProfile(potassium=100)))
        assert r.breakdown.positive_points == 0

    @pytest.mark.parametrize("beverage_type", ["mystery_tonic", None, ""])
    def test_unknown_type_defaults_to_50(self, beverage_type):
        from ultrascore.scoring.beverage import score_beverage
        r = score_beverage(_beverage(beverage_type))
        assert r.breakdown.base_score == 50
        assert r.final_score == 50
        assert (r.category, r.grade) == ("Moderate", "C")

    def test_no_nutrients_skips_sugar_and_sweetener_rules(self):
        from ultrascore.scoring.beverage import score_beverage
        r = score_beverage(_beverage("green_tea", sweeteners=["stevia"]))
        assert r.final_score == 92
        assert r.breakdown.adjustments == []


class TestPersonalCare:
    def test_sulfate_and_fragrance(self):
        from ultrascore.models.result import ConfidenceLevel
        from ultrascore.scoring.personal_care import score_personal_care
        r = score_personal_care(_care(PersonalCareDetails(
            harmful_ingredients=["Sodium Laureth Sulfate"], has_fragrance=True,
        )))
        assert r.final_score == 64
        assert (r.category, r.grade) == ("Good", "B")
        assert [a.reason for a in r.breakdown.adjustments] == [
            "Contains Sulfates (SLS/SLES)",
            "Contains Synthetic Fragrance",
        ]
        assert r.confidence.level == ConfidenceLevel.MODERATE
        assert r.confidence.data_completeness == 70
        assert r.breakdown.nova_multiplier == 1.0
        assert r.nutrients is None

    def test_bonuses_and_flags(self):
        from ultrascore.scoring.personal_care import score_personal_care
        r = score_personal_care(_care(PersonalCareDetails(
            harmful_ingredients=["Methylparaben", "Propylparaben"],
            beneficial_ingredients=["Ceramide NP", "Tocopherol (Vitamin E)", "Niacinamide", "Sodium Hyaluronate"],
            is_cruelty_free=True,
            is_ewg_verified=True,
        )))
        # 70 - 16 + 5 + 3 + 3 + 0 (hyaluronate does not match "hyaluronic") + 3 + 5
        assert r.breakdown.negative_points == 16
        assert r.breakdown.positive_points == 19
        assert r.final_score == 73

    def test_no_details_is_base(self):
        from ultrascore.scoring.personal_care import score_personal_care
        r = score_personal_care(_care(None))
        assert r.final_score == 70
        assert r.breakdown.adjustments == []

    def test_only_listed_harmful_ingredients_penalized(self):
        from ultrascore.scoring.personal_care import score_personal_care
        r = score_personal_care(_care(PersonalCareDetails(
            harmful_ingredients=["Oxybenzone", "Coal Tar"],
        )))
        assert r.final_score == 70
        assert r.breakdown.negative_points == 0

    def test_clamped(self):
        from ultrascore.scoring.personal_care import score_personal_care
        r = score_personal_care(_care(PersonalCareDetails(
            harmful_ingredients=["paraben"] * 20,
        )))
        assert r.final_score == 0


class TestDispatcher:
    def test_routes_by_category(self):
        from ultrascore.scoring.dispatcher import calculate_health_score
        r = calculate_health_score(_beverage("water"))
        assert r.breakdown.base_score == 100
        r = calculate_health_score(_care(None))
        assert r.breakdown.base_score == 70

    def test_not_consumer_uses_rejection_reason(self):
        from ultrascore.errors import NotConsumerProductError, ScoringError
        from ultrascore.scoring.dispatcher import calculate_health_score
        a = ProductAnalysis(is_consumer_product=False, rejection_reason="A brick is not food")
        with pytest.raises(NotConsumerProductError, match="A brick is not food"):
            calculate_health_score(a)
        with pytest.raises(ScoringError):
            calculate_health_score(a)

    def test_not_consumer_default_message(self):
        from ultrascore.errors import NotConsumerProductError
        from ultrascore.scoring.dispatcher import calculate_health_score
        with pytest.raises(NotConsumerProductError, match="Not a consumer product"):
            calculate_health_score(ProductAnalysis(is_consumer_product=False))

    @pytest.mark.parametrize("category", ["Electronics", "food", None])
    def test_unknown_category(self, category):
        from ultrascore.errors import UnsupportedCategoryError
        from ultrascore.scoring.dispatcher import calculate_health_score
        a = ProductAnalysis(is_consumer_product=True, product_category=category)
        with pytest.raises(UnsupportedCategoryError) as exc:
            calculate_health_score(a)
        assert str(exc.value) == f"Unknown category: {category}"
