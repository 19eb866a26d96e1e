"""
ProductAnalysis boundary validation and result serialization.
"""
import pytest


def test_from_dict_camel_case():
    from ultrascore.models.analysis import ProductAnalysis, ProductCategory, ProcessingLevel
    a = ProductAnalysis.from_dict({
        "isConsumerProduct": True,
        "productName": "Plain Greek Yogurt",
        "productCategory": "Food",
        "processingLevel": "Processed Foods",
        "nutrientsPer100g": {"protein": 10, "fiber": 0, "addedSugar": 0, "sodium": 36},
        "proteinSources": ["greek_yogurt"],
        "isFermented": True,
        "fermentationType": "greek_yogurt",
        "hasLiveCultures": True,
    })
    assert a.is_consumer_product is True
    assert a.product_category == ProductCategory.FOOD
    assert a.processing_level == ProcessingLevel.PROCESSED
    assert a.nutrients.protein == 10.0
    assert a.nutrients.fiber == 0.0
    assert a.nutrients.saturated_fat is None
    assert a.protein_sources == ["greek_yogurt"]
    assert a.has_live_cultures is True


def test_from_dict_legacy_and_snake_keys():
    from ultrascore.models.analysis import ProductAnalysis
    a = ProductAnalysis.from_dict({
        "is_consumer_product": "true",
        "product_name": "Crackers",
        "product_category": "Food",
        "nutrientsPer100g": {"fiberG": 3, "sodiumMg": 500, "proteinG": "7.5"},
    })
    assert a.is_consumer_product is True
    assert a.nutrients.fiber == 3.0
    assert a.nutrients.sodium == 500.0
    assert a.nutrients.protein == 7.5


def test_from_dict_tolerates_garbage():
    from ultrascore.models.analysis import ProductAnalysis
    a = ProductAnalysis.from_dict({
        "isConsumerProduct": True,
        "productCategory": "Electronics",
        "processingLevel": "Deep Fried",
        "nutrientsPer100g": {"fiber": "lots", "protein": True, "sodium": None},
        "additives": "carrageenan",
        "sweeteners": None,
        "healthierAlternative": {"description": "no name"},
    })
    assert a.product_name == "Unknown Product"
    assert a.product_category == "Electronics"
    assert a.processing_level is None
    assert a.nutrients.fiber is None
    assert a.nutrients.protein is None
    assert a.additives == ["carrageenan"]
    assert a.sweeteners == []
    assert a.healthier_alternative is None


@pytest.mark.parametrize("field,value", [
    ("additives", 5),
    ("sweeteners", 1),
    ("proteinSources", {"tag": "fish"}),
    ("polyphenolSources", True),
    ("fatSources", 3.5),
])
def test_from_dict_non_list_values_become_empty(field, value):
    from ultrascore.models.analysis import ProductAnalysis
    a = ProductAnalysis.from_dict({"isConsumerProduct": True, "productCategory": "Food", field: value})
    assert a.additives == []
    assert a.sweeteners == []
    assert a.protein_sources == []
    assert a.polyphenol_sources == []
    assert a.fat_sources == []


def test_from_dict_drops_non_scalar_list_items():
    from ultrascore.models.analysis import ProductAnalysis
    a = ProductAnalysis.from_dict({
        "isConsumerProduct": True,
        "additives": ["msg", None, {"x": 1}, ["nested"], True, "  ", "e621"],
    })
    assert a.additives == ["msg", "e621"]


def test_personal_care_details_tolerate_scalars():
    from ultrascore.models.analysis import ProductAnalysis
    a = ProductAnalysis.from_dict({
        "isConsumerProduct": True,
        "productCategory": "PersonalCare",
        "personalCareDetails": {"harmfulIngredients": True, "beneficialIngredients": 7, "hasFragrance": "yes"},
    })
    details = a.personal_care_details
    assert details.harmful_ingredients == []
    assert details.beneficial_ingredients == []
    assert details.has_fragrance is True


def test_nutrient_profile_to_dict_omits_absent():
    from ultrascore.models.analysis import NutrientProfile
    n = NutrientProfile(fiber=2.0, added_sugar=5.0)
    assert n.to_dict() == {"fiber": 2.0, "addedSugar": 5.0}


def test_analysis_round_trip_keeps_values():
    from ultrascore.models.analysis import ProductAnalysis
    raw = {
        "isConsumerProduct": True,
        "productName": "Shampoo",
        "productCategory": "PersonalCare",
        "personalCareDetails": {
            "harmfulIngredients": ["Methylparaben"],
            "beneficialIngredients": [],
            "hasFragrance": True,
            "isCrueltyFree": False,
            "isEWGVerified": True,
        },
    }
    a = ProductAnalysis.from_dict(raw)
    again = ProductAnalysis.from_dict(a.to_dict())
    assert again == a
    assert again.personal_care_details.is_ewg_verified is True


def test_scoring_result_to_dict_is_json_safe():
    import json
    from ultrascore.models.analysis import ProductAnalysis, ProductCategory, NutrientProfile, HealthierAlternative
    from ultrascore.scoring.food import score_food
    a = ProductAnalysis(
        is_consumer_product=True,
        product_name="Toast",
        product_category=ProductCategory.FOOD,
        nutrients=NutrientProfile(fiber=4),
        healthier_alternative=HealthierAlternative("Sprouted Bread", "More fiber", 80),
    )
    payload = score_food(a).to_dict()
    json.dumps(payload)
    assert payload["productName"] == "Toast"
    assert payload["healthierAlternative"]["productName"] == "Sprouted Bread"
    assert payload["overrideReason"] is None
    assert payload["confidence"]["level"] == "LOW"
    assert payload["breakdown"]["baseScore"] == 50
