"""
Evidence-based scoring tables (NRF9.3 + NOVA hybrid, GRADE-style evidence weighting).

Pure data. Built once at import and exposed read-only; safe to share across concurrent callers.
Keys of ingredient-style tables are normalized keys (see ultrascore.normalization.normalizer).
"""
from types import MappingProxyType
from typing import Mapping

from ultrascore.evidence.schema import (
    AdditiveRating,
    ConfidenceTier,
    FermentationProfile,
    NutrientLimit,
    NutrientTarget,
    PersonalCareRule,
    PolyphenolProfile,
    ScoreBand,
)
from ultrascore.models.analysis import ProcessingLevel

# ---------------------------------------------------------------------------
# Evidence weights
# ---------------------------------------------------------------------------
STRONG = 1.0        # Cochrane reviews, large RCTs (saturated fat, added sugars, fiber)
MODERATE = 0.75     # Protein quality, omega ratios, whole grains
EMERGING = 0.5      # Ultra-processing effects, specific polyphenols
CONFLICTING = 0.25  # Artificial sweeteners, some additives

EVIDENCE_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "STRONG": STRONG,
    "MODERATE": MODERATE,
    "EMERGING": EMERGING,
    "CONFLICTING": CONFLICTING,
})

# Additive confidence tier -> weight applied to its score
TIER_WEIGHTS: Mapping[ConfidenceTier, float] = MappingProxyType({
    ConfidenceTier.HIGH: STRONG,
    ConfidenceTier.MODERATE: MODERATE,
    ConfidenceTier.LOW: CONFLICTING,
})

# ---------------------------------------------------------------------------
# Score bands (0-100), highest first
# ---------------------------------------------------------------------------
SCORE_BANDS: tuple[ScoreBand, ...] = (
    ScoreBand(80, "Excellent", "A"),
    ScoreBand(60, "Good", "B"),
    ScoreBand(40, "Moderate", "C"),
    ScoreBand(20, "Poor", "D"),
    ScoreBand(0, "Avoid", "F"),
)

# ---------------------------------------------------------------------------
# NOVA processing multipliers (applied once, after additive adjustments)
# ---------------------------------------------------------------------------
NOVA_MULTIPLIERS: Mapping[ProcessingLevel, float] = MappingProxyType({
    ProcessingLevel.UNPROCESSED: 1.05,
    ProcessingLevel.CULINARY: 1.00,
    ProcessingLevel.PROCESSED: 0.92,
    ProcessingLevel.ULTRA_PROCESSED: 0.78,
})

# ---------------------------------------------------------------------------
# NRF9.3 daily reference values
# ---------------------------------------------------------------------------
NUTRIENT_TARGETS: Mapping[str, NutrientTarget] = MappingProxyType({
    "fiber": NutrientTarget(dv=25, max_points=10),
    "protein": NutrientTarget(dv=50, max_points=8),
    "vitamin_a": NutrientTarget(dv=900, max_points=2, unit="mcg"),
    "vitamin_c": NutrientTarget(dv=90, max_points=2, unit="mg"),
    "vitamin_e": NutrientTarget(dv=15, max_points=2, unit="mg"),
    "calcium": NutrientTarget(dv=1000, max_points=2, unit="mg"),
    "iron": NutrientTarget(dv=18, max_points=2, unit="mg"),
    "magnesium": NutrientTarget(dv=400, max_points=2, unit="mg"),
    "potassium": NutrientTarget(dv=4700, max_points=2, unit="mg"),
})

NUTRIENT_LIMITS: Mapping[str, NutrientLimit] = MappingProxyType({
    "saturated_fat": NutrientLimit(limit=20, max_penalty=15),
    "added_sugar": NutrientLimit(limit=50, max_penalty=20),
    "sodium": NutrientLimit(limit=2300, max_penalty=15, unit="mg"),
    # No safe intake: penalty is per gram, not relative to a limit.
    "trans_fat": NutrientLimit(limit=0, max_penalty=15),
})

# Sodium is only penalized above this share of the daily limit (percent)
SODIUM_PENALTY_FLOOR_PCT = 20
TRANS_FAT_POINTS_PER_GRAM = 10

# Omega-3: one point per 0.25g, at most 3
OMEGA3_GRAMS_PER_POINT = 0.25
OMEGA3_MAX_POINTS = 3
FRUIT_VEG_MAX_POINTS = 10
POLYPHENOL_MAX_POINTS = 5

GLYCEMIC_LOAD_THRESHOLDS: Mapping[str, dict] = MappingProxyType({
    "low": {"max": 10, "points": 2},
    "medium": {"max": 19, "points": 0},
    "high": {"min": 20, "points": -2},
})

# ---------------------------------------------------------------------------
# Protein source scores (BMJ 2020 meta-analysis)
# ---------------------------------------------------------------------------
PROTEIN_SOURCE_SCORES: Mapping[str, float] = MappingProxyType({
    "fatty_fish": 3,
    "legumes": 2.5,
    "nuts_seeds": 2,
    "tofu_tempeh": 2,
    "greek_yogurt": 1,
    "poultry": 0.5,
    "eggs": 0.5,
    "whey_protein": 0.5,
    "unprocessed_red_meat": -1,
    "processed_meat": -3,  # IARC Group 1
})

# ---------------------------------------------------------------------------
# Fat source scores
# ---------------------------------------------------------------------------
FAT_SOURCE_SCORES: Mapping[str, float] = MappingProxyType({
    "omega3_epa_dha": 3,
    "extra_virgin_olive_oil": 2.5,
    "omega3_ala": 1.5,
    "mufa_other": 1.5,
    "pufa_seed_oils": 0.5,
    "whole_egg_fat": 0,
    "dairy_fat": 0,
    "coconut_oil": -0.5,
    "butter": -1,
    "meat_saturated_fat": -1.5,
    "industrial_trans_fat": -5,
    "natural_trans_fat": 0,
})

# ---------------------------------------------------------------------------
# Additives
# ---------------------------------------------------------------------------
ADDITIVE_SCORES: Mapping[str, AdditiveRating] = MappingProxyType({
    # Avoid
    "trans_fats": AdditiveRating(-5, ConfidenceTier.HIGH, "Banned for good reason"),
    "bha_bht": AdditiveRating(-2, ConfidenceTier.MODERATE, "Possible carcinogen"),
    "sodium_nitrite": AdditiveRating(-2, ConfidenceTier.HIGH, "Nitrosamine formation"),
    "titanium_dioxide": AdditiveRating(-2, ConfidenceTier.MODERATE, "EU banned"),
    "brominated_vegetable_oil": AdditiveRating(-2, ConfidenceTier.HIGH, "FDA moving to ban"),
    # Caution
    "carrageenan": AdditiveRating(-1.5, ConfidenceTier.MODERATE, "Gut inflammation in animal studies"),
    "polysorbate_80": AdditiveRating(-1.5, ConfidenceTier.MODERATE, "Microbiome disruption"),
    "artificial_colors": AdditiveRating(-1, ConfidenceTier.MODERATE, "Hyperactivity link"),
    "hfcs": AdditiveRating(-1, ConfidenceTier.LOW, "Similar to sugar metabolically"),
    # Neutral
    "msg": AdditiveRating(0, ConfidenceTier.HIGH, "Safe; syndrome debunked"),
    "soy_lecithin": AdditiveRating(0, ConfidenceTier.HIGH, "From whole food; fine"),
    "citric_acid": AdditiveRating(0, ConfidenceTier.HIGH, "Natural; no concerns"),
    "xanthan_gum": AdditiveRating(0, ConfidenceTier.HIGH, "Fiber-like; safe"),
    "guar_gum": AdditiveRating(0, ConfidenceTier.HIGH, "Soluble fiber; beneficial"),
    # Beneficial
    "tocopherols": AdditiveRating(0.5, ConfidenceTier.HIGH, "Vitamin E preservation"),
    "ascorbic_acid": AdditiveRating(0.5, ConfidenceTier.HIGH, "Vitamin C preservative"),
})

# Sweeteners are always weighted CONFLICTING regardless of the per-entry tier.
SWEETENER_SCORES: Mapping[str, AdditiveRating] = MappingProxyType({
    "stevia": AdditiveRating(-0.5, ConfidenceTier.LOW, "Most neutral profile"),
    "erythritol": AdditiveRating(-1, ConfidenceTier.MODERATE, "Recent CV concerns"),
    "xylitol": AdditiveRating(-1, ConfidenceTier.MODERATE, "Recent CV concerns"),
    "aspartame": AdditiveRating(0, ConfidenceTier.LOW, "FDA/EFSA maintain safety"),
    "sucralose": AdditiveRating(-0.5, ConfidenceTier.LOW, "Some microbiome effects"),
    "saccharin": AdditiveRating(-0.5, ConfidenceTier.LOW, "Limited concerns"),
    "acesulfame_k": AdditiveRating(-0.5, ConfidenceTier.LOW, "Limited data"),
})

CARDIOVASCULAR_SWEETENERS = frozenset({"erythritol", "xylitol"})

# ---------------------------------------------------------------------------
# Fermented foods (Stanford 2021)
# ---------------------------------------------------------------------------
FERMENTED_SCORES: Mapping[str, FermentationProfile] = MappingProxyType({
    "kefir": FermentationProfile(3, True),
    "kimchi": FermentationProfile(3, True),
    "natto": FermentationProfile(3, True),
    "sauerkraut_raw": FermentationProfile(2.5, True),
    "miso_unpasteurized": FermentationProfile(2, True),
    "greek_yogurt": FermentationProfile(2, True),
    "kombucha": FermentationProfile(1.5, True),
    "sourdough": FermentationProfile(0.5, False),
    "pasteurized_fermented": FermentationProfile(0, False),
})

# ---------------------------------------------------------------------------
# Polyphenols (per serving of a rich source)
# ---------------------------------------------------------------------------
POLYPHENOL_SCORES: Mapping[str, PolyphenolProfile] = MappingProxyType({
    "sulforaphane": PolyphenolProfile(2.5, ConfidenceTier.MODERATE, ("broccoli sprouts", "cruciferous")),
    "flavanols": PolyphenolProfile(2, ConfidenceTier.MODERATE, ("dark chocolate", "tea", "apples")),
    "anthocyanins": PolyphenolProfile(2, ConfidenceTier.MODERATE, ("berries", "red cabbage")),
    "egcg": PolyphenolProfile(1.5, ConfidenceTier.MODERATE, ("green tea",)),
    "lycopene": PolyphenolProfile(1.5, ConfidenceTier.MODERATE, ("tomatoes", "watermelon")),
    "resveratrol": PolyphenolProfile(1, ConfidenceTier.LOW, ("red grapes", "wine")),
    "quercetin": PolyphenolProfile(1, ConfidenceTier.LOW, ("onions", "apples")),
    "curcumin": PolyphenolProfile(1, ConfidenceTier.LOW, ("turmeric",)),
})

# ---------------------------------------------------------------------------
# Personal care (rules are evaluated in this order)
# ---------------------------------------------------------------------------
PERSONAL_CARE_BASE_SCORE = 70

PERSONAL_CARE_PENALTIES: tuple[PersonalCareRule, ...] = (
    PersonalCareRule("parabens", r"paraben", -8, "Contains Parabens", "Harmful Ingredient", MODERATE),
    PersonalCareRule("phthalates", r"phthalate", -8, "Contains Phthalates", "Harmful Ingredient", MODERATE),
    PersonalCareRule("sulfates_sls_sles", r"sulfate|sls|sles", -3, "Contains Sulfates (SLS/SLES)", "Harsh Ingredient", MODERATE),
    PersonalCareRule("formaldehyde_releasers", r"formaldehyde", -5, "Contains Formaldehyde/Releasers", "Harmful Ingredient", STRONG),
    PersonalCareRule("triclosan", r"triclosan", -4, "Contains Triclosan", "Harmful Ingredient", MODERATE),
    PersonalCareRule("synthetic_fragrance", "", -3, "Contains Synthetic Fragrance", "Fragrance", MODERATE, flag="has_fragrance"),
)

PERSONAL_CARE_BONUSES: tuple[PersonalCareRule, ...] = (
    PersonalCareRule("ceramides", r"ceramide", 5, "Contains Ceramides", "Beneficial Ingredient", MODERATE),
    PersonalCareRule("vitamin_e_tocopherol", r"vitamin e|tocopherol", 3, "Contains Vitamin E", "Beneficial Ingredient", MODERATE),
    PersonalCareRule("niacinamide", r"niacinamide", 3, "Contains Niacinamide", "Beneficial Ingredient", MODERATE),
    PersonalCareRule("hyaluronic_acid", r"hyaluronic", 2, "Contains Hyaluronic Acid", "Beneficial Ingredient", MODERATE),
    PersonalCareRule("cruelty_free", "", 3, "Cruelty-Free", "Ethics", STRONG, flag="is_cruelty_free"),
    PersonalCareRule("ewg_verified", "", 5, "EWG Verified", "Certification", STRONG, flag="is_ewg_verified"),
)

# ---------------------------------------------------------------------------
# Beverages (hydration context)
# ---------------------------------------------------------------------------
BEVERAGE_DEFAULT_BASE_SCORE = 50

BEVERAGE_BASE_SCORES: Mapping[str, float] = MappingProxyType({
    "water": 100,
    "mineral_water": 100,
    "sparkling_water": 98,
    "herbal_tea": 95,
    "green_tea": 92,
    "black_coffee": 90,
    "coconut_water": 80,
    "kombucha": 75,  # same as the kombucha swap estimate in recommendations
    "diet_soda": 60,
    "sports_drink": 50,
    "fruit_juice": 40,
    "energy_drink": 35,
    "soda": 20,
})

BEVERAGE_SUGAR_POINTS_PER_GRAM = 3
BEVERAGE_SUGAR_MAX_PENALTY = 40
BEVERAGE_SWEETENER_PENALTY = 5
BEVERAGE_POTASSIUM_MIN_MG = 100
BEVERAGE_POTASSIUM_BONUS = 2

# ---------------------------------------------------------------------------
# Warnings (user-facing)
# ---------------------------------------------------------------------------
WARNING_FLAGS: Mapping[str, str] = MappingProxyType({
    "ARTIFICIAL_SWEETENERS": "Health effects actively debated; research evolving",
    "ERYTHRITOL_XYLITOL": "Recent studies suggest cardiovascular concerns",
    "PROCESSED_MEAT": "Strong evidence links to cancer risk (IARC Group 1)",
    "ULTRA_PROCESSED": "Emerging research suggests effects beyond nutrients",
    "MISSING_FIBER": "Score estimated; fiber data unavailable",
    "INSUFFICIENT_DATA": "Limited data available; score is estimated",
})
