"""
Structured product analysis: the single input record of the scoring engine.

Produced by an extractor from free-form AI output. from_dict is the only place that
deals with loose JSON shapes; everything downstream reads typed, optional fields.
Absent values are None, never a missing attribute.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ProductCategory(str, Enum):
    FOOD = "Food"
    BEVERAGE = "Beverage"
    PERSONAL_CARE = "PersonalCare"


class ProcessingLevel(str, Enum):
    """NOVA groups 1-4."""
    UNPROCESSED = "Unprocessed/Minimally Processed"
    CULINARY = "Processed Culinary Ingredients"
    PROCESSED = "Processed Foods"
    ULTRA_PROCESSED = "Ultra-Processed Foods"


def _pick(d: dict, *keys: str) -> Any:
    """First present key wins; extractors emit camelCase, stored records use snake_case."""
    for key in keys:
        if key in d:
            return d[key]
    return None


def _opt_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug("ANALYSIS non-numeric value dropped value=%r", value)
        return None


def _opt_bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


def _str_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        if value is not None:
            logger.debug("ANALYSIS non-list value dropped value=%r", value)
        return []
    return [
        str(v) for v in value
        if isinstance(v, (str, int, float)) and not isinstance(v, bool) and str(v).strip()
    ]


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


# (attribute, camelCase key, legacy key) for every per-100g nutrient
_NUTRIENT_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("calories", "calories", "calories"),
    ("protein", "protein", "proteinG"),
    ("total_fat", "totalFat", "totalFatG"),
    ("saturated_fat", "saturatedFat", "saturatedFatG"),
    ("unsaturated_fat", "unsaturatedFat", "unsaturatedFatG"),
    ("trans_fat", "transFat", "transFatG"),
    ("omega3", "omega3", "omega3G"),
    ("carbohydrates", "carbohydrates", "carbohydratesG"),
    ("fiber", "fiber", "fiberG"),
    ("added_sugar", "addedSugar", "addedSugarG"),
    ("sodium", "sodium", "sodiumMg"),
    ("vitamin_a", "vitaminA", "vitaminA"),
    ("vitamin_c", "vitaminC", "vitaminC"),
    ("vitamin_e", "vitaminE", "vitaminE"),
    ("calcium", "calcium", "calcium"),
    ("iron", "iron", "iron"),
    ("magnesium", "magnesium", "magnesium"),
    ("potassium", "potassium", "potassium"),
)


@dataclass(frozen=True)
class NutrientProfile:
    """Per 100g (or 100ml for beverages). Units: g, except sodium/minerals in mg, vitamin A in mcg."""
    calories: Optional[float] = None
    protein: Optional[float] = None
    total_fat: Optional[float] = None
    saturated_fat: Optional[float] = None
    unsaturated_fat: Optional[float] = None
    trans_fat: Optional[float] = None
    omega3: Optional[float] = None
    carbohydrates: Optional[float] = None
    fiber: Optional[float] = None
    added_sugar: Optional[float] = None
    sodium: Optional[float] = None
    vitamin_a: Optional[float] = None
    vitamin_c: Optional[float] = None
    vitamin_e: Optional[float] = None
    calcium: Optional[float] = None
    iron: Optional[float] = None
    magnesium: Optional[float] = None
    potassium: Optional[float] = None

    def to_dict(self) -> dict:
        """camelCase, absent fields omitted."""
        out = {}
        for attr, camel, _ in _NUTRIENT_FIELDS:
            val = getattr(self, attr)
            if val is not None:
                out[camel] = val
        return out

    @classmethod
    def from_dict(cls, d: dict) -> "NutrientProfile":
        kwargs = {
            attr: _opt_float(_pick(d, camel, legacy, attr))
            for attr, camel, legacy in _NUTRIENT_FIELDS
        }
        return cls(**kwargs)


@dataclass(frozen=True)
class PersonalCareDetails:
    harmful_ingredients: list[str] = field(default_factory=list)
    beneficial_ingredients: list[str] = field(default_factory=list)
    has_fragrance: bool = False
    is_cruelty_free: bool = False
    is_ewg_verified: bool = False

    def to_dict(self) -> dict:
        return {
            "harmfulIngredients": list(self.harmful_ingredients),
            "beneficialIngredients": list(self.beneficial_ingredients),
            "hasFragrance": self.has_fragrance,
            "isCrueltyFree": self.is_cruelty_free,
            "isEWGVerified": self.is_ewg_verified,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "PersonalCareDetails":
        return cls(
            harmful_ingredients=_str_list(_pick(d, "harmfulIngredients", "harmful_ingredients")),
            beneficial_ingredients=_str_list(_pick(d, "beneficialIngredients", "beneficial_ingredients")),
            has_fragrance=bool(_opt_bool(_pick(d, "hasFragrance", "has_fragrance"))),
            is_cruelty_free=bool(_opt_bool(_pick(d, "isCrueltyFree", "is_cruelty_free"))),
            is_ewg_verified=bool(_opt_bool(_pick(d, "isEWGVerified", "isEwgVerified", "is_ewg_verified"))),
        )


@dataclass(frozen=True)
class HealthierAlternative:
    product_name: str
    description: str = ""
    estimated_score: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "productName": self.product_name,
            "description": self.description,
            "estimatedScore": self.estimated_score,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Optional["HealthierAlternative"]:
        name = _opt_str(_pick(d, "productName", "product_name"))
        if not name:
            return None
        return cls(
            product_name=name,
            description=_opt_str(d.get("description")) or "",
            estimated_score=_opt_float(_pick(d, "estimatedScore", "estimated_score")),
        )


@dataclass(frozen=True)
class ProductAnalysis:
    is_consumer_product: bool
    product_name: str = "Unknown Product"
    # Unknown category strings are kept verbatim so the dispatcher can reject them.
    product_category: Union[ProductCategory, str, None] = None
    rejection_reason: Optional[str] = None
    processing_level: Optional[ProcessingLevel] = None
    nutrients: Optional[NutrientProfile] = None
    glycemic_load: Optional[float] = None
    protein_sources: list[str] = field(default_factory=list)
    fat_sources: list[str] = field(default_factory=list)
    additives: list[str] = field(default_factory=list)
    sweeteners: list[str] = field(default_factory=list)
    is_fermented: bool = False
    fermentation_type: Optional[str] = None
    has_live_cultures: bool = False
    polyphenol_sources: list[str] = field(default_factory=list)
    whole_food_percentage: Optional[float] = None
    fruit_veg_percentage: Optional[float] = None
    personal_care_details: Optional[PersonalCareDetails] = None
    beverage_type: Optional[str] = None
    healthier_alternative: Optional[HealthierAlternative] = None
    # Self-reported by the extractor; advisory only.
    data_completeness: Optional[float] = None

    def to_dict(self) -> dict:
        category = self.product_category
        return {
            "isConsumerProduct": self.is_consumer_product,
            "rejectionReason": self.rejection_reason,
            "productName": self.product_name,
            "productCategory": category.value if isinstance(category, ProductCategory) else category,
            "processingLevel": self.processing_level.value if self.processing_level else None,
            "nutrientsPer100g": self.nutrients.to_dict() if self.nutrients else None,
            "glycemicLoad": self.glycemic_load,
            "proteinSources": list(self.protein_sources),
            "fatSources": list(self.fat_sources),
            "additives": list(self.additives),
            "sweeteners": list(self.sweeteners),
            "isFermented": self.is_fermented,
            "fermentationType": self.fermentation_type,
            "hasLiveCultures": self.has_live_cultures,
            "polyphenolSources": list(self.polyphenol_sources),
            "wholeFoodPercentage": self.whole_food_percentage,
            "fruitVegPercentage": self.fruit_veg_percentage,
            "personalCareDetails": (
                self.personal_care_details.to_dict() if self.personal_care_details else None
            ),
            "beverageType": self.beverage_type,
            "healthierAlternative": (
                self.healthier_alternative.to_dict() if self.healthier_alternative else None
            ),
            "dataCompleteness": self.data_completeness,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "ProductAnalysis":
        raw_category = _opt_str(_pick(d, "productCategory", "product_category"))
        category: Union[ProductCategory, str, None] = raw_category
        if raw_category is not None:
            try:
                category = ProductCategory(raw_category)
            except ValueError:
                logger.info("ANALYSIS unknown product_category=%s", raw_category)

        raw_level = _opt_str(_pick(d, "processingLevel", "processing_level"))
        level: Optional[ProcessingLevel] = None
        if raw_level is not None:
            try:
                level = ProcessingLevel(raw_level)
            except ValueError:
                logger.info("ANALYSIS unknown processing_level=%s (no NOVA adjustment)", raw_level)

        nutrients_raw = _pick(d, "nutrientsPer100g", "nutrients_per_100g", "nutrients")
        care_raw = _pick(d, "personalCareDetails", "personal_care_details")
        alt_raw = _pick(d, "healthierAlternative", "healthier_alternative")

        return cls(
            is_consumer_product=bool(_opt_bool(_pick(d, "isConsumerProduct", "is_consumer_product"))),
            product_name=_opt_str(_pick(d, "productName", "product_name")) or "Unknown Product",
            product_category=category,
            rejection_reason=_opt_str(_pick(d, "rejectionReason", "rejection_reason")),
            processing_level=level,
            nutrients=NutrientProfile.from_dict(nutrients_raw) if isinstance(nutrients_raw, dict) else None,
            glycemic_load=_opt_float(_pick(d, "glycemicLoad", "glycemic_load")),
            protein_sources=_str_list(_pick(d, "proteinSources", "protein_sources")),
            fat_sources=_str_list(_pick(d, "fatSources", "fat_sources")),
            additives=_str_list(d.get("additives")),
            sweeteners=_str_list(d.get("sweeteners")),
            is_fermented=bool(_opt_bool(_pick(d, "isFermented", "is_fermented"))),
            fermentation_type=_opt_str(_pick(d, "fermentationType", "fermentation_type")),
            has_live_cultures=bool(_opt_bool(_pick(d, "hasLiveCultures", "has_live_cultures"))),
            polyphenol_sources=_str_list(_pick(d, "polyphenolSources", "polyphenol_sources")),
            whole_food_percentage=_opt_float(_pick(d, "wholeFoodPercentage", "whole_food_percentage")),
            fruit_veg_percentage=_opt_float(_pick(d, "fruitVegPercentage", "fruit_veg_percentage")),
            personal_care_details=(
                PersonalCareDetails.from_dict(care_raw) if isinstance(care_raw, dict) else None
            ),
            beverage_type=_opt_str(_pick(d, "beverageType", "beverage_type")),
            healthier_alternative=(
                HealthierAlternative.from_dict(alt_raw) if isinstance(alt_raw, dict) else None
            ),
            data_completeness=_opt_float(_pick(d, "dataCompleteness", "data_completeness")),
        )
