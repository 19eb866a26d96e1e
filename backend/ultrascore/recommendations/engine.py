"""
Smart recommendations: only suggest when truly useful and relevant.

Three independent first-match-wins scans over static tables:
  addon        score < 80, nutrient gap + food-category match, relevance > 60
  alternative  score < 70, name trigger + minimum score gap
  pairing      name trigger only
Nothing is suggested at all for scores >= 85.
"""
import logging
from typing import Optional

from ultrascore.models.analysis import NutrientProfile, ProductAnalysis, ProductCategory
from ultrascore.models.result import Recommendation, RecommendationSet
from ultrascore.recommendations.tables import (
    ADDON_RECOMMENDATIONS,
    BEVERAGE_ALTERNATIVES,
    DEFAULT_GAP_REASON,
    FOOD_ALTERNATIVES,
    FOOD_CATEGORY_KEYWORDS,
    GAP_REASONS,
    PAIRING_SUGGESTIONS,
)

logger = logging.getLogger(__name__)

NO_RECOMMENDATION_SCORE = 85
ADDON_MAX_SCORE = 80
ALTERNATIVE_MAX_SCORE = 70

BASE_RELEVANCE = 60
MAX_RELEVANCE = 95
PAIRING_RELEVANCE = 75
MIN_SHOW_RELEVANCE = 60


def detect_gaps(analysis: ProductAnalysis, nutrients: NutrientProfile) -> list[str]:
    """Gap keys in priority order. Absent nutrient values are not gaps, except omega-3."""
    gaps = []
    if nutrients.fiber is not None and nutrients.fiber < 3:
        gaps.append("low_fiber")
    if nutrients.protein is not None and nutrients.protein < 5:
        gaps.append("low_protein")
    if not nutrients.omega3 or nutrients.omega3 < 0.1:
        gaps.append("low_omega3")
    if nutrients.added_sugar is not None and nutrients.added_sugar > 10:
        gaps.append("high_sugar")
    if not analysis.is_fermented and not analysis.has_live_cultures:
        gaps.append("needs_fermented")
    return gaps


def _severity_bonus(value: Optional[float], critical: float, moderate: float) -> int:
    """+25 below critical, +15 below moderate, else +5."""
    value = value or 0
    if value < critical:
        return 25
    if value < moderate:
        return 15
    return 5


def calculate_addon_relevance(gap: str, nutrients: NutrientProfile, boost: float) -> float:
    """Higher relevance for more severe deficiencies, plus up to 10 for the add-on's boost."""
    relevance = BASE_RELEVANCE
    if gap == "low_fiber":
        relevance += _severity_bonus(nutrients.fiber, 1, 2)
    elif gap == "low_protein":
        relevance += _severity_bonus(nutrients.protein, 2, 4)
    elif gap == "low_omega3":
        relevance += 15
    elif gap == "high_sugar":
        sugar = nutrients.added_sugar or 0
        relevance += 25 if sugar > 20 else 15 if sugar > 15 else 5
    elif gap == "needs_fermented":
        relevance += 10
    relevance += min(10, boost)
    return min(MAX_RELEVANCE, relevance)


def matches_food_category(product_name: str, category: str) -> bool:
    """product_name must already be lowercased."""
    keywords = FOOD_CATEGORY_KEYWORDS.get(category, (category,))
    return any(k in product_name for k in keywords)


def gap_reason(gap: str) -> str:
    return GAP_REASONS.get(gap, DEFAULT_GAP_REASON)


def _find_addon(analysis: ProductAnalysis, name: str) -> Optional[Recommendation]:
    nutrients = analysis.nutrients
    if nutrients is None:
        return None
    for gap in detect_gaps(analysis, nutrients):
        for addon in ADDON_RECOMMENDATIONS.get(gap, ()):
            applicable = any(
                category in name or matches_food_category(name, category)
                for category in addon.applicable_to
            )
            if not applicable:
                continue
            relevance = calculate_addon_relevance(gap, nutrients, addon.boost)
            if relevance > MIN_SHOW_RELEVANCE:
                return Recommendation(
                    type="addon",
                    product_name=addon.name,
                    description=addon.description,
                    reason=gap_reason(gap),
                    relevance_score=relevance,
                    estimated_score_boost=addon.boost,
                )
    return None


def _find_alternative(analysis: ProductAnalysis, name: str, final_score: int) -> Optional[Recommendation]:
    if analysis.product_category == ProductCategory.BEVERAGE or analysis.beverage_type:
        candidates = BEVERAGE_ALTERNATIVES
    else:
        candidates = FOOD_ALTERNATIVES
    for alt in candidates:
        gap = alt.estimated_score - final_score
        if any(trigger in name for trigger in alt.triggers) and gap >= alt.min_score_gap:
            return Recommendation(
                type="alternative",
                product_name=alt.alternative,
                description=alt.description,
                reason=f"Could improve your score by ~{gap} points",
                relevance_score=min(MAX_RELEVANCE, BASE_RELEVANCE + gap),
                estimated_score_boost=gap,
            )
    return None


def _find_pairing(name: str) -> Optional[Recommendation]:
    for pairings in PAIRING_SUGGESTIONS.values():
        for pairing in pairings:
            if any(trigger in name for trigger in pairing.triggers):
                return Recommendation(
                    type="pairing",
                    product_name=pairing.pairing,
                    description=pairing.reason,
                    reason="Synergistic pairing",
                    relevance_score=PAIRING_RELEVANCE,
                    estimated_score_boost=pairing.boost,
                )
    return None


def generate_recommendations(analysis: ProductAnalysis, final_score: int) -> RecommendationSet:
    if final_score >= NO_RECOMMENDATION_SCORE:
        return RecommendationSet()

    name = (analysis.product_name or "").lower()
    addon = _find_addon(analysis, name) if final_score < ADDON_MAX_SCORE else None
    alternative = _find_alternative(analysis, name, final_score) if final_score < ALTERNATIVE_MAX_SCORE else None
    pairing = _find_pairing(name)

    logger.info(
        "RECOMMEND product=%s score=%s addon=%s alternative=%s pairing=%s",
        analysis.product_name, final_score,
        addon.product_name if addon else None,
        alternative.product_name if alternative else None,
        pairing.product_name if pairing else None,
    )
    return RecommendationSet(addon=addon, alternative=alternative, pairing=pairing)


def should_show_recommendation(rec: Optional[Recommendation]) -> bool:
    """Final check before showing a recommendation to the user."""
    if rec is None:
        return False
    if rec.relevance_score < MIN_SHOW_RELEVANCE:
        return False
    return bool(rec.product_name and rec.description)
