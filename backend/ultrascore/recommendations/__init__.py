"""
Add-on, alternative and pairing suggestions derived from a scored product.
"""
from .engine import (
    detect_gaps,
    calculate_addon_relevance,
    matches_food_category,
    gap_reason,
    generate_recommendations,
    should_show_recommendation,
)
from .tables import (
    ADDON_RECOMMENDATIONS,
    CATEGORY_ALTERNATIVES,
    PAIRING_SUGGESTIONS,
    FOOD_CATEGORY_KEYWORDS,
    GAP_REASONS,
)

__all__ = [
    "detect_gaps",
    "calculate_addon_relevance",
    "matches_food_category",
    "gap_reason",
    "generate_recommendations",
    "should_show_recommendation",
    "ADDON_RECOMMENDATIONS",
    "CATEGORY_ALTERNATIVES",
    "PAIRING_SUGGESTIONS",
    "FOOD_CATEGORY_KEYWORDS",
    "GAP_REASONS",
]
