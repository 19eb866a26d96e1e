from .analysis import (
    ProductCategory,
    ProcessingLevel,
    NutrientProfile,
    PersonalCareDetails,
    HealthierAlternative,
    ProductAnalysis,
)
from .result import (
    ConfidenceLevel,
    Adjustment,
    ScoreBreakdown,
    ConfidenceRating,
    ScoringResult,
    Recommendation,
    RecommendationSet,
)

__all__ = [
    "ProductCategory",
    "ProcessingLevel",
    "NutrientProfile",
    "PersonalCareDetails",
    "HealthierAlternative",
    "ProductAnalysis",
    "ConfidenceLevel",
    "Adjustment",
    "ScoreBreakdown",
    "ConfidenceRating",
    "ScoringResult",
    "Recommendation",
    "RecommendationSet",
]
