"""
Confidence rating from the share of tracked nutrient fields actually supplied.
Bands: >=80% complete = HIGH (x1.0), 50-79% = MODERATE (x0.95), <50% = LOW (x0.9).
"""
from typing import Tuple

from ultrascore.models.result import ConfidenceLevel, ConfidenceRating

HIGH_COMPLETENESS = 80
MODERATE_COMPLETENESS = 50

LOW_DATA_MESSAGE = "Limited nutritional data available"

# Categories without a completeness model report fixed ratings
BEVERAGE_CONFIDENCE = ConfidenceRating(ConfidenceLevel.HIGH, 80)
PERSONAL_CARE_CONFIDENCE = ConfidenceRating(ConfidenceLevel.MODERATE, 70)


def compute_confidence(present_fields: int, tracked_fields: int) -> Tuple[ConfidenceRating, float]:
    """
    completeness = present / tracked * 100 (50 when nothing is tracked).
    Returns (rating, multiplier); the multiplier is the last step before clamping.
    """
    if tracked_fields > 0:
        completeness = (present_fields / tracked_fields) * 100
    else:
        completeness = 50.0

    if completeness < MODERATE_COMPLETENESS:
        return ConfidenceRating(ConfidenceLevel.LOW, completeness, LOW_DATA_MESSAGE), 0.9
    if completeness < HIGH_COMPLETENESS:
        return ConfidenceRating(ConfidenceLevel.MODERATE, completeness), 0.95
    return ConfidenceRating(ConfidenceLevel.HIGH, completeness), 1.0
