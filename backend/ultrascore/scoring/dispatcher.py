"""
Single entry point for scoring: rejects non-consumer input and unknown categories,
then routes by exact category match. Pure; no I/O.
"""
import logging
from typing import Callable, Dict

from ultrascore.errors import NotConsumerProductError, UnsupportedCategoryError
from ultrascore.models.analysis import ProductAnalysis, ProductCategory
from ultrascore.models.result import ScoringResult
from ultrascore.scoring.beverage import score_beverage
from ultrascore.scoring.food import score_food
from ultrascore.scoring.personal_care import score_personal_care

logger = logging.getLogger(__name__)

SCORERS: Dict[ProductCategory, Callable[[ProductAnalysis], ScoringResult]] = {
    ProductCategory.FOOD: score_food,
    ProductCategory.BEVERAGE: score_beverage,
    ProductCategory.PERSONAL_CARE: score_personal_care,
}


def calculate_health_score(analysis: ProductAnalysis) -> ScoringResult:
    if not analysis.is_consumer_product:
        logger.info("SCORE_REJECTED not_consumer product=%s", analysis.product_name)
        raise NotConsumerProductError(analysis.rejection_reason)

    category = analysis.product_category
    try:
        scorer = SCORERS[ProductCategory(category)]
    except (ValueError, KeyError):
        logger.info("SCORE_REJECTED category=%s product=%s", category, analysis.product_name)
        raise UnsupportedCategoryError(category)

    return scorer(analysis)
