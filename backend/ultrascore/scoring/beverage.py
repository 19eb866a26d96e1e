"""
Beverage scoring: per-type hydration base score, sugar/sweetener penalties, NOVA multiplier.
No completeness model; confidence is reported as HIGH/80%.
"""
import logging

from ultrascore.evidence import tables as t
from ultrascore.models.analysis import ProductAnalysis
from ultrascore.models.result import ScoreBreakdown, ScoringResult
from ultrascore.normalization.normalizer import lookup
from ultrascore.scoring.confidence import BEVERAGE_CONFIDENCE
from ultrascore.scoring.grading import finalize_score, grade_for_score
from ultrascore.scoring.ledger import ScoreLedger

logger = logging.getLogger(__name__)


def beverage_base_score(beverage_type) -> float:
    if not beverage_type:
        return t.BEVERAGE_DEFAULT_BASE_SCORE
    base = lookup(t.BEVERAGE_BASE_SCORES, beverage_type)
    return base if base is not None else t.BEVERAGE_DEFAULT_BASE_SCORE


def score_beverage(analysis: ProductAnalysis) -> ScoringResult:
    ledger = ScoreLedger()
    base_score = beverage_base_score(analysis.beverage_type)
    nutrients = analysis.nutrients

    if nutrients is not None:
        sugar = nutrients.added_sugar
        if sugar and sugar > 0:
            penalty = min(t.BEVERAGE_SUGAR_MAX_PENALTY, sugar * t.BEVERAGE_SUGAR_POINTS_PER_GRAM)
            ledger.debit("Added Sugar", f"{sugar:.1f}g sugar per 100ml", penalty, t.STRONG)

        if analysis.sweeteners:
            ledger.warn(t.WARNING_FLAGS["ARTIFICIAL_SWEETENERS"])
            ledger.debit(
                "Sweeteners",
                "Contains artificial sweeteners",
                t.BEVERAGE_SWEETENER_PENALTY * t.CONFLICTING,
                t.CONFLICTING,
            )

        if nutrients.potassium and nutrients.potassium > t.BEVERAGE_POTASSIUM_MIN_MG:
            ledger.credit("Electrolytes", "Contains potassium", t.BEVERAGE_POTASSIUM_BONUS, t.MODERATE)

    level = analysis.processing_level
    nova_multiplier = t.NOVA_MULTIPLIERS.get(level, 1.0) if level is not None else 1.0
    raw = ledger.net(base_score) * nova_multiplier

    final_score = finalize_score(raw)
    category, grade = grade_for_score(final_score)
    logger.info(
        "SCORE_BEVERAGE product=%s type=%s base=%s nova=%.2f final=%s",
        analysis.product_name, analysis.beverage_type, base_score, nova_multiplier, final_score,
    )

    return ScoringResult(
        final_score=final_score,
        category=category,
        grade=grade,
        product_name=analysis.product_name,
        breakdown=ScoreBreakdown(
            base_score=base_score,
            positive_points=ledger.positive_points,
            negative_points=ledger.negative_points,
            nova_multiplier=nova_multiplier,
            confidence_adjustment=1.0,
            adjustments=list(ledger.adjustments),
        ),
        confidence=BEVERAGE_CONFIDENCE,
        warnings=list(ledger.warnings),
        nutrients=nutrients.to_dict() if nutrients else None,
        healthier_alternative=analysis.healthier_alternative,
    )
