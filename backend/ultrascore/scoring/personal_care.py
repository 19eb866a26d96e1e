"""
Personal care scoring: base 70, regex scan of free-text ingredient lists plus label flags.
Every match is counted, so an ingredient list naming two parabens is penalized twice.
"""
import logging

from ultrascore.evidence import tables as t
from ultrascore.evidence.schema import PersonalCareRule
from ultrascore.models.analysis import PersonalCareDetails, ProductAnalysis
from ultrascore.models.result import ScoreBreakdown, ScoringResult
from ultrascore.scoring.confidence import PERSONAL_CARE_CONFIDENCE
from ultrascore.scoring.grading import finalize_score, grade_for_score
from ultrascore.scoring.ledger import ScoreLedger

logger = logging.getLogger(__name__)


def _apply(rule: PersonalCareRule, ledger: ScoreLedger) -> None:
    ledger.signed(rule.category, rule.reason, rule.points, rule.evidence_weight)


def _scan(ingredients: list[str], rules: tuple[PersonalCareRule, ...], ledger: ScoreLedger) -> None:
    for ingredient in ingredients:
        for rule in rules:
            if rule.flag is None and rule.matches(ingredient):
                _apply(rule, ledger)


def _flags(details: PersonalCareDetails, rules: tuple[PersonalCareRule, ...], ledger: ScoreLedger) -> None:
    for rule in rules:
        if rule.flag is not None and getattr(details, rule.flag, False):
            _apply(rule, ledger)


def score_personal_care(analysis: ProductAnalysis) -> ScoringResult:
    ledger = ScoreLedger()
    details = analysis.personal_care_details

    if details is not None:
        _scan(details.harmful_ingredients, t.PERSONAL_CARE_PENALTIES, ledger)
        _flags(details, t.PERSONAL_CARE_PENALTIES, ledger)
        _scan(details.beneficial_ingredients, t.PERSONAL_CARE_BONUSES, ledger)
        _flags(details, t.PERSONAL_CARE_BONUSES, ledger)
    else:
        logger.info("SCORE_PERSONAL_CARE no details product=%s", analysis.product_name)

    base_score = t.PERSONAL_CARE_BASE_SCORE
    final_score = finalize_score(ledger.net(base_score))
    category, grade = grade_for_score(final_score)
    logger.info(
        "SCORE_PERSONAL_CARE product=%s positive=%.1f negative=%.1f final=%s",
        analysis.product_name, ledger.positive_points, ledger.negative_points, final_score,
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
            adjustments=list(ledger.adjustments),
        ),
        confidence=PERSONAL_CARE_CONFIDENCE,
        warnings=list(ledger.warnings),
        nutrients=None,
        healthier_alternative=analysis.healthier_alternative,
    )
