"""
Food scoring (NRF9.3 + NOVA hybrid).

final = clamp(0, 100, round(((50 + positive - negative) * nova_multiplier) * confidence_adjustment))

Every contribution is evidence-weighted before it is added to a bucket. Missing nutrient
fields are never errors: they contribute nothing and lower the data completeness.
"""
import logging
from typing import Optional

from ultrascore.evidence import tables as t
from ultrascore.models.analysis import NutrientProfile, ProcessingLevel, ProductAnalysis
from ultrascore.models.result import ConfidenceLevel, ScoreBreakdown, ScoringResult
from ultrascore.normalization.normalizer import lookup, normalize_key
from ultrascore.scoring.confidence import compute_confidence
from ultrascore.scoring.grading import finalize_score, grade_for_score
from ultrascore.scoring.ledger import ScoreLedger

logger = logging.getLogger(__name__)

BASE_SCORE = 50

# Fields whose presence drives data completeness
TRACKED_FIELDS = ("fiber", "protein", "saturated_fat", "added_sugar", "sodium", "trans_fat")


def _target_points(value: float, key: str) -> tuple[float, float]:
    """(percent of daily value capped at 100, weighted points)."""
    target = t.NUTRIENT_TARGETS[key]
    pct = min(100.0, (value / target.dv) * 100)
    return pct, (pct / 100) * target.max_points * t.STRONG


def _limit_penalty(value: float, key: str) -> tuple[float, float]:
    """(percent of daily limit, weighted penalty capped at max_penalty)."""
    limit = t.NUTRIENT_LIMITS[key]
    pct = (value / limit.limit) * 100
    return pct, min(limit.max_penalty, (pct / 100) * limit.max_penalty) * t.STRONG


def _average_source_score(sources: list[str], table) -> float:
    """Mean of per-tag scores; unknown tags count as zero."""
    total = 0.0
    for source in sources:
        total += (lookup(table, source) or 0) * t.MODERATE
    return total / len(sources)


def _score_positive_nutrients(nutrients: NutrientProfile, ledger: ScoreLedger) -> None:
    if nutrients.fiber is not None:
        pct, points = _target_points(nutrients.fiber, "fiber")
        if points > 0:
            ledger.credit("Fiber", f"{nutrients.fiber:.1f}g fiber ({pct:.0f}% DV)", points, t.STRONG)
    else:
        ledger.warn(t.WARNING_FLAGS["MISSING_FIBER"])

    if nutrients.protein is not None:
        _, points = _target_points(nutrients.protein, "protein")
        if points > 0:
            ledger.credit("Protein", f"{nutrients.protein:.1f}g protein", points, t.STRONG)


def _score_sources(analysis: ProductAnalysis, ledger: ScoreLedger) -> None:
    if analysis.protein_sources:
        avg = _average_source_score(analysis.protein_sources, t.PROTEIN_SOURCE_SCORES)
        ledger.signed("Protein Source", ", ".join(analysis.protein_sources), avg, t.MODERATE)
        if any(normalize_key(s) == "processed_meat" for s in analysis.protein_sources):
            ledger.warn(t.WARNING_FLAGS["PROCESSED_MEAT"])

    if analysis.fruit_veg_percentage and analysis.fruit_veg_percentage > 0:
        pct = analysis.fruit_veg_percentage
        points = min(t.FRUIT_VEG_MAX_POINTS, pct / 10) * t.STRONG
        ledger.credit("Fruits & Vegetables", f"{pct:g}% fruit/vegetable content", points, t.STRONG)

    omega3 = analysis.nutrients.omega3 if analysis.nutrients else None
    if omega3 and omega3 > 0:
        points = min(t.OMEGA3_MAX_POINTS, omega3 / t.OMEGA3_GRAMS_PER_POINT) * t.STRONG
        ledger.credit("Omega-3", f"{omega3 * 1000:.0f}mg omega-3", points, t.STRONG)

    if analysis.fat_sources:
        avg = _average_source_score(analysis.fat_sources, t.FAT_SOURCE_SCORES)
        ledger.signed("Fat Sources", ", ".join(analysis.fat_sources), avg, t.MODERATE)


def _score_fermentation(analysis: ProductAnalysis, ledger: ScoreLedger) -> None:
    # Bonus needs all three: fermented, live cultures, and a live-culture table entry.
    if not (analysis.is_fermented and analysis.has_live_cultures and analysis.fermentation_type):
        return
    profile = lookup(t.FERMENTED_SCORES, analysis.fermentation_type)
    if profile is None or not profile.has_live_cultures:
        return
    bonus = profile.score * t.MODERATE
    ledger.credit("Fermented", f"Live culture {analysis.fermentation_type}", bonus, t.MODERATE)


def _score_polyphenols(analysis: ProductAnalysis, ledger: ScoreLedger) -> None:
    if not analysis.polyphenol_sources:
        return
    total = 0.0
    for source in analysis.polyphenol_sources:
        profile = lookup(t.POLYPHENOL_SCORES, source)
        if profile is not None:
            total += profile.score * t.EMERGING
    if total > 0:
        points = min(t.POLYPHENOL_MAX_POINTS, total)
        ledger.credit(
            "Polyphenols", f"Contains {', '.join(analysis.polyphenol_sources)}", points, t.EMERGING
        )


def _score_limited_nutrients(nutrients: NutrientProfile, ledger: ScoreLedger) -> None:
    if nutrients.saturated_fat is not None:
        pct, penalty = _limit_penalty(nutrients.saturated_fat, "saturated_fat")
        if pct > 0:
            ledger.debit("Saturated Fat", f"{nutrients.saturated_fat:.1f}g saturated fat", penalty, t.STRONG)

    if nutrients.added_sugar is not None:
        pct, penalty = _limit_penalty(nutrients.added_sugar, "added_sugar")
        if pct > 0:
            ledger.debit("Added Sugar", f"{nutrients.added_sugar:.1f}g added sugar", penalty, t.STRONG)

    if nutrients.sodium is not None:
        pct, penalty = _limit_penalty(nutrients.sodium, "sodium")
        if pct > t.SODIUM_PENALTY_FLOOR_PCT:
            ledger.debit("Sodium", f"{nutrients.sodium:.0f}mg sodium", penalty, t.STRONG)

    if nutrients.trans_fat is not None and nutrients.trans_fat > 0:
        cap = t.NUTRIENT_LIMITS["trans_fat"].max_penalty
        penalty = min(cap, nutrients.trans_fat * t.TRANS_FAT_POINTS_PER_GRAM) * t.STRONG
        ledger.debit("Trans Fat", f"{nutrients.trans_fat:.1f}g trans fat - AVOID", penalty, t.STRONG)


def _score_glycemic_load(glycemic_load: Optional[float], ledger: ScoreLedger) -> None:
    if glycemic_load is None:
        return
    low = t.GLYCEMIC_LOAD_THRESHOLDS["low"]
    high = t.GLYCEMIC_LOAD_THRESHOLDS["high"]
    if glycemic_load <= low["max"]:
        ledger.credit("Glycemic Load", f"Low GL ({glycemic_load:g})", low["points"] * t.MODERATE, t.MODERATE)
    elif glycemic_load >= high["min"]:
        ledger.debit("Glycemic Load", f"High GL ({glycemic_load:g})", abs(high["points"]) * t.MODERATE, t.MODERATE)


def _score_additives(analysis: ProductAnalysis, ledger: ScoreLedger) -> None:
    if analysis.additives:
        total = 0.0
        for additive in analysis.additives:
            rating = lookup(t.ADDITIVE_SCORES, additive)
            if rating is not None:
                total += rating.score * t.TIER_WEIGHTS[rating.confidence]
        ledger.signed("Additives", f"{len(analysis.additives)} additives detected", total, t.MODERATE)

    if analysis.sweeteners:
        ledger.warn(t.WARNING_FLAGS["ARTIFICIAL_SWEETENERS"])
        total = 0.0
        for sweetener in analysis.sweeteners:
            rating = lookup(t.SWEETENER_SCORES, sweetener)
            if rating is not None:
                total += rating.score * t.CONFLICTING
        if total != 0:
            ledger.debit(
                "Sweeteners",
                f"Contains {', '.join(analysis.sweeteners)} (research evolving)",
                total,
                t.CONFLICTING,
            )
        if any(normalize_key(s) in t.CARDIOVASCULAR_SWEETENERS for s in analysis.sweeteners):
            ledger.warn(t.WARNING_FLAGS["ERYTHRITOL_XYLITOL"])


def _apply_processing(level: Optional[ProcessingLevel], raw: float, ledger: ScoreLedger) -> tuple[float, float]:
    """Returns (multiplier, adjusted score). Breakdown lines are informational only."""
    multiplier = t.NOVA_MULTIPLIERS.get(level, 1.0) if level is not None else 1.0
    adjusted = raw * multiplier
    if level == ProcessingLevel.ULTRA_PROCESSED:
        ledger.warn(t.WARNING_FLAGS["ULTRA_PROCESSED"])
        ledger.note("Processing", "Ultra-processed (NOVA 4) - 22% penalty", adjusted - raw, t.EMERGING)
    elif level == ProcessingLevel.UNPROCESSED:
        ledger.note("Processing", "Minimally processed (NOVA 1) - 5% bonus", adjusted - raw, t.EMERGING)
    return multiplier, adjusted


def score_food(analysis: ProductAnalysis) -> ScoringResult:
    ledger = ScoreLedger()
    nutrients = analysis.nutrients or NutrientProfile()

    present = sum(1 for name in TRACKED_FIELDS if getattr(nutrients, name) is not None)

    # Positive modifiers (nutrients to encourage, sources, bonuses)
    _score_positive_nutrients(nutrients, ledger)
    _score_sources(analysis, ledger)
    _score_fermentation(analysis, ledger)
    _score_polyphenols(analysis, ledger)

    # Negative modifiers (nutrients to limit, additives)
    _score_limited_nutrients(nutrients, ledger)
    _score_glycemic_load(analysis.glycemic_load, ledger)
    _score_additives(analysis, ledger)

    raw = ledger.net(BASE_SCORE)
    nova_multiplier, raw = _apply_processing(analysis.processing_level, raw, ledger)

    confidence, confidence_adjustment = compute_confidence(present, len(TRACKED_FIELDS))
    if confidence.level == ConfidenceLevel.LOW:
        ledger.warn(t.WARNING_FLAGS["INSUFFICIENT_DATA"])
    raw *= confidence_adjustment

    final_score = finalize_score(raw)
    category, grade = grade_for_score(final_score)
    logger.info(
        "SCORE_FOOD product=%s positive=%.2f negative=%.2f nova=%.2f completeness=%.0f final=%s",
        analysis.product_name, ledger.positive_points, ledger.negative_points,
        nova_multiplier, confidence.data_completeness, final_score,
    )

    return ScoringResult(
        final_score=final_score,
        category=category,
        grade=grade,
        product_name=analysis.product_name,
        breakdown=ScoreBreakdown(
            base_score=BASE_SCORE,
            positive_points=ledger.positive_points,
            negative_points=ledger.negative_points,
            nova_multiplier=nova_multiplier,
            confidence_adjustment=confidence_adjustment,
            adjustments=list(ledger.adjustments),
        ),
        confidence=confidence,
        warnings=list(ledger.warnings),
        nutrients=analysis.nutrients.to_dict() if analysis.nutrients else None,
        healthier_alternative=analysis.healthier_alternative,
    )
