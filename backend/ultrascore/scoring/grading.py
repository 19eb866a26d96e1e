import math
from typing import Tuple

from ultrascore.evidence.tables import SCORE_BANDS

MIN_SCORE = 0
MAX_SCORE = 100


def finalize_score(raw: float) -> int:
    """Clamp to [0, 100], then round half up."""
    clamped = max(MIN_SCORE, min(MAX_SCORE, raw))
    return int(math.floor(clamped + 0.5))


def grade_for_score(score: float) -> Tuple[str, str]:
    """(category label, letter grade) for a finalized score."""
    for band in SCORE_BANDS:
        if score >= band.min_score:
            return band.label, band.grade
    lowest = SCORE_BANDS[-1]
    return lowest.label, lowest.grade
