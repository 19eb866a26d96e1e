from .dispatcher import calculate_health_score
from .food import score_food
from .beverage import score_beverage
from .personal_care import score_personal_care
from .grading import finalize_score, grade_for_score
from .confidence import compute_confidence

__all__ = [
    "calculate_health_score",
    "score_food",
    "score_beverage",
    "score_personal_care",
    "finalize_score",
    "grade_for_score",
    "compute_confidence",
]
