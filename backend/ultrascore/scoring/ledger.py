"""
Running positive/negative point totals plus the ordered adjustment list for one scoring call.
Created per request; never shared.
"""
from typing import List

from ultrascore.models.result import Adjustment


class ScoreLedger:
    def __init__(self) -> None:
        self.positive_points = 0.0
        self.negative_points = 0.0
        self.adjustments: List[Adjustment] = []
        self.warnings: List[str] = []

    def credit(self, category: str, reason: str, points: float, evidence_weight: float) -> None:
        self.positive_points += points
        self.adjustments.append(Adjustment(category, reason, points, evidence_weight))

    def debit(self, category: str, reason: str, penalty: float, evidence_weight: float) -> None:
        """penalty is a magnitude; it is recorded as negative points."""
        self.negative_points += abs(penalty)
        self.adjustments.append(Adjustment(category, reason, -abs(penalty), evidence_weight))

    def signed(self, category: str, reason: str, points: float, evidence_weight: float) -> None:
        """Route a signed contribution to the positive or negative bucket. Zero is dropped."""
        if points > 0:
            self.credit(category, reason, points, evidence_weight)
        elif points < 0:
            self.debit(category, reason, points, evidence_weight)

    def note(self, category: str, reason: str, points: float, evidence_weight: float) -> None:
        """Informational line; does not touch the totals."""
        self.adjustments.append(Adjustment(category, reason, points, evidence_weight))

    def warn(self, message: str) -> None:
        if message not in self.warnings:
            self.warnings.append(message)

    def net(self, base_score: float) -> float:
        return base_score + self.positive_points - self.negative_points
