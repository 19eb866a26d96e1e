"""
Structured scoring result. Single format for the API, history and override/recommendation stages.
Results are never mutated after return; later stages derive new instances with dataclasses.replace.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ultrascore.models.analysis import HealthierAlternative


class ConfidenceLevel(str, Enum):
    HIGH = "HIGH"
    MODERATE = "MODERATE"
    LOW = "LOW"


@dataclass(frozen=True)
class Adjustment:
    category: str
    reason: str
    points: float
    evidence_weight: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "reason": self.reason,
            "points": self.points,
            "evidenceWeight": self.evidence_weight,
        }


@dataclass(frozen=True)
class ScoreBreakdown:
    base_score: float
    positive_points: float = 0.0
    negative_points: float = 0.0
    nova_multiplier: float = 1.0
    confidence_adjustment: float = 1.0
    adjustments: list[Adjustment] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "baseScore": self.base_score,
            "positivePoints": self.positive_points,
            "negativePoints": self.negative_points,
            "novaMultiplier": self.nova_multiplier,
            "confidenceAdjustment": self.confidence_adjustment,
            "adjustments": [a.to_dict() for a in self.adjustments],
        }


@dataclass(frozen=True)
class ConfidenceRating:
    level: ConfidenceLevel
    data_completeness: float
    message: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "level": self.level.value,
            "dataCompleteness": self.data_completeness,
        }
        if self.message:
            d["message"] = self.message
        return d


@dataclass(frozen=True)
class ScoringResult:
    final_score: int
    category: str
    grade: str
    product_name: str
    breakdown: ScoreBreakdown
    confidence: ConfidenceRating
    warnings: list[str] = field(default_factory=list)
    nutrients: Optional[dict[str, Any]] = None
    healthier_alternative: Optional[HealthierAlternative] = None
    override_reason: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "finalScore": self.final_score,
            "category": self.category,
            "grade": self.grade,
            "productName": self.product_name,
            "breakdown": self.breakdown.to_dict(),
            "confidence": self.confidence.to_dict(),
            "warnings": list(self.warnings),
            "nutrients": dict(self.nutrients) if self.nutrients is not None else None,
            "healthierAlternative": (
                self.healthier_alternative.to_dict() if self.healthier_alternative else None
            ),
            "overrideReason": self.override_reason,
        }


@dataclass(frozen=True)
class Recommendation:
    type: str  # "addon" | "alternative" | "pairing"
    product_name: str
    description: str
    reason: str
    relevance_score: float
    estimated_score_boost: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "productName": self.product_name,
            "description": self.description,
            "reason": self.reason,
            "estimatedScoreBoost": self.estimated_score_boost,
            "relevanceScore": self.relevance_score,
        }


@dataclass(frozen=True)
class RecommendationSet:
    addon: Optional[Recommendation] = None
    alternative: Optional[Recommendation] = None
    pairing: Optional[Recommendation] = None

    def is_empty(self) -> bool:
        return self.addon is None and self.alternative is None and self.pairing is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "addon": self.addon.to_dict() if self.addon else None,
            "alternative": self.alternative.to_dict() if self.alternative else None,
            "pairing": self.pairing.to_dict() if self.pairing else None,
        }
