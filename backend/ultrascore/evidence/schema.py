"""
Strict contracts for evidence table entries.
All entries are frozen; tables built from them are shared read-only across requests.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Pattern


class ConfidenceTier(str, Enum):
    HIGH = "HIGH"
    MODERATE = "MODERATE"
    LOW = "LOW"


@dataclass(frozen=True)
class NutrientTarget:
    """Nutrient to encourage: points scale linearly up to max_points at 100% of dv."""
    dv: float
    max_points: float
    unit: str = "g"


@dataclass(frozen=True)
class NutrientLimit:
    """Nutrient to limit: penalty scales linearly, capped at max_penalty."""
    limit: float
    max_penalty: float
    unit: str = "g"


@dataclass(frozen=True)
class ScoreBand:
    min_score: int
    label: str
    grade: str


@dataclass(frozen=True)
class AdditiveRating:
    score: float
    confidence: ConfidenceTier
    reason: str = ""


@dataclass(frozen=True)
class FermentationProfile:
    score: float
    has_live_cultures: bool


@dataclass(frozen=True)
class PolyphenolProfile:
    score: float
    confidence: ConfidenceTier
    sources: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PersonalCareRule:
    """Case-insensitive pattern matched against free-text ingredient names."""
    key: str
    pattern: str
    points: float
    reason: str
    category: str
    evidence_weight: float
    # Flag rules (fragrance, cruelty-free, EWG) have no pattern to scan.
    flag: Optional[str] = None

    @property
    def regex(self) -> Pattern[str]:
        return re.compile(self.pattern, re.IGNORECASE)

    def matches(self, ingredient: str) -> bool:
        if not self.pattern or not ingredient:
            return False
        return self.regex.search(ingredient) is not None
