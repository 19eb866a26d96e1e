"""
Static evidence tables and their entry schemas.
"""
from .schema import (
    ConfidenceTier,
    NutrientTarget,
    NutrientLimit,
    ScoreBand,
    AdditiveRating,
    FermentationProfile,
    PolyphenolProfile,
    PersonalCareRule,
)
from . import tables

__all__ = [
    "ConfidenceTier",
    "NutrientTarget",
    "NutrientLimit",
    "ScoreBand",
    "AdditiveRating",
    "FermentationProfile",
    "PolyphenolProfile",
    "PersonalCareRule",
    "tables",
]
