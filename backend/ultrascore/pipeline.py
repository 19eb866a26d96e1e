"""
Scan pipeline: quota -> extract -> score -> safety override -> recommendations -> history.

Each stage hands a new value to the next. Only input rejections (ScoringError),
quota refusals and extractor failures propagate; the override fails open and
history writes never fail a scan.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ultrascore import config
from ultrascore.errors import QuotaExceededError
from ultrascore.extraction.extractor import ProductAnalysisExtractor
from ultrascore.history_storage import ScanHistoryStore
from ultrascore.models.analysis import ProductAnalysis
from ultrascore.models.result import RecommendationSet, ScoringResult
from ultrascore.quota import DailyQuota, QuotaStatus
from ultrascore.recommendations.engine import generate_recommendations
from ultrascore.safety.override import SafetyOracle, apply_safety_override
from ultrascore.scoring.dispatcher import calculate_health_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanReport:
    result: ScoringResult
    recommendations: RecommendationSet
    quota: Optional[QuotaStatus] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = self.result.to_dict()
        payload["recommendations"] = self.recommendations.to_dict()
        if self.quota is not None:
            payload["rateLimitInfo"] = self.quota.to_dict()
        return payload


class ScanPipeline:
    def __init__(
        self,
        extractor: Optional[ProductAnalysisExtractor] = None,
        oracle: Optional[SafetyOracle] = None,
        quota: Optional[DailyQuota] = None,
        history: Optional[ScanHistoryStore] = None,
    ):
        self.extractor = extractor
        self.oracle = oracle
        self.quota = quota
        self.history = history

    def score_analysis(self, analysis: ProductAnalysis) -> ScanReport:
        """Post-extraction stages for callers that already hold a structured analysis."""
        initial = calculate_health_score(analysis)
        final = apply_safety_override(analysis, initial, self.oracle)
        recommendations = generate_recommendations(analysis, final.final_score)
        return ScanReport(result=final, recommendations=recommendations)

    def run(
        self,
        term: str,
        identifier: str,
        plan_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> ScanReport:
        status = None
        if self.quota is not None:
            status = self.quota.check_and_consume(identifier, plan_id)
            if not status.success:
                raise QuotaExceededError(status)

        if self.extractor is None:
            raise RuntimeError("ScanPipeline.run requires an extractor")
        analysis = self.extractor.extract(term)
        report = self.score_analysis(analysis)
        logger.info(
            "SCAN term=%s product=%s score=%s grade=%s override=%s",
            term[:60], report.result.product_name, report.result.final_score,
            report.result.grade, report.result.override_reason is not None,
        )

        if user_id and self.history is not None and config.HISTORY_ENABLED:
            self._record(user_id, report.result)

        return ScanReport(result=report.result, recommendations=report.recommendations, quota=status)

    def _record(self, user_id: str, result: ScoringResult) -> None:
        try:
            self.history.add_scan(user_id, result)
        except Exception as e:
            logger.error("HISTORY failed to save scan user_id=%s: %s", user_id, e)
