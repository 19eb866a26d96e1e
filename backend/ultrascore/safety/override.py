"""
Common-sense safety override.

Nutrition math can be fooled by inedible or toxic items ("cyanide water" scores well on
paper). An oracle is asked whether the computed score is dangerously misleading; if so
the result is replaced with an Avoid/F verdict. The check is advisory and fails open:
any oracle problem returns the pre-override result unchanged.
"""
import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from ultrascore import config
from ultrascore.evidence import tables as t
from ultrascore.llm import call_ollama, parse_json_response
from ultrascore.models.analysis import ProductAnalysis
from ultrascore.models.result import Adjustment, ScoringResult

logger = logging.getLogger(__name__)

# Scores below this are already low enough that nothing is being oversold
OVERRIDE_MIN_SCORE = 20
OVERRIDE_POINTS = -100

_SYSTEM_PROMPT = """You are a safety and common sense validation AI. Your task is to identify dangerously misleading health scores.
The algorithm scores based on nutritional data but can be fooled by inedible or poisonous items (e.g. scoring 'Cyanide Water' as 100).

Evaluate if the score is absurd or dangerous (toxic, inedible, etc.).
- If plausible, respond ONLY with: {"isMisleading": false}
- If dangerous, respond ONLY with: {"isMisleading": true, "correctedScore": 0, "reason": "A brief, user-facing explanation."}
Only override for clear, unambiguous cases of danger. Return ONLY valid JSON. No markdown, no explanation."""


@dataclass(frozen=True)
class OracleVerdict:
    is_misleading: bool
    corrected_score: int = 0
    reason: str = ""

    @classmethod
    def from_payload(cls, data: Any) -> Optional["OracleVerdict"]:
        """Shape check for {isMisleading, correctedScore?, reason?}. Returns None if invalid."""
        if not isinstance(data, dict):
            return None
        flag = data.get("isMisleading")
        if not isinstance(flag, bool):
            return None
        if not flag:
            return cls(is_misleading=False)

        corrected = data.get("correctedScore", 0)
        if corrected is None:
            corrected = 0
        if isinstance(corrected, bool) or not isinstance(corrected, (int, float)):
            return None
        if not 0 <= corrected <= 100:
            return None

        reason = data.get("reason")
        reason = str(reason).strip() if reason is not None else ""
        return cls(
            is_misleading=True,
            corrected_score=int(round(corrected)),
            reason=reason or "Flagged as unsafe for consumption",
        )


class SafetyOracle(Protocol):
    def judge(self, product_name: str, score: int, category: str) -> Optional[OracleVerdict]:
        ...


class OllamaSafetyOracle:
    """Asks the configured Ollama model. Returns None on any transport, parse or shape failure."""

    def __init__(self, timeout: Optional[int] = None):
        self.timeout = timeout if timeout is not None else config.SAFETY_CHECK_TIMEOUT

    def judge(self, product_name: str, score: int, category: str) -> Optional[OracleVerdict]:
        prompt = (
            f'Product Name: "{product_name}", Initial Score: {score}/100, Category: {category}.\n\n'
            "Return the JSON verdict:"
        )
        raw = call_ollama(
            prompt, _SYSTEM_PROMPT, timeout=self.timeout, num_predict=150, log_prefix="SAFETY_ORACLE"
        )
        if not raw:
            return None
        data = parse_json_response(raw, log_prefix="SAFETY_ORACLE")
        verdict = OracleVerdict.from_payload(data)
        if verdict is None and data is not None:
            logger.warning("SAFETY_ORACLE invalid verdict shape: %s", str(data)[:200])
        return verdict


def apply_safety_override(
    analysis: ProductAnalysis,
    result: ScoringResult,
    oracle: Optional[SafetyOracle] = None,
) -> ScoringResult:
    """Returns result unchanged unless the oracle positively flags it as misleading."""
    if result.final_score < OVERRIDE_MIN_SCORE:
        return result
    if not config.SAFETY_CHECK_ENABLED or oracle is None:
        return result

    try:
        verdict = oracle.judge(analysis.product_name, result.final_score, result.category)
    except Exception as e:
        logger.warning("SAFETY_OVERRIDE oracle failed product=%s: %s", analysis.product_name, e)
        return result

    if verdict is None or not verdict.is_misleading:
        return result

    logger.warning(
        "SAFETY_OVERRIDE product=%s score=%s -> %s reason=%s",
        analysis.product_name, result.final_score, verdict.corrected_score, verdict.reason,
    )
    override_line = Adjustment(
        category="Safety Override",
        reason=f"Safety Override: {verdict.reason}",
        points=OVERRIDE_POINTS,
        evidence_weight=t.STRONG,
    )
    warnings = list(result.warnings)
    if verdict.reason not in warnings:
        warnings.append(verdict.reason)
    return dataclasses.replace(
        result,
        final_score=verdict.corrected_score,
        category="Avoid",
        grade="F",
        breakdown=dataclasses.replace(result.breakdown, adjustments=[override_line]),
        warnings=warnings,
        healthier_alternative=None,
        override_reason=verdict.reason,
    )
