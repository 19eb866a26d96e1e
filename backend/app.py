"""
UltraScore FastAPI application.

Endpoints:
    GET  /                      Health check
    POST /analyze               Product term -> extract -> score -> safety override -> recommendations
    POST /score                 Structured product analysis -> score -> recommendations (no oracle, no quota)
    GET  /history/{user_id}     Saved scans, most recent first
    DELETE /history/{user_id}   Clear a user's saved scans
    GET  /usage/{identifier}    Daily quota usage without consuming a scan
    POST /admin/reset-limits    Clear quota counters (Bearer ADMIN_RESET_KEY)
"""
from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Any, Dict, Optional
import logging
from dotenv import load_dotenv
from pathlib import Path

# Load env vars before ultrascore.config reads them
load_dotenv(Path(__file__).parent / ".env")

from ultrascore import config
from ultrascore.errors import ExtractionError, QuotaExceededError, ScoringError
from ultrascore.extraction.extractor import OllamaAnalysisExtractor
from ultrascore.history_storage import ScanHistoryStore
from ultrascore.models.analysis import ProductAnalysis
from ultrascore.pipeline import ScanPipeline
from ultrascore.quota import DailyQuota
from ultrascore.safety.override import OllamaSafetyOracle

# Initialize App
app = FastAPI(title="UltraScore Health Scoring API")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Logger
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

config.log_config()

quota = DailyQuota()
history = ScanHistoryStore()
pipeline = ScanPipeline(
    extractor=OllamaAnalysisExtractor(),
    oracle=OllamaSafetyOracle() if config.SAFETY_CHECK_ENABLED else None,
    quota=quota,
    history=history,
)
# /score is unmetered, so it never reaches the LLM oracle
scorer = ScanPipeline()


# --- Request Models ---
class AnalyzeRequest(BaseModel):
    term: str
    user_id: Optional[str] = None
    plan_id: Optional[str] = None


class ScoreRequest(BaseModel):
    analysis: Dict[str, Any]


class ResetLimitsRequest(BaseModel):
    identifier: Optional[str] = None


# --- Helper Functions ---

def _client_identifier(request: Request) -> str:
    """Best-effort client IP from proxy headers; falls back to the socket peer."""
    headers = request.headers
    if headers.get("cf-connecting-ip"):
        return headers["cf-connecting-ip"]
    if headers.get("x-real-ip"):
        return headers["x-real-ip"]
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _quota_exceeded_response(e: QuotaExceededError) -> JSONResponse:
    status = e.status
    return JSONResponse(
        status_code=429,
        content={
            "error": str(e),
            "rateLimitInfo": status.to_dict(),
            "upgradeRequired": status.plan_name == "Free",
        },
        headers=status.headers(),
    )


@app.get("/")
def health_check():
    return {"status": "ok", "service": "UltraScore"}


@app.post("/analyze")
def analyze(body: AnalyzeRequest, request: Request):
    """Full scan for a free-text product term. Counts against the caller's daily quota."""
    term = (body.term or "").strip()
    if not term:
        raise HTTPException(status_code=400, detail="Product term is required")

    identifier = body.user_id or _client_identifier(request)
    logger.info("Analyze request term=%s identifier=%s plan=%s", term[:60], identifier, body.plan_id)
    try:
        report = pipeline.run(term, identifier, plan_id=body.plan_id, user_id=body.user_id)
    except QuotaExceededError as e:
        return _quota_exceeded_response(e)
    except ScoringError as e:
        logger.info("Analyze rejected term=%s: %s", term[:60], e)
        raise HTTPException(status_code=422, detail=str(e))
    except ExtractionError as e:
        logger.warning("Analyze extraction failed term=%s: %s", term[:60], e)
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("Analyze failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Analysis failed")

    headers = report.quota.headers() if report.quota else None
    return JSONResponse(content=report.to_dict(), headers=headers)


@app.post("/score")
def score(body: ScoreRequest):
    """Score an already-structured analysis. No extraction, quota, safety oracle or history."""
    analysis = ProductAnalysis.from_dict(body.analysis)
    try:
        report = scorer.score_analysis(analysis)
    except ScoringError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return report.to_dict()


@app.get("/history/{user_id}")
def get_history(user_id: str, limit: int = 50, offset: int = 0):
    try:
        scans = history.get_history(user_id, limit=limit, offset=offset)
    except Exception as e:
        logger.error("History read failed user_id=%s: %s", user_id, e, exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return {"user_id": user_id, "scans": scans, "count": len(scans)}


@app.delete("/history/{user_id}")
def clear_history(user_id: str):
    removed = history.clear(user_id)
    return {"user_id": user_id, "removed": removed}


@app.get("/usage/{identifier}")
def get_usage(identifier: str, plan_id: Optional[str] = None):
    return quota.usage(identifier, plan_id).to_dict()


@app.post("/admin/reset-limits")
def reset_limits(body: Optional[ResetLimitsRequest] = None, authorization: Optional[str] = Header(None)):
    """Clear daily quota counters for one identifier, or all of them."""
    key = config.get_admin_reset_key()
    if not key or authorization != f"Bearer {key}":
        raise HTTPException(status_code=401, detail="Unauthorized")
    identifier = body.identifier if body else None
    quota.reset(identifier)
    logger.info("Admin reset quota identifier=%s", identifier or "*")
    return {"success": True, "identifier": identifier}
