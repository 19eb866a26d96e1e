"""
Feature flags, paths, and centralized configuration.
All resolution relative to the backend directory.
"""
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Repo root: backend/ultrascore/config.py -> parent=ultrascore, parent.parent=backend, parent.parent.parent=repo
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_REPO_ROOT = _BACKEND_DIR.parent


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


# --- Feature flags ---
SAFETY_CHECK_ENABLED = _env_flag("SAFETY_CHECK_ENABLED", "true")
HISTORY_ENABLED = _env_flag("HISTORY_ENABLED", "true")

# --- Data paths ---
def get_history_path() -> Path:
    return _REPO_ROOT / "data" / "scan_history.json"

# --- LLM / Ollama ---
def get_ollama_url() -> str:
    return os.environ.get("OLLAMA_API_URL", "http://localhost:11434/api/generate")

def get_ollama_model() -> str:
    return os.environ.get("OLLAMA_MODEL", "llama3.2:3b")

# LLM timeout defaults (seconds)
SAFETY_CHECK_TIMEOUT = int(os.environ.get("SAFETY_CHECK_TIMEOUT", "15"))
EXTRACTION_TIMEOUT = int(os.environ.get("EXTRACTION_TIMEOUT", "30"))

# --- Quota ---
def get_default_plan() -> str:
    return os.environ.get("DEFAULT_PLAN", "free").strip().lower() or "free"


def get_admin_reset_key() -> str:
    """Bearer token for /admin/reset-limits. Empty disables the endpoint."""
    return os.environ.get("ADMIN_RESET_KEY", "").strip()

# --- Startup logging ---
def log_config() -> None:
    logger.info(
        "CONFIG: safety_check=%s history=%s history_path=%s ollama_model=%s "
        "safety_timeout=%ds extraction_timeout=%ds default_plan=%s",
        SAFETY_CHECK_ENABLED, HISTORY_ENABLED, get_history_path(),
        get_ollama_model(), SAFETY_CHECK_TIMEOUT, EXTRACTION_TIMEOUT,
        get_default_plan(),
    )
