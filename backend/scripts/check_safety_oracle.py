#!/usr/bin/env python3
"""
Check if the safety oracle (Ollama) is reachable and answers with a valid verdict.
Run from backend: python scripts/check_safety_oracle.py
Exit 0 if the oracle returned a well-formed verdict; 1 otherwise.
"""
import sys
from pathlib import Path
from typing import Tuple

# Add backend to path when run as script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

# Short timeout for health check
HEALTH_TIMEOUT = 8

# (product name, score, category); a sane oracle should not flag plain water
PROBE = ("Bottled Water", 100, "Excellent")


def check_oracle(timeout: int = HEALTH_TIMEOUT) -> Tuple[bool, str]:
    """Return (success, message)."""
    from ultrascore.safety.override import OllamaSafetyOracle
    verdict = OllamaSafetyOracle(timeout=timeout).judge(*PROBE)
    if verdict is None:
        return False, "no valid verdict (unreachable, timeout or malformed JSON)"
    return True, f"ok (isMisleading={verdict.is_misleading})"


def main() -> int:
    from ultrascore.config import get_ollama_url, get_ollama_model
    print(f"Checking safety oracle at {get_ollama_url()} model={get_ollama_model()}...")
    ok, msg = check_oracle()
    print(f"  Safety oracle: {'OK' if ok else 'FAIL'} - {msg}")
    if ok:
        return 0
    print("Safety override will fail open (scores pass through unchanged).")
    return 1


if __name__ == "__main__":
    sys.exit(main())
