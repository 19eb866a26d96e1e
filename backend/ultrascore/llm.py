"""
Ollama client shared by the analysis extractor and the safety oracle.

LLMs only ever produce input records or advisory verdicts; scoring itself
stays 100% deterministic.
"""
import json
import logging
import re
from typing import Optional

import requests

from ultrascore.config import get_ollama_url, get_ollama_model

logger = logging.getLogger(__name__)


def call_ollama(
    prompt: str,
    system: str,
    timeout: int,
    num_predict: int = 300,
    log_prefix: str = "LLM",
) -> Optional[str]:
    """Call Ollama and return the response text, or None on failure."""
    try:
        resp = requests.post(
            get_ollama_url(),
            json={
                "model": get_ollama_model(),
                "prompt": prompt,
                "system": system,
                "stream": False,
                "format": "json",
                "options": {"temperature": 0.0, "num_predict": num_predict},
            },
            timeout=timeout,
        )
        resp.raise_for_status()
        return resp.json().get("response", "").strip()
    except requests.RequestException as e:
        logger.warning("%s ollama call failed: %s", log_prefix, e)
        return None
    except ValueError as e:
        logger.warning("%s ollama returned non-JSON body: %s", log_prefix, e)
        return None


def parse_json_response(raw: str, log_prefix: str = "LLM") -> Optional[dict]:
    """Extract a JSON object from LLM output (may contain markdown fences or chatter)."""
    if not raw:
        return None
    # Strip markdown code fences
    cleaned = re.sub(r"```(?:json)?\s*", "", raw)
    cleaned = cleaned.strip().rstrip("`")
    try:
        data = json.loads(cleaned)
        if isinstance(data, dict):
            return data
    except json.JSONDecodeError:
        # Outermost braces; nested objects are expected in analysis payloads
        start, end = cleaned.find("{"), cleaned.rfind("}")
        if 0 <= start < end:
            try:
                data = json.loads(cleaned[start:end + 1])
                if isinstance(data, dict):
                    return data
            except json.JSONDecodeError:
                pass
    logger.warning("%s could not parse JSON from: %s", log_prefix, raw[:200])
    return None
