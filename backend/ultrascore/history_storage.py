"""
Persistent scan history keyed by user_id.
- Backend: JSON file (data/scan_history.json), most recent scan first.
- Capped at MAX_SCANS_PER_USER entries per user; older scans are dropped.
- Stores the serialized ScoringResult fields a history view needs.
"""
import json
import logging
import threading
import time
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from ultrascore.config import get_history_path
from ultrascore.models.result import ScoringResult

logger = logging.getLogger(__name__)

MAX_SCANS_PER_USER = 500
DEFAULT_PAGE_SIZE = 50


class ScanHistoryStore:
    def __init__(self, path: Optional[Path] = None):
        self._path = path or get_history_path()
        self._lock = threading.Lock()

    def _load_all(self) -> Dict[str, List[Dict[str, Any]]]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
            return data.get("scans", {})
        except Exception as e:
            logger.warning("HISTORY load failed path=%s: %s", self._path, e)
            return {}

    def _save_all(self, scans: Dict[str, List[Dict[str, Any]]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump({"scans": scans, "version": "1.0"}, f, indent=2)

    def add_scan(self, user_id: str, result: ScoringResult) -> Dict[str, Any]:
        """Prepend a scan record for user_id and return it."""
        payload = result.to_dict()
        now = time.time()
        record = {
            "id": f"scan_{int(now * 1000)}_{uuid.uuid4().hex[:6]}",
            "userId": user_id,
            "productName": payload["productName"],
            "score": payload["finalScore"],
            "category": payload["category"],
            "grade": payload["grade"],
            "nutrients": payload["nutrients"],
            "breakdown": payload["breakdown"],
            "healthierAlternative": payload["healthierAlternative"],
            "overrideReason": payload["overrideReason"],
            "scannedAt": int(now * 1000),
        }
        with self._lock:
            scans = self._load_all()
            user_scans = [record] + scans.get(user_id, [])
            scans[user_id] = user_scans[:MAX_SCANS_PER_USER]
            self._save_all(scans)
        logger.info("HISTORY_ADD user_id=%s product=%s score=%s", user_id, record["productName"], record["score"])
        return record

    def get_history(self, user_id: str, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> List[Dict[str, Any]]:
        if limit <= 0 or offset < 0:
            return []
        with self._lock:
            user_scans = self._load_all().get(user_id, [])
        return user_scans[offset:offset + limit]

    def clear(self, user_id: str) -> int:
        """Delete a user's history. Returns the number of scans removed."""
        with self._lock:
            scans = self._load_all()
            removed = len(scans.pop(user_id, []))
            if removed:
                self._save_all(scans)
        logger.info("HISTORY_CLEAR user_id=%s removed=%s", user_id, removed)
        return removed
