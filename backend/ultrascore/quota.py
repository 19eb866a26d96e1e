"""
Per-identifier daily scan quota. In-process and lock-guarded.

The window opens on an identifier's first scan and lasts 24 hours; the count resets
when it expires. A failed check means the scan is refused before any scoring work.
"""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from ultrascore.config import get_default_plan

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 24 * 60 * 60


@dataclass(frozen=True)
class Plan:
    id: str
    name: str
    daily_limit: int
    price: float = 0.0


PLANS: Dict[str, Plan] = {
    "free": Plan("free", "Free", 30),
    "pro": Plan("pro", "Pro", 100, 9.99),
    "premium": Plan("premium", "Premium", 500, 19.99),
}


def get_plan(plan_id: Optional[str] = None) -> Plan:
    """Plan by id; unknown or missing ids fall back to the configured default (Free)."""
    key = (plan_id or get_default_plan()).strip().lower()
    plan = PLANS.get(key)
    if plan is None:
        logger.info("QUOTA unknown plan_id=%s, using free", plan_id)
        return PLANS["free"]
    return plan


@dataclass(frozen=True)
class QuotaStatus:
    success: bool
    limit: int
    remaining: int
    reset: int  # epoch seconds
    plan_name: str
    used: int = 0

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "limit": self.limit,
            "remaining": self.remaining,
            "reset": self.reset,
            "planName": self.plan_name,
            "used": self.used,
        }

    def headers(self) -> Dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset),
        }


class DailyQuota:
    def __init__(self, window_seconds: int = WINDOW_SECONDS, clock: Callable[[], float] = time.time):
        self._window = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        # identifier -> (window_start, used)
        self._counters: Dict[str, Tuple[float, int]] = {}
        self._last_sweep: Optional[float] = None

    def _sweep(self, now: float) -> None:
        """Drop expired windows, at most once per window length. Caller holds the lock."""
        if self._last_sweep is not None and now - self._last_sweep < self._window:
            return
        self._last_sweep = now
        expired = [k for k, (start, _) in self._counters.items() if now - start >= self._window]
        for key in expired:
            del self._counters[key]
        if expired:
            logger.debug("QUOTA swept %s expired counters", len(expired))

    def _current(self, identifier: str, now: float) -> Tuple[float, int]:
        entry = self._counters.get(identifier)
        if entry is None or now - entry[0] >= self._window:
            return now, 0
        return entry

    def check_and_consume(self, identifier: str, plan_id: Optional[str] = None) -> QuotaStatus:
        plan = get_plan(plan_id)
        with self._lock:
            now = self._clock()
            self._sweep(now)
            start, used = self._current(identifier, now)
            reset = int(start + self._window)
            if used >= plan.daily_limit:
                logger.info("QUOTA exceeded identifier=%s plan=%s used=%s", identifier, plan.id, used)
                return QuotaStatus(False, plan.daily_limit, 0, reset, plan.name, used)
            used += 1
            self._counters[identifier] = (start, used)
        remaining = max(0, plan.daily_limit - used)
        logger.debug("QUOTA consumed identifier=%s plan=%s used=%s remaining=%s", identifier, plan.id, used, remaining)
        return QuotaStatus(True, plan.daily_limit, remaining, reset, plan.name, used)

    def usage(self, identifier: str, plan_id: Optional[str] = None) -> QuotaStatus:
        """Current usage without consuming a scan."""
        plan = get_plan(plan_id)
        with self._lock:
            now = self._clock()
            start, used = self._current(identifier, now)
        remaining = max(0, plan.daily_limit - used)
        return QuotaStatus(remaining > 0, plan.daily_limit, remaining, int(start + self._window), plan.name, used)

    def reset(self, identifier: Optional[str] = None) -> None:
        """Clear one identifier's counter, or all of them."""
        with self._lock:
            if identifier is None:
                self._counters.clear()
            else:
                self._counters.pop(identifier, None)
        logger.info("QUOTA reset identifier=%s", identifier or "*")
