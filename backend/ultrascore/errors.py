"""
Errors surfaced by the scoring pipeline. Only the input rejections reach end users as-is.
"""
from typing import Any, Optional


class ScoringError(ValueError):
    """Fatal rejection of a scoring request."""


class NotConsumerProductError(ScoringError):
    DEFAULT_MESSAGE = "Not a consumer product"

    def __init__(self, reason: Optional[str] = None):
        super().__init__(reason or self.DEFAULT_MESSAGE)


class UnsupportedCategoryError(ScoringError):
    def __init__(self, category: Any):
        self.category = category
        super().__init__(f"Unknown category: {category}")


class ExtractionError(RuntimeError):
    """Product analysis extractor was unreachable or returned unusable output."""


class QuotaExceededError(RuntimeError):
    def __init__(self, status: Any):
        self.status = status
        super().__init__(
            f"Rate limit exceeded. Your {status.plan_name} plan allows {status.limit} scans per day."
        )
