"""Custom exceptions for the review_cache package."""

from __future__ import annotations


class ReviewCacheError(Exception):
    """Base exception for all review-cache errors."""


class StoreError(ReviewCacheError):
    """Raised when a durable store operation fails."""

    def __init__(self, operation: str, key: str = "", detail: str = "") -> None:
        self.operation = operation
        self.key = key
        msg = f"Store error during '{operation}'"
        if key:
            msg += f" on '{key}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class QuotaExceededError(StoreError):
    """Raised when a write would exceed the store's size quota."""

    def __init__(self, key: str, needed: int, quota: int) -> None:
        self.needed = needed
        self.quota = quota
        super().__init__("set", key, f"needs {needed} bytes, quota is {quota}")


class ConfigError(ReviewCacheError):
    """Raised when the cache or its store is misconfigured."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid configuration: {message}")
