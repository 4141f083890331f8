"""
Price-history exception hierarchy.

Provides specific exception types for each failure of the retrieval path,
enabling the orchestrator to choose between retry, stale fallback and
surfacing an error.
"""


class PriceHistoryError(Exception):
    """Base exception for all price-history retrieval errors."""

    def __init__(
        self, message: str, status_code: int | None = None, endpoint: str | None = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.endpoint = endpoint


class InvalidURLError(PriceHistoryError):
    """Request URL could not be built (malformed coin id). Programming error."""

    pass


class RateLimitedError(PriceHistoryError):
    """429 - Too many requests, rate limit exceeded."""

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class InvalidResponseError(PriceHistoryError):
    """Non-success status, or a body without a usable payload."""

    pass


class EmptyResultError(InvalidResponseError):
    """Body parsed correctly but held zero price points."""

    pass


class NetworkFailureError(PriceHistoryError):
    """Transport-level failure: connection error or timeout."""

    def __init__(self, message: str, timed_out: bool = False, **kwargs):
        super().__init__(message, **kwargs)
        self.timed_out = timed_out


class RetriesExhaustedError(PriceHistoryError):
    """Still rate limited after every allowed retry."""

    def __init__(self, message: str, attempts: int = 0, **kwargs):
        super().__init__(message, **kwargs)
        self.attempts = attempts
