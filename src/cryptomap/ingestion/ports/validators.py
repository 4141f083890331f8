"""Ports for judging CoinGecko payloads and classifying failed responses.

The client asks a validator whether a 200 body is usable and asks an error
mapper what a non-200 status means. Whether to retry is decided one layer
up, in the orchestrator, because it depends on what the cache holds.
"""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass
class ValidationResult:
    """Outcome of a structural check on a decoded body."""

    is_valid: bool
    error_message: str | None = None
    error_code: str | None = None  # e.g. "MISSING_PRICES_FIELD"


class IResponseValidator(Protocol):
    """Checks that a decoded body has the shape an endpoint promises.

    Only structure is judged here. An empty `prices` array is structurally
    fine; the client turns it into EmptyResultError.
    """

    def validate(self, endpoint: str, data: Any) -> ValidationResult:
        """Validate `data` as returned by `endpoint` ("market_chart", ...)."""
        ...


class IErrorMapper(Protocol):
    """Turns a non-200 response into a PriceHistoryError subclass."""

    def map_error(
        self,
        status_code: int,
        body: Any,
        endpoint: str,
        retry_after: str | None = None,
    ) -> Exception:
        """
        Args:
            status_code: HTTP status (429 means rate limited)
            body: Decoded body, used only to enrich the message
            endpoint: Logical endpoint name for context
            retry_after: Raw Retry-After header, if the server sent one
        """
        ...
