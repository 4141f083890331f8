"""
CoinGecko Error Mapper

Maps HTTP status codes and response bodies to specific exception types,
providing context-rich error messages for debugging.
"""

from typing import Any

from .exceptions import InvalidResponseError, PriceHistoryError, RateLimitedError


class CoinGeckoErrorMapper:
    """Maps HTTP status codes to appropriate exception types."""

    @staticmethod
    def extract_error_message(response_body: Any) -> str:
        """Extract error message from response body."""
        if response_body is None:
            return "empty body"
        if isinstance(response_body, str):
            return response_body[:200]
        if isinstance(response_body, dict):
            # CoinGecko nests errors as {"status": {"error_message": ...}}
            status = response_body.get("status")
            if isinstance(status, dict) and status.get("error_message"):
                return str(status["error_message"])
            return str(
                response_body.get("error")
                or response_body.get("message")
                or response_body
            )
        return str(response_body)

    @staticmethod
    def map_error(
        status_code: int,
        response_body: Any,
        endpoint: str,
        retry_after: str | None = None,
    ) -> PriceHistoryError:
        """
        Map HTTP status code to specific exception with context.

        Args:
            status_code: HTTP status code
            response_body: Response body (dict, str, or other)
            endpoint: API endpoint that was called
            retry_after: Retry-After header value if present

        Returns:
            RateLimitedError for 429, InvalidResponseError for anything else
        """
        error_msg = CoinGeckoErrorMapper.extract_error_message(response_body)

        if status_code == 429:
            retry_after_int = None
            if retry_after:
                try:
                    retry_after_int = int(retry_after)
                except ValueError:
                    pass

            return RateLimitedError(
                f"Rate limit exceeded for {endpoint}: {error_msg}",
                retry_after=retry_after_int,
                status_code=status_code,
                endpoint=endpoint,
            )

        return InvalidResponseError(
            f"Unexpected status {status_code} for {endpoint}: {error_msg}",
            status_code=status_code,
            endpoint=endpoint,
        )
