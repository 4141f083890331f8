"""User-facing notices for retrieval failures and stale fallbacks."""

from cryptomap.ingestion.adapters.coingecko_plugin.exceptions import (
    EmptyResultError,
    InvalidResponseError,
    NetworkFailureError,
    PriceHistoryError,
    RetriesExhaustedError,
)

RATE_LIMITED_MESSAGE = "Rate limit exceeded. Please try again in a minute."
NO_CONNECTION_MESSAGE = (
    "No internet connection. Please check your connection and try again."
)
TIMEOUT_MESSAGE = "Request timed out. Please try again."
SERVER_MESSAGE = "Unable to fetch data from server. Please try again later."
GENERIC_MESSAGE = "Failed to fetch price history. Please try again."
UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again."

CACHED_RATE_LIMITED_NOTICE = "Using cached data (Rate limit exceeded)"


def describe_error(error: BaseException) -> str:
    """Map a retrieval failure to the message shown to the user."""
    if isinstance(error, RetriesExhaustedError):
        return RATE_LIMITED_MESSAGE
    if isinstance(error, NetworkFailureError):
        return TIMEOUT_MESSAGE if error.timed_out else NO_CONNECTION_MESSAGE
    if isinstance(error, EmptyResultError):
        return GENERIC_MESSAGE
    if isinstance(error, InvalidResponseError):
        return SERVER_MESSAGE
    if isinstance(error, PriceHistoryError):
        return GENERIC_MESSAGE
    return UNEXPECTED_MESSAGE


def cached_error_notice(error: BaseException) -> str:
    return f"Using cached data (Error: {describe_error(error)})"
