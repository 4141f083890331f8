"""
Date Utilities
==============

Common date/time handling utilities for timestamps, conversions, and timezone-aware operations.
"""

from datetime import UTC, datetime


def to_unix_ms(dt: datetime) -> int:
    """
    Convert datetime to Unix timestamp in milliseconds.

    Args:
        dt: Datetime object (timezone-aware or naive assumed UTC)

    Returns:
        Unix timestamp in milliseconds
    """
    return int(ensure_utc(dt).timestamp() * 1000)


def from_unix_ms(timestamp_ms: float) -> datetime:
    """
    Convert Unix timestamp in milliseconds to datetime (UTC).

    Args:
        timestamp_ms: Unix timestamp in milliseconds (CoinGecko sends floats)

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)


def utc_now() -> datetime:
    """Get current time in UTC."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_iso8601(value: str | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp with or without fractional seconds.

    Returns None for missing or unparseable values instead of raising;
    market rows are still usable without a last-updated time.
    """
    if not value:
        return None
    try:
        return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError:
        return None
