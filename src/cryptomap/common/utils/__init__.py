"""Common utilities."""

from .date_utils import ensure_utc, from_unix_ms, parse_iso8601, to_unix_ms, utc_now
from .formatting import format_axis_date, format_price

__all__ = [
    "ensure_utc",
    "from_unix_ms",
    "parse_iso8601",
    "to_unix_ms",
    "utc_now",
    "format_axis_date",
    "format_price",
]
