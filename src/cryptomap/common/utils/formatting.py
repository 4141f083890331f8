"""
Formatting Utilities
====================

Timeframe-dependent axis labels and USD price strings for the consumer layer.
"""

from datetime import datetime

from cryptomap.common.utils.date_utils import ensure_utc
from cryptomap.shared.models.enums import Timeframe


def format_axis_date(timestamp: datetime, timeframe: Timeframe) -> str:
    """
    Format a chart axis label for the given timeframe.

    Day -> "14:05", Week -> "Mon", Month -> "3 Feb", Year -> "Feb".
    Labels are rendered in UTC with C-locale names.
    """
    ts = ensure_utc(timestamp)
    pattern = timeframe.axis_format.replace("{day}", str(ts.day))
    return ts.strftime(pattern)


def format_price(price: float) -> str:
    """
    Format a USD price with two decimals and thousands separators.

    Args:
        price: Price in USD

    Returns:
        String like "$1,234.56" (negative values as "-$1.00")
    """
    sign = "-" if price < 0 else ""
    return f"{sign}${abs(price):,.2f}"
