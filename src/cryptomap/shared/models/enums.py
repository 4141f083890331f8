"""
Shared enumerations for the price-history core.

A Timeframe carries everything that depends on the requested span: how far
back to look, how densely the API samples it, how long a cached result stays
fresh, and how chart axis labels are rendered.
"""

import enum
from datetime import timedelta


class Granularity(str, enum.Enum):
    """Sampling interval requested from the market-data API."""

    HOURLY = "hourly"
    DAILY = "daily"


class Timeframe(str, enum.Enum):
    """Historical span of a price series."""

    DAY = "24h"
    WEEK = "7d"
    MONTH = "30d"
    YEAR = "1y"

    @property
    def lookback_days(self) -> int:
        return _LOOKBACK_DAYS[self]

    @property
    def granularity(self) -> Granularity:
        return Granularity.HOURLY if self is Timeframe.DAY else Granularity.DAILY

    @property
    def freshness_window(self) -> timedelta:
        """Maximum age of a cached series before it must be re-fetched."""
        return _FRESHNESS_WINDOWS[self]

    @property
    def axis_format(self) -> str:
        """strftime pattern for chart axis labels."""
        return _AXIS_FORMATS[self]


_LOOKBACK_DAYS = {
    Timeframe.DAY: 1,
    Timeframe.WEEK: 7,
    Timeframe.MONTH: 30,
    Timeframe.YEAR: 365,
}

_FRESHNESS_WINDOWS = {
    Timeframe.DAY: timedelta(minutes=5),
    Timeframe.WEEK: timedelta(minutes=15),
    Timeframe.MONTH: timedelta(minutes=30),
    Timeframe.YEAR: timedelta(hours=1),
}

# Month view uses "{day} %b"; the day is rendered without padding by the formatter
_AXIS_FORMATS = {
    Timeframe.DAY: "%H:%M",
    Timeframe.WEEK: "%a",
    Timeframe.MONTH: "{day} %b",
    Timeframe.YEAR: "%b",
}
