"""Shared domain models."""

from cryptomap.shared.models.enums import Granularity, Timeframe
from cryptomap.shared.models.markets import CoinMarket
from cryptomap.shared.models.prices import (
    CacheEntry,
    CacheKey,
    PricePoint,
    PriceSeries,
)

__all__ = [
    # Enums
    "Granularity",
    "Timeframe",
    # Models
    "PricePoint",
    "PriceSeries",
    "CacheKey",
    "CacheEntry",
    "CoinMarket",
]
