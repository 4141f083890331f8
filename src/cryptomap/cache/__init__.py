"""In-memory price-history cache."""

from .price_cache import PriceHistoryCache  # noqa: F401

__all__ = ["PriceHistoryCache"]
