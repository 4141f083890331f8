"""Configuration value objects for ingestion components."""

from .value_objects import CacheConfig, CoinGeckoConfig, HttpClientConfig, RetryConfig

__all__ = [
    "CacheConfig",
    "CoinGeckoConfig",
    "HttpClientConfig",
    "RetryConfig",
]
