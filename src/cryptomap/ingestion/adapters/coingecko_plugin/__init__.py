"""
CoinGecko plugin: market_chart price history, market listing and ping.
"""

from cryptomap.ingestion.adapters.coingecko_plugin.client import CoinGeckoClient
from cryptomap.ingestion.adapters.coingecko_plugin.dependency_container import (
    CoinGeckoDependencyContainer,
    create_coingecko_client_from_settings,
)
from cryptomap.ingestion.adapters.coingecko_plugin.exceptions import (
    EmptyResultError,
    InvalidResponseError,
    InvalidURLError,
    NetworkFailureError,
    PriceHistoryError,
    RateLimitedError,
    RetriesExhaustedError,
)

__all__ = [
    "CoinGeckoClient",
    "CoinGeckoDependencyContainer",
    "create_coingecko_client_from_settings",
    "PriceHistoryError",
    "InvalidURLError",
    "RateLimitedError",
    "InvalidResponseError",
    "EmptyResultError",
    "NetworkFailureError",
    "RetriesExhaustedError",
]
