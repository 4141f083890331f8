"""
Market-data port consumed by the retrieval orchestrator.

The orchestrator depends on this protocol only, so tests can drive it with a
scripted fake instead of the CoinGecko client.
"""

from __future__ import annotations

from typing import Protocol

from cryptomap.shared.models.enums import Timeframe
from cryptomap.shared.models.prices import PricePoint


class PriceHistoryPort(Protocol):
    """Raw price-history data port."""

    async def fetch_price_history(
        self, coin_id: str, timeframe: Timeframe
    ) -> list[PricePoint]:
        """
        Fetch the USD price history of a coin for a timeframe.

        Returns a non-empty list ordered by timestamp ascending.

        Raises:
            InvalidURLError: Malformed coin id (programming error)
            RateLimitedError: Upstream answered 429
            InvalidResponseError: Bad status or unusable body
            EmptyResultError: Body parsed but contained no points
            NetworkFailureError: Transport-level failure or timeout
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
