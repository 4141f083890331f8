"""
Example demonstrating price-history retrieval against the live CoinGecko API.

This script shows how to:
1. Load configuration and set up structured logging
2. Wire the CoinGecko client, cache and orchestrator
3. Retrieve a coin's history for every timeframe and print derived stats
4. Hit the cache on a repeated request

Run with:
    COINGECKO_API_KEY=CG-... python -m cryptomap.examples.price_history_demo bitcoin
"""

import asyncio
import logging
import sys

from cryptomap.cache import PriceHistoryCache
from cryptomap.config import get_config
from cryptomap.infrastructure.observability import setup_logging
from cryptomap.ingestion.adapters.coingecko_plugin import (
    create_coingecko_client_from_settings,
)
from cryptomap.ingestion.config import CacheConfig, RetryConfig
from cryptomap.orchestration import PriceHistoryOrchestrator, RetrievalState
from cryptomap.shared.models import Timeframe

logger = logging.getLogger(__name__)


def _print_state(state: RetrievalState) -> None:
    if state.is_loading:
        logger.info(f"⏳ Loading {state.coin_id} ({state.timeframe.value})...")
    elif state.error_message:
        logger.warning(f"⚠️ {state.error_message}")


async def demo_price_history(coin_id: str) -> None:
    """Retrieve every timeframe for `coin_id` and log its statistics."""
    settings = get_config()
    setup_logging(level=settings.logging.level, json_logs=settings.logging.json_logs)

    orchestrator = PriceHistoryOrchestrator(
        client=create_coingecko_client_from_settings(settings),
        cache=PriceHistoryCache(CacheConfig(max_entries=settings.cache.max_entries)),
        retry_config=RetryConfig(
            max_retries=settings.retry.max_retries,
            delay_seconds=settings.retry.delay_seconds,
        ),
    )
    orchestrator.subscribe(_print_state)

    try:
        for timeframe in Timeframe:
            logger.info("=" * 60)
            logger.info(f"DEMO: {coin_id} price history ({timeframe.value})")
            logger.info("=" * 60)

            series = await orchestrator.retrieve(coin_id, timeframe)
            if series.is_empty:
                continue

            first, last = series.points[0], series.points[-1]
            logger.info(f"Points: {len(series.points)}")
            logger.info(
                f"Range: {orchestrator.axis_label(first.timestamp)} -> "
                f"{orchestrator.axis_label(last.timestamp)}"
            )
            logger.info(
                f"Min {orchestrator.price_label(series.min)} | "
                f"Max {orchestrator.price_label(series.max)} | "
                f"Avg {orchestrator.price_label(series.avg)}"
            )

        # Second request for the same key is served from cache
        await orchestrator.retrieve(coin_id, Timeframe.DAY)
        logger.info(f"Cached entries: {len(orchestrator.cache)}")
    finally:
        await orchestrator.aclose()

    logger.info("Price history demo complete\n")


if __name__ == "__main__":
    asyncio.run(demo_price_history(sys.argv[1] if len(sys.argv) > 1 else "bitcoin"))
