"""
Price-history core for the CryptoMap market heatmap.
Modular architecture with clean separation of concerns.

Modules:
- ingestion: CoinGecko market-data client and HTTP plumbing
- cache: In-memory price-history cache with timeframe freshness windows
- orchestration: Retrieval flow (cache, fetch, retry, stale fallback)
- shared: Common models, enums
- infrastructure / config: Clock, logging, configuration
"""

__version__ = "0.1.0"
