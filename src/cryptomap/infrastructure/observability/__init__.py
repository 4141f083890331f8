"""
Observability for the price-history core: structured logs for cache hits,
upstream fetches, rate limiting, retries and stale fallbacks, so a degraded
chart can be traced back to the upstream condition that caused it.
"""

from .logging import (
    get_cache_logger,
    # Layer-specific logger factories
    get_ingestion_logger,
    # Base logger factory
    get_logger,
    get_orchestration_logger,
    # Setup
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    # Base
    "get_logger",
    # Layer-specific
    "get_ingestion_logger",
    "get_cache_logger",
    "get_orchestration_logger",
]
