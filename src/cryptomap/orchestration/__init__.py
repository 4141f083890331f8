"""Retrieval orchestration: cache, fetch, retry, stale fallback."""

from .messages import describe_error
from .price_history import PriceHistoryOrchestrator
from .state import RetrievalState, StateNotifier

__all__ = [
    "PriceHistoryOrchestrator",
    "RetrievalState",
    "StateNotifier",
    "describe_error",
]
