"""
Consumer-facing retrieval state and its delivery to subscribers.

A RetrievalState is an immutable snapshot; every retrieval step replaces it
as a whole, so a subscriber never observes a half-updated trio of
loading flag, message and series.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from cryptomap.infrastructure.observability import get_orchestration_logger
from cryptomap.ingestion.adapters.coingecko_plugin.exceptions import (
    PriceHistoryError,
)
from cryptomap.shared.models.enums import Timeframe
from cryptomap.shared.models.prices import PriceSeries

log = get_orchestration_logger(component="state-notifier")

StateCallback = Callable[["RetrievalState"], None]


@dataclass(frozen=True)
class RetrievalState:
    """Snapshot of the latest retrieval as seen by the consumer."""

    coin_id: str | None = None
    timeframe: Timeframe | None = None
    is_loading: bool = False
    error_message: str = ""  # empty = no notice
    series: PriceSeries = field(default_factory=PriceSeries)
    is_stale: bool = False  # series served from an expired/fallback entry
    error: PriceHistoryError | None = None

    def evolve(self, **changes) -> "RetrievalState":
        return replace(self, **changes)


@dataclass(frozen=True)
class _Subscription:
    callback: StateCallback
    loop: asyncio.AbstractEventLoop | None


class StateNotifier:
    """
    Delivers state snapshots to subscribers.

    A subscriber registered with a loop receives its snapshots on that loop
    (via call_soon_threadsafe), whatever context published them. Without a
    loop the callback runs inline in the publisher's context.
    """

    def __init__(self) -> None:
        self._subscriptions: list[_Subscription] = []

    def subscribe(
        self,
        callback: StateCallback,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> Callable[[], None]:
        """Register `callback`; returns a function that unsubscribes it."""
        subscription = _Subscription(callback, loop)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

        return unsubscribe

    def publish(self, state: RetrievalState) -> None:
        for subscription in list(self._subscriptions):
            if subscription.loop is not None:
                subscription.loop.call_soon_threadsafe(
                    self._deliver, subscription.callback, state
                )
            else:
                self._deliver(subscription.callback, state)

    @staticmethod
    def _deliver(callback: StateCallback, state: RetrievalState) -> None:
        try:
            callback(state)
        except Exception:
            # one faulty subscriber must not break delivery to the rest
            log.exception("subscriber_failed", callback=repr(callback))

    def __len__(self) -> int:
        return len(self._subscriptions)
