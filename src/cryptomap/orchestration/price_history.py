"""
Price-history retrieval orchestrator.

Flow for one (coin_id, timeframe):

    cache (valid?) ──yes──> serve, no network
        │ no
        ▼
    fetch ──ok──> write cache, serve fresh
        │
        ├─ rate limited ──cached entry?──yes──> serve stale + notice, no retry
        │                      │ no
        │                      ▼
        │                 sleep, retry (bounded) ──exhausted──> surface error
        │
        └─ other failure ──cached entry?──yes──> serve stale + notice
                               │ no
                               ▼
                          surface error, clear series
"""

import asyncio
from collections.abc import Callable
from datetime import datetime

from cryptomap.cache.price_cache import PriceHistoryCache
from cryptomap.common.utils.formatting import format_axis_date, format_price
from cryptomap.infrastructure.impls.system import AsyncioSleeper, SystemClock
from cryptomap.infrastructure.observability import get_orchestration_logger
from cryptomap.infrastructure.ports.system import IClock, ISleeper
from cryptomap.ingestion.adapters.coingecko_plugin.exceptions import (
    InvalidURLError,
    PriceHistoryError,
    RateLimitedError,
    RetriesExhaustedError,
)
from cryptomap.ingestion.config.value_objects import RetryConfig
from cryptomap.ingestion.ports.market_data import PriceHistoryPort
from cryptomap.orchestration.messages import (
    CACHED_RATE_LIMITED_NOTICE,
    cached_error_notice,
    describe_error,
)
from cryptomap.orchestration.state import RetrievalState, StateCallback, StateNotifier
from cryptomap.shared.models.enums import Timeframe
from cryptomap.shared.models.prices import CacheEntry, CacheKey, PriceSeries

log = get_orchestration_logger()

Publish = Callable[[RetrievalState], None]


class PriceHistoryOrchestrator:
    """Retrieves price series through the cache, with retry and stale fallback.

    Owns the consumer-facing RetrievalState. Only the most recent retrieval
    may publish: a call superseded by a newer one (e.g. a timeframe switch)
    finishes silently, touching nothing but its own cache key.

    Public operations may be called from any context; subscribers choose the
    loop their notifications are delivered on (see `subscribe`).
    """

    def __init__(
        self,
        client: PriceHistoryPort,
        cache: PriceHistoryCache | None = None,
        retry_config: RetryConfig | None = None,
        clock: IClock | None = None,
        sleeper: ISleeper | None = None,
    ):
        """Initialize orchestrator with injected dependencies.

        Args:
            client: Market-data port (e.g., CoinGeckoClient)
            cache: Price-history cache, a default-bounded one if omitted
            retry_config: Rate-limit retry count and fixed delay
            clock: Time source for freshness checks and fetched_at stamps
            sleeper: Suspension between retries
        """
        self.client = client
        self.cache = cache or PriceHistoryCache()
        self.retry_config = retry_config or RetryConfig()
        self.clock = clock or SystemClock()
        self.sleeper = sleeper or AsyncioSleeper()

        self._notifier = StateNotifier()
        self._state = RetrievalState()
        self._generation = 0
        self._task: asyncio.Task | None = None

    # ------------------------------------------------------------------
    # Consumer interface
    # ------------------------------------------------------------------
    @property
    def state(self) -> RetrievalState:
        return self._state

    def subscribe(
        self,
        callback: StateCallback,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> Callable[[], None]:
        """Receive every published state; on `loop` if given, else inline."""
        return self._notifier.subscribe(callback, loop)

    def request(self, coin_id: str, timeframe: Timeframe) -> asyncio.Task:
        """Start a retrieval in the background, superseding any in-flight one.

        Must be called from within a running event loop.
        """
        if self._task is not None and not self._task.done():
            log.info(
                "retrieval_superseded",
                coin_id=coin_id,
                timeframe=timeframe.value,
            )
            self._task.cancel()

        self._task = asyncio.get_running_loop().create_task(
            self.retrieve(coin_id, timeframe)
        )
        return self._task

    async def wait(self) -> PriceSeries | None:
        """Await the latest background retrieval; None if it was cancelled.

        A retrieval superseded by `request()` while waiting is followed to
        its replacement. Cancelling the waiter leaves the retrieval running.
        """
        while self._task is not None:
            task = self._task
            try:
                return await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
                if self._task is task:
                    return None
        return None

    async def aclose(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        await self.client.close()

    def axis_label(self, timestamp: datetime) -> str:
        """Axis label for the timeframe currently displayed."""
        timeframe = self._state.timeframe or Timeframe.DAY
        return format_axis_date(timestamp, timeframe)

    @staticmethod
    def price_label(price: float) -> str:
        return format_price(price)

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------
    async def retrieve(self, coin_id: str, timeframe: Timeframe) -> PriceSeries:
        """Return the series for (coin_id, timeframe) and publish the outcome.

        Never raises for recoverable failures: they end as a stale fallback
        or an empty series with `state.error_message` set.

        Raises:
            InvalidURLError: coin_id cannot be requested (programming error)
        """
        self._generation += 1
        generation = self._generation
        key = CacheKey(coin_id, timeframe)

        def publish(state: RetrievalState) -> None:
            if generation != self._generation:
                return
            self._state = state
            self._notifier.publish(state)

        return await self._retrieve(key, publish)

    async def _retrieve(self, key: CacheKey, publish: Publish) -> PriceSeries:
        rlog = log.bind(coin_id=key.coin_id, timeframe=key.timeframe.value)
        base = RetrievalState(coin_id=key.coin_id, timeframe=key.timeframe)

        cached = self.cache.get(key)
        if cached is not None and self.cache.is_valid(
            cached, key.timeframe, self.clock.utcnow()
        ):
            rlog.debug("cache_hit", points=len(cached.points))
            series = PriceSeries.from_points(cached.points)
            publish(base.evolve(series=series))
            return series

        publish(base.evolve(is_loading=True, series=self._state.series))

        max_retries = self.retry_config.max_retries
        retries = 0
        while True:
            try:
                points = await self.client.fetch_price_history(
                    key.coin_id, key.timeframe
                )
            except RateLimitedError as exc:
                fallback = self.cache.get(key)
                if fallback is not None:
                    rlog.warning("rate_limited_serving_cache")
                    return self._serve_fallback(
                        base, fallback, CACHED_RATE_LIMITED_NOTICE, exc, publish
                    )
                if retries >= max_retries:
                    exhausted = RetriesExhaustedError(
                        f"Still rate limited after {retries} retries",
                        attempts=retries + 1,
                        status_code=exc.status_code,
                        endpoint=exc.endpoint,
                    )
                    rlog.error("retries_exhausted", attempts=retries + 1)
                    return self._surface_error(base, exhausted, publish)

                retries += 1
                rlog.warning(
                    "rate_limited_retrying",
                    retry=retries,
                    max_retries=max_retries,
                    delay_seconds=self.retry_config.delay_seconds,
                )
                await self.sleeper.sleep(self.retry_config.delay_seconds)
            except InvalidURLError:
                publish(base)
                raise
            except PriceHistoryError as exc:
                return self._handle_failure(key, base, exc, publish, rlog)
            except Exception as exc:
                rlog.exception("unexpected_fetch_error")
                return self._handle_failure(key, base, exc, publish, rlog)
            else:
                break

        entry = CacheEntry(points=tuple(points), fetched_at=self.clock.utcnow())
        self.cache.put(key, entry)
        rlog.info("fetched", points=len(entry.points), retries=retries)

        series = PriceSeries.from_points(entry.points)
        publish(base.evolve(series=series))
        return series

    def _handle_failure(
        self,
        key: CacheKey,
        base: RetrievalState,
        exc: Exception,
        publish: Publish,
        rlog,
    ) -> PriceSeries:
        fallback = self.cache.get(key)
        if fallback is not None:
            rlog.warning("fetch_failed_serving_cache", error=str(exc))
            return self._serve_fallback(
                base, fallback, cached_error_notice(exc), exc, publish
            )
        rlog.error("fetch_failed", error=str(exc))
        return self._surface_error(base, exc, publish)

    @staticmethod
    def _serve_fallback(
        base: RetrievalState,
        entry: CacheEntry,
        notice: str,
        exc: Exception,
        publish: Publish,
    ) -> PriceSeries:
        series = PriceSeries.from_points(entry.points)
        publish(
            base.evolve(
                error_message=notice,
                series=series,
                is_stale=True,
                error=exc if isinstance(exc, PriceHistoryError) else None,
            )
        )
        return series

    @staticmethod
    def _surface_error(
        base: RetrievalState, exc: Exception, publish: Publish
    ) -> PriceSeries:
        series = PriceSeries.empty()
        publish(
            base.evolve(
                error_message=describe_error(exc),
                series=series,
                error=exc if isinstance(exc, PriceHistoryError) else None,
            )
        )
        return series
