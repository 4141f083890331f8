import asyncio
import logging
import re
from typing import Any

import aiohttp
from pydantic import ValidationError

from cryptomap.ingestion.adapters.coingecko_plugin.error_mapper import (
    CoinGeckoErrorMapper,
)
from cryptomap.ingestion.adapters.coingecko_plugin.exceptions import (
    EmptyResultError,
    InvalidResponseError,
    InvalidURLError,
    NetworkFailureError,
    RateLimitedError,
)
from cryptomap.ingestion.adapters.coingecko_plugin.mappers import (
    map_coin_market,
    map_price_points,
)
from cryptomap.ingestion.adapters.coingecko_plugin.response_validator import (
    COINS_MARKETS,
    MARKET_CHART,
)
from cryptomap.ingestion.config.value_objects import CoinGeckoConfig
from cryptomap.ingestion.ports import (
    HttpResponse,
    IApiKeyProvider,
    IHttpClient,
    IResponseValidator,
)
from cryptomap.shared.models.enums import Timeframe
from cryptomap.shared.models.markets import CoinMarket
from cryptomap.shared.models.prices import PricePoint

logger = logging.getLogger(__name__)

# CoinGecko ids are lowercase slugs ("bitcoin", "usd-coin", "wrapped-steth")
_COIN_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class CoinGeckoClient:
    """Async client for the CoinGecko v3 API.

    Single Responsibility: Build requests with proper headers, execute one
    attempt, validate the response and classify the outcome.

    Retrying is NOT done here: whether a rate limit is retried depends on
    cache state, which only the orchestrator knows.

    Dependencies injected (not instantiated):
    - http_client: Executes HTTP requests
    - api_key_provider: Provides headers with the API key
    - response_validator: Validates response structures
    """

    def __init__(
        self,
        config: CoinGeckoConfig,
        http_client: IHttpClient,
        api_key_provider: IApiKeyProvider,
        response_validator: IResponseValidator,
        error_mapper: CoinGeckoErrorMapper | None = None,
    ):
        """Initialize CoinGeckoClient with injected dependencies.

        Args:
            config: Configuration including base_url and API key
            http_client: HTTP client implementation (e.g., AiohttpClient)
            api_key_provider: Provides request headers (e.g., StaticApiKeyProvider)
            response_validator: Validates response structures
            error_mapper: Maps non-success statuses to exceptions
        """
        self.config = config
        self.http_client = http_client
        self.api_key_provider = api_key_provider
        self.response_validator = response_validator
        self.error_mapper = error_mapper or CoinGeckoErrorMapper()
        self.base_url = config.base_url.rstrip("/")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def fetch_price_history(
        self, coin_id: str, timeframe: Timeframe
    ) -> list[PricePoint]:
        """Fetch the USD price history of `coin_id` for `timeframe`.

        Returns:
            Non-empty list of PricePoints in API order (timestamp ascending)

        Raises:
            InvalidURLError: coin_id cannot form a request path
            RateLimitedError: 429 from upstream
            InvalidResponseError: other status, or missing/malformed `prices`
            EmptyResultError: `prices` was an empty array
            NetworkFailureError: connection error or timeout
        """
        url = f"{self.base_url}/coins/{_checked_coin_id(coin_id)}/market_chart"
        params = {
            "vs_currency": self.config.vs_currency,
            "days": str(timeframe.lookback_days),
            "interval": timeframe.granularity.value,
        }

        response = await self._get(MARKET_CHART, url, params)
        payload = self._validated_body(MARKET_CHART, response)

        try:
            points = map_price_points(payload)
        except (OverflowError, OSError, ValueError) as e:
            logger.warning(f"⚠️ Unparseable price pair for {coin_id}: {e}")
            raise InvalidResponseError(
                f"Invalid price pair in market_chart response: {e}",
                status_code=response.status_code,
                endpoint=MARKET_CHART,
            ) from e

        if not points:
            logger.warning(f"⚠️ Empty price history for {coin_id} ({timeframe.value})")
            raise EmptyResultError(
                f"No price points returned for {coin_id} ({timeframe.value})",
                status_code=response.status_code,
                endpoint=MARKET_CHART,
            )

        logger.info(
            f"✅ Fetched {len(points)} price points for {coin_id} ({timeframe.value})"
        )
        return points

    async def fetch_top_coins(self, limit: int = 50) -> list[CoinMarket]:
        """Fetch the top `limit` coins ordered by market cap."""
        if limit < 1:
            raise ValueError("limit must be positive")

        url = f"{self.base_url}/coins/markets"
        params = {
            "vs_currency": self.config.vs_currency,
            "order": "market_cap_desc",
            "per_page": str(limit),
            "page": "1",
            "sparkline": "false",
            "price_change_percentage": "24h,7d,30d,1y",
        }

        response = await self._get(COINS_MARKETS, url, params)
        rows = self._validated_body(COINS_MARKETS, response)

        try:
            coins = [map_coin_market(row) for row in rows]
        except ValidationError as e:
            logger.warning(f"⚠️ Invalid market row: {e.error_count()} error(s)")
            raise InvalidResponseError(
                f"Invalid market row in coins/markets response: {e}",
                status_code=response.status_code,
                endpoint=COINS_MARKETS,
            ) from e

        logger.info(f"✅ Fetched {len(coins)} coins from market listing")
        return coins

    async def search_coins(self, query: str, limit: int = 100) -> list[CoinMarket]:
        """Filter the top `limit` coins by name or symbol, case-insensitively."""
        coins = await self.fetch_top_coins(limit=limit)
        return [coin for coin in coins if coin.matches(query)]

    async def ping(self) -> bool:
        """Check API availability.

        Returns:
            True on 2xx, False on any other non-429 status

        Raises:
            RateLimitedError: 429 from upstream
            NetworkFailureError: connection error or timeout
        """
        response = await self._get("ping", f"{self.base_url}/ping", None)
        if response.status_code == 429:
            raise self._map_error("ping", response)
        logger.info(f"API status check - HTTP {response.status_code}")
        return response.is_success

    async def close(self) -> None:
        await self.http_client.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    async def _get(
        self, endpoint: str, url: str, params: dict[str, str] | None
    ) -> HttpResponse:
        headers = await self.api_key_provider.get_headers()

        logger.debug(f"🔍 Request: {endpoint}")
        logger.debug(f"🔍 URL: {url}")
        logger.debug(f"🔍 Params: {params}")

        try:
            return await self.http_client.get(
                url,
                params=params,
                headers=headers,
                timeout=self.config.http_config.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"❌ Timeout for {endpoint}: {e}")
            raise NetworkFailureError(
                f"Request to {endpoint} timed out", timed_out=True, endpoint=endpoint
            ) from e
        except aiohttp.ClientError as e:
            logger.error(f"❌ Network error for {endpoint}: {e}")
            raise NetworkFailureError(
                f"Network error for {endpoint}: {e}", endpoint=endpoint
            ) from e

    def _validated_body(self, endpoint: str, response: HttpResponse) -> Any:
        if response.status_code != 200:
            raise self._map_error(endpoint, response)

        validation_result = self.response_validator.validate(endpoint, response.body)
        if not validation_result.is_valid:
            logger.warning(
                f"⚠️ Response validation failed for {endpoint}: "
                f"{validation_result.error_message}"
            )
            raise InvalidResponseError(
                f"Invalid response structure for {endpoint}: "
                f"{validation_result.error_message}",
                status_code=response.status_code,
                endpoint=endpoint,
            )
        return response.body

    def _map_error(
        self, endpoint: str, response: HttpResponse
    ) -> RateLimitedError | InvalidResponseError:
        retry_after = _header(response.headers, "Retry-After")
        error = self.error_mapper.map_error(
            response.status_code, response.body, endpoint, retry_after=retry_after
        )
        if isinstance(error, RateLimitedError):
            logger.warning(f"⚠️ Rate limited on {endpoint} (retry_after={retry_after})")
        else:
            logger.error(f"❌ HTTP {response.status_code} for {endpoint}: {error}")
        return error


def _checked_coin_id(coin_id: str) -> str:
    if not isinstance(coin_id, str) or not _COIN_ID_PATTERN.match(coin_id):
        raise InvalidURLError(f"Invalid coin id for request URL: {coin_id!r}")
    return coin_id


def _header(headers: dict[str, str], name: str) -> str | None:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None
