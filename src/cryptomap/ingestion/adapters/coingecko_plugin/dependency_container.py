"""Dependency injection container for the CoinGecko ingestion layer.

Wires the ingestion abstractions and their implementations together.
This is the single place where concrete implementations are chosen.

Usage:
    container = CoinGeckoDependencyContainer(api_key="CG-...")
    client = container.create_coingecko_client()
"""

from cryptomap.config.state import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, ConfigState
from cryptomap.infrastructure.observability import get_ingestion_logger
from cryptomap.ingestion.adapters.coingecko_plugin.client import CoinGeckoClient
from cryptomap.ingestion.adapters.coingecko_plugin.error_mapper import (
    CoinGeckoErrorMapper,
)
from cryptomap.ingestion.adapters.coingecko_plugin.key_provider import (
    StaticApiKeyProvider,
)
from cryptomap.ingestion.adapters.coingecko_plugin.response_validator import (
    CoinGeckoResponseValidator,
)
from cryptomap.ingestion.config.value_objects import CoinGeckoConfig, HttpClientConfig
from cryptomap.ingestion.connectors.aiohttp_client import AiohttpClient
from cryptomap.ingestion.ports import IApiKeyProvider, IHttpClient, IResponseValidator

log = get_ingestion_logger("coingecko-client", provider="coingecko")


class CoinGeckoDependencyContainer:
    """Dependency injection container for the CoinGecko client.

    Responsible for:
    1. Choosing concrete implementations for each protocol
    2. Creating configuration value objects
    3. Wiring dependencies together

    Tests can subclass this and override the create_* methods to inject mocks.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: str = "",
        user_agent: str = DEFAULT_USER_AGENT,
        http_config: HttpClientConfig | None = None,
    ):
        self.http_config = http_config or HttpClientConfig()
        self.config = CoinGeckoConfig(
            base_url=base_url,
            api_key=api_key,
            user_agent=user_agent,
            http_config=self.http_config,
        )

    def create_http_client(self) -> IHttpClient:
        """Create HTTP client implementation (currently AiohttpClient)."""
        return AiohttpClient(self.http_config)

    def create_api_key_provider(self) -> IApiKeyProvider:
        """Create API key provider implementation (currently StaticApiKeyProvider)."""
        return StaticApiKeyProvider(self.config.api_key, self.config.user_agent)

    def create_response_validator(self) -> IResponseValidator:
        """Create response validator implementation."""
        return CoinGeckoResponseValidator()

    def create_error_mapper(self) -> CoinGeckoErrorMapper:
        return CoinGeckoErrorMapper()

    def create_coingecko_client(self) -> CoinGeckoClient:
        """Create fully-wired CoinGeckoClient."""
        return CoinGeckoClient(
            config=self.config,
            http_client=self.create_http_client(),
            api_key_provider=self.create_api_key_provider(),
            response_validator=self.create_response_validator(),
            error_mapper=self.create_error_mapper(),
        )


def create_coingecko_client_from_settings(settings: ConfigState) -> CoinGeckoClient:
    """Factory function to create CoinGeckoClient from a loaded ConfigState.

    Args:
        settings: ConfigState with a coingecko section

    Returns:
        Fully configured CoinGeckoClient
    """
    container = CoinGeckoDependencyContainer(
        base_url=settings.coingecko.base_url,
        api_key=settings.coingecko.api_key,
        user_agent=settings.coingecko.user_agent,
        http_config=HttpClientConfig(timeout=settings.coingecko.timeout),
    )
    log.info(
        "client_configured",
        base_url=container.config.base_url,
        timeout=container.http_config.timeout,
        has_api_key=bool(container.config.api_key),
    )
    return container.create_coingecko_client()
