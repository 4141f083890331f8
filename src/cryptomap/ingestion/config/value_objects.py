"""Configuration value objects for dependency injection.

Instead of injecting the global settings object, inject specific configuration
dataclasses into each component. Enables:
- Easy testing with different configurations
- Clear constructor contracts
- Validation at composition root
"""

from dataclasses import dataclass

from cryptomap.config.state import DEFAULT_BASE_URL, DEFAULT_USER_AGENT


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuration for HTTP client."""

    timeout: float = 30.0
    connect_timeout: float = 10.0


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for rate-limit retries.

    Retries use a fixed delay between attempts; max_retries counts retries
    after the first attempt.
    """

    max_retries: int = 3
    delay_seconds: float = 1.0


@dataclass(frozen=True)
class CacheConfig:
    """Configuration for the in-memory price-history cache."""

    max_entries: int | None = 256


@dataclass(frozen=True)
class CoinGeckoConfig:
    """Configuration for CoinGecko API client."""

    base_url: str = DEFAULT_BASE_URL
    api_key: str = ""
    user_agent: str = DEFAULT_USER_AGENT
    vs_currency: str = "usd"
    http_config: HttpClientConfig = None

    def __post_init__(self):
        """Set defaults for nested configs."""
        if self.http_config is None:
            object.__setattr__(self, "http_config", HttpClientConfig())
