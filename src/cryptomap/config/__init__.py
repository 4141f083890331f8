"""
Configuration exports for cryptomap.

Import from here rather than from the submodules:
    - ConfigState / ConfigLoader / get_config: YAML + environment settings
"""

from .state import (
    CacheSettings,
    CoinGeckoSettings,
    ConfigLoader,
    ConfigState,
    LoggingSettings,
    RetrySettings,
    get_config,
)

__all__ = [
    "CacheSettings",
    "CoinGeckoSettings",
    "ConfigLoader",
    "ConfigState",
    "LoggingSettings",
    "RetrySettings",
    "get_config",
]
