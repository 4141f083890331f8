"""
Unified configuration state management.

This module provides a single source of truth for the application
configuration, combining hierarchical YAML files with environment overrides,
type validation, and sensible defaults.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"
DEFAULT_USER_AGENT = "Mozilla/5.0"


# =============================================================================
# PYDANTIC MODELS - Type-Safe Configuration
# =============================================================================


class CoinGeckoSettings(BaseModel):
    """CoinGecko API configuration."""

    model_config = ConfigDict(extra="allow")

    base_url: str = Field(default=DEFAULT_BASE_URL)
    api_key: str = Field(default="")
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    timeout: float = Field(default=30.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("CoinGecko base_url must start with http:// or https://")
        return v.rstrip("/")


class RetrySettings(BaseModel):
    """Rate-limit retry behavior."""

    model_config = ConfigDict(extra="allow")

    max_retries: int = Field(default=3, ge=0, le=20)
    delay_seconds: float = Field(default=1.0, ge=0.0)


class CacheSettings(BaseModel):
    """In-memory price-history cache bound (None = unbounded)."""

    model_config = ConfigDict(extra="allow")

    max_entries: int | None = Field(default=256, ge=1)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="allow")

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)


class ConfigState(BaseModel):
    """
    Root configuration state - single source of truth for all app config.
    """

    model_config = ConfigDict(extra="allow")

    coingecko: CoinGeckoSettings = Field(default_factory=CoinGeckoSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Environment metadata
    env: str = Field(default="dev")
    config_dir: str = Field(default="./config")


# =============================================================================
# CONFIG LOADER - Clean, Validated Loading
# =============================================================================


class ConfigLoader:
    """
    Load and validate configuration from hierarchical YAML files.

    Merges:
      1. Global defaults (hardcoded)
      2. YAML files from config_dir
      3. Environment-specific YAML (env/<CRYPTOMAP_ENV>.yaml)
      4. Environment variable overrides
    """

    CONFIG_FILES = ("coingecko.yaml", "cache.yaml", "logging.yaml")

    def __init__(self, config_dir: str | Path = "./config"):
        self.config_dir = Path(config_dir)
        self._yaml_cache: dict[Path, Any] = {}
        self.env = os.getenv("CRYPTOMAP_ENV", "dev")

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load YAML file with caching."""
        if path in self._yaml_cache:
            return self._yaml_cache[path]

        if not path.exists():
            logger.debug(f"Config file not found (using defaults): {path}")
            return {}

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        self._yaml_cache[path] = data
        logger.debug(f"Loaded config: {path}")
        return data

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config."""
        if api_key := os.getenv("COINGECKO_API_KEY"):
            config.setdefault("coingecko", {})["api_key"] = api_key.strip()

        if base_url := os.getenv("COINGECKO_BASE_URL"):
            config.setdefault("coingecko", {})["base_url"] = base_url

        if log_level := os.getenv("LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level

        return config

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        """Deep merge override into base dict."""
        result = base.copy()
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def load(self) -> ConfigState:
        """
        Load complete configuration state.

        Returns:
            ConfigState: Validated configuration object

        Raises:
            pydantic.ValidationError: If configuration is invalid
        """
        logger.info(f"Loading configuration from {self.config_dir} (env: {self.env})")

        config: dict[str, Any] = {}

        for config_file in self.CONFIG_FILES:
            file_config = self._load_yaml(self.config_dir / config_file)
            config = self._merge_dicts(config, file_config)

        env_config = self._load_yaml(self.config_dir / "env" / f"{self.env}.yaml")
        config = self._merge_dicts(config, env_config)

        config = self._apply_env_overrides(config)

        try:
            state = ConfigState(env=self.env, config_dir=str(self.config_dir), **config)
        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

        if not state.coingecko.api_key:
            logger.warning("⚠️ No CoinGecko API key configured (COINGECKO_API_KEY)")

        logger.info(
            f"✅ Configuration loaded: base_url={state.coingecko.base_url}, "
            f"max_retries={state.retry.max_retries}, "
            f"cache_max_entries={state.cache.max_entries}"
        )
        return state


# =============================================================================
# GLOBAL INSTANCE
# =============================================================================


def get_config(config_dir: str | Path | None = None) -> ConfigState:
    """
    Load and return the configuration state.

    Args:
        config_dir: Override config directory. Defaults to
            $CRYPTOMAP_CONFIG_DIR or ./config

    Returns:
        ConfigState: Validated configuration object
    """
    if config_dir is None:
        config_dir = os.getenv("CRYPTOMAP_CONFIG_DIR", "./config")
        if not Path(config_dir).exists():
            logger.warning(f"Config directory not found at {config_dir}, using defaults")

    return ConfigLoader(config_dir=config_dir).load()
