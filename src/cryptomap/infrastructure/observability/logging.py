"""
Structured logging infrastructure for cryptomap.
Provides consistent, machine-readable logs across the price-history core.

Log Structure:
    {
        "app": "cryptomap",            # Application identifier
        "layer": "orchestration",      # Architectural layer
        "component": "price-history",  # Specific component/service
        "module": "...",               # Python module (optional)
        "coin_id": "bitcoin",          # Domain context
        "event": "cache_hit",          # What happened
        ...
    }

Architectural Layers:
    - ingestion: Market-data acquisition (CoinGecko client, HTTP connector)
    - cache: In-memory price-history cache
    - orchestration: Retrieval flow, retry and stale fallback
"""

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict

# Define valid architectural layers
Layer = Literal["ingestion", "cache", "orchestration"]

APP_NAME = "cryptomap"


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add application-wide context to every log entry.

    Every log carries the base 'app' identifier so entries can be filtered
    when aggregated with other services.
    """
    event_dict["app"] = APP_NAME
    return event_dict


def add_severity_level(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Add severity level for cloud logging compatibility.
    Maps Python log levels to standard severity levels.
    """
    level = event_dict.get("level")
    if level:
        severity_map = {
            "debug": "DEBUG",
            "info": "INFO",
            "warning": "WARNING",
            "error": "ERROR",
            "critical": "CRITICAL",
        }
        event_dict["severity"] = severity_map.get(level, "INFO")
    return event_dict


def setup_logging(
    level: str = "INFO",
    json_logs: bool = True,
    include_timestamp: bool = True,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON. If False, use human-readable format (dev mode).
        include_timestamp: Whether to include ISO timestamps in logs

    Usage:
        >>> from cryptomap.infrastructure.observability import setup_logging
        >>> setup_logging(level="DEBUG", json_logs=False)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.root.setLevel(log_level)

    processors = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        structlog.stdlib.add_log_level,
        add_severity_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: str | None = None,
    layer: Layer | None = None,
    component: str | None = None,
    **initial_context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance with architectural context.

    Args:
        name: Logger name (typically __name__ of the calling module)
        layer: Architectural layer (ingestion, cache, orchestration, ...)
        component: Specific component/service within the layer
        **initial_context: Additional context key-value pairs to bind to logger

    Usage:
        >>> log = get_logger(__name__, layer="cache", component="price-cache")
        >>> log.info("entry_stored", coin_id="bitcoin", timeframe="24h")
    """
    context = {}
    if layer:
        context["layer"] = layer
    if component:
        context["component"] = component
    if name:
        context["module"] = name
    context.update(initial_context)

    # initial values keep the proxy lazy; module-level loggers created at
    # import time still pick up the configuration from setup_logging()
    if name:
        return structlog.get_logger(name, **context)
    return structlog.get_logger(**context)


# ============================================================================
# Layer-Specific Logger Factories
# ============================================================================


def get_ingestion_logger(
    component: str,
    provider: str | None = None,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for ingestion layer (market-data acquisition).

    Args:
        component: Component name (e.g., "coingecko-client", "http-connector")
        provider: Upstream provider name (e.g., "coingecko") - optional
        **context: Additional context (coin_id, timeframe, etc.)
    """
    ctx = {}
    if provider:
        ctx["provider"] = provider
    ctx.update(context)

    return get_logger(
        "ingestion",
        layer="ingestion",
        component=component,
        **ctx,
    )


def get_cache_logger(
    component: str = "price-cache",
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """Get a logger for the in-memory cache layer."""
    return get_logger(
        "cache",
        layer="cache",
        component=component,
        **context,
    )


def get_orchestration_logger(
    component: str = "price-history",
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for the retrieval orchestration layer.

    Usage:
        >>> log = get_orchestration_logger(coin_id="bitcoin")
        >>> log.warning("rate_limited", attempt=2)
    """
    return get_logger(
        "orchestration",
        layer="orchestration",
        component=component,
        **context,
    )
