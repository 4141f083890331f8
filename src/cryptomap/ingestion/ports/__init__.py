"""Ports for the ingestion layer."""

from .http import HttpResponse, IApiKeyProvider, IHttpClient  # noqa: F401
from .market_data import PriceHistoryPort  # noqa: F401
from .validators import (  # noqa: F401
    IErrorMapper,
    IResponseValidator,
    ValidationResult,
)

__all__ = [
    "IHttpClient",
    "IApiKeyProvider",
    "HttpResponse",
    "IResponseValidator",
    "IErrorMapper",
    "ValidationResult",
    "PriceHistoryPort",
]
