"""
CoinGecko Response Validator

Validates API response structure to ensure schema compliance before mapping.
"""

from numbers import Real
from typing import Any

from cryptomap.ingestion.ports.validators import IResponseValidator, ValidationResult

MARKET_CHART = "market_chart"
COINS_MARKETS = "coins/markets"


class CoinGeckoResponseValidator(IResponseValidator):
    """Validates CoinGecko API response structures."""

    def validate(self, endpoint: str, data: Any) -> ValidationResult:
        """Dispatch validation based on endpoint."""
        if endpoint == MARKET_CHART:
            return self._validate_market_chart(data)
        if endpoint == COINS_MARKETS:
            return self._validate_markets(data)
        return ValidationResult(is_valid=True)

    def _validate_market_chart(self, data: Any) -> ValidationResult:
        """
        Validate market_chart response structure.

        Expected format:
        {
            "prices": [[epoch_ms, price], ...],
            "market_caps": [...],
            "total_volumes": [...]
        }

        An empty "prices" list is structurally valid; the client decides
        what an empty series means.
        """
        if not isinstance(data, dict):
            return ValidationResult(
                is_valid=False,
                error_message=f"Response must be an object, got {type(data).__name__}",
                error_code="INVALID_STRUCTURE",
            )

        if "prices" not in data:
            return ValidationResult(
                is_valid=False,
                error_message="Missing 'prices' field in response",
                error_code="MISSING_PRICES_FIELD",
            )

        prices = data["prices"]
        if not isinstance(prices, list):
            return ValidationResult(
                is_valid=False,
                error_message=f"'prices' must be an array, got {type(prices).__name__}",
                error_code="INVALID_PRICES_TYPE",
            )

        for idx, pair in enumerate(prices):
            if not _is_number_pair(pair):
                return ValidationResult(
                    is_valid=False,
                    error_message=f"prices[{idx}] is not a [timestamp, price] pair: {pair!r}",
                    error_code="INVALID_PRICE_PAIR",
                )

        return ValidationResult(is_valid=True)

    def _validate_markets(self, data: Any) -> ValidationResult:
        if not isinstance(data, list):
            return ValidationResult(
                is_valid=False,
                error_message=f"Response must be an array, got {type(data).__name__}",
                error_code="INVALID_STRUCTURE",
            )

        for idx, item in enumerate(data):
            if not isinstance(item, dict):
                return ValidationResult(
                    is_valid=False,
                    error_message=f"Item {idx} must be an object, got {type(item).__name__}",
                    error_code="INVALID_ITEM",
                )

        return ValidationResult(is_valid=True)


def _is_number_pair(pair: Any) -> bool:
    # bool is a Real subclass; a JSON true/false is not a price
    return (
        isinstance(pair, list)
        and len(pair) >= 2
        and all(isinstance(v, Real) and not isinstance(v, bool) for v in pair[:2])
    )
