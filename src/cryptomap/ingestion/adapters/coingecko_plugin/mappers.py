"""Map validated CoinGecko payloads to domain models."""

from typing import Any

from cryptomap.common.utils.date_utils import from_unix_ms, parse_iso8601
from cryptomap.shared.models.markets import CoinMarket
from cryptomap.shared.models.prices import PricePoint


def map_price_points(payload: dict[str, Any]) -> list[PricePoint]:
    """Convert `prices` pairs to PricePoints, preserving API order."""
    return [
        PricePoint(timestamp=from_unix_ms(pair[0]), price=float(pair[1]))
        for pair in payload["prices"]
    ]


def map_coin_market(item: dict[str, Any]) -> CoinMarket:
    """Convert one /coins/markets row; period changes prefer *_in_currency keys."""

    def change(period: str) -> Any:
        key = f"price_change_percentage_{period}"
        value = item.get(f"{key}_in_currency")
        return value if value is not None else item.get(key)

    return CoinMarket(
        id=item.get("id"),
        symbol=item.get("symbol"),
        name=item.get("name"),
        image=item.get("image"),
        current_price=item.get("current_price"),
        market_cap=item.get("market_cap"),
        market_cap_rank=item.get("market_cap_rank"),
        total_volume_24h=item.get("total_volume"),
        price_change_percentage_24h=item.get("price_change_percentage_24h"),
        price_change_percentage_7d=change("7d"),
        price_change_percentage_30d=change("30d"),
        price_change_percentage_1y=change("1y"),
        circulating_supply=item.get("circulating_supply"),
        total_supply=item.get("total_supply"),
        last_updated=parse_iso8601(item.get("last_updated")),
    )
