# cryptomap/shared/models/markets.py

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CoinMarket(BaseModel):
    """
    One row of the top-coins market listing (heatmap tile data).

    Only the identifiers are required; every market figure may be missing
    from the upstream payload and is kept as None.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # ========== IDENTIFIERS (Required) ==========
    id: str
    symbol: str
    name: str

    # ========== DISPLAY (Optional) ==========
    image: str | None = Field(default=None)

    # ========== MARKET FIGURES (Optional) ==========
    current_price: float | None = Field(default=None)
    market_cap: float | None = Field(default=None)
    market_cap_rank: int | None = Field(default=None)
    total_volume_24h: float | None = Field(default=None)

    price_change_percentage_24h: float | None = Field(default=None)
    price_change_percentage_7d: float | None = Field(default=None)
    price_change_percentage_30d: float | None = Field(default=None)
    price_change_percentage_1y: float | None = Field(default=None)

    # ========== SUPPLY (Optional) ==========
    circulating_supply: float | None = Field(default=None)
    total_supply: float | None = Field(default=None)

    last_updated: datetime | None = Field(default=None)

    @field_validator("id", "symbol", "name", mode="before")
    @classmethod
    def default_blank(cls, v):
        """Upstream occasionally sends null identifiers; keep them as ''."""
        return "" if v is None else v

    def matches(self, query: str) -> bool:
        """Case-insensitive match against name or symbol."""
        needle = query.casefold()
        return needle in self.name.casefold() or needle in self.symbol.casefold()
