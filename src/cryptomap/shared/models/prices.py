# cryptomap/shared/models/prices.py

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from cryptomap.shared.models.enums import Timeframe


@dataclass(frozen=True)
class PricePoint:
    """Single USD price observation."""

    timestamp: datetime
    price: float


@dataclass(frozen=True)
class CacheKey:
    """Identity of a cached price series: one entry per coin and timeframe."""

    coin_id: str
    timeframe: Timeframe

    def __str__(self) -> str:
        return f"{self.coin_id}-{self.timeframe.value}"


@dataclass(frozen=True)
class CacheEntry:
    """
    Points fetched for one CacheKey and the moment they were fetched.

    Freshness is not stored here: it is a property of the key's timeframe.
    """

    points: tuple[PricePoint, ...]
    fetched_at: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))
        if not self.points:
            raise ValueError("CacheEntry requires at least one price point")

    def age(self, now: datetime) -> timedelta:
        return now - self.fetched_at


@dataclass(frozen=True)
class PriceSeries:
    """Points currently displayed plus statistics derived from them."""

    points: tuple[PricePoint, ...] = field(default_factory=tuple)
    min: float = 0.0
    max: float = 0.0
    avg: float = 0.0

    @classmethod
    def empty(cls) -> PriceSeries:
        return cls()

    @classmethod
    def from_points(cls, points: Iterable[PricePoint]) -> PriceSeries:
        """Build a series and its min/max/avg; empty input yields zeros."""
        points = tuple(points)
        if not points:
            return cls()

        prices = [point.price for point in points]
        return cls(
            points=points,
            min=min(prices),
            max=max(prices),
            avg=sum(prices) / len(prices),
        )

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def y_axis_range(self) -> tuple[float, float]:
        """Chart range padded by 10% of the spread, (0, 1) when empty."""
        if not self.points:
            return (0.0, 1.0)
        padding = (self.max - self.min) * 0.1
        return (self.min - padding, self.max + padding)

    @property
    def timestamps(self) -> Sequence[datetime]:
        return [point.timestamp for point in self.points]
