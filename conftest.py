"""
Shared test fixtures: deterministic clock and sleeper, a scripted
market-data port, and a recording HTTP client.
"""

import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

# Ensure src on path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from cryptomap.infrastructure.ports.system import IClock, ISleeper  # noqa: E402
from cryptomap.ingestion.ports.http import HttpResponse  # noqa: E402
from cryptomap.shared.models.prices import PricePoint  # noqa: E402

T0 = datetime(2026, 1, 18, 12, 0, tzinfo=UTC)


class FakeClock(IClock):
    def __init__(self, start: datetime = T0):
        self.now = start

    def utcnow(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeSleeper(ISleeper):
    """Records requested delays and moves the fake clock instead of waiting."""

    def __init__(self, clock: FakeClock | None = None):
        self.clock = clock
        self.delays: list[float] = []

    async def sleep(self, seconds: float) -> None:
        self.delays.append(seconds)
        if self.clock is not None:
            self.clock.advance(seconds=seconds)


class ScriptedPriceClient:
    """
    PriceHistoryPort fake. Each call consumes the next scripted outcome:
    an exception instance is raised, anything else is returned.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls: list[tuple[str, object]] = []
        self.closed = False

    def script(self, *outcomes) -> None:
        self.outcomes.extend(outcomes)

    async def fetch_price_history(self, coin_id, timeframe):
        self.calls.append((coin_id, timeframe))
        if not self.outcomes:
            raise AssertionError(f"unexpected fetch for {coin_id} {timeframe}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True


class RecordingHttpClient:
    """IHttpClient fake returning queued responses and recording requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[dict] = []
        self.closed = False

    async def get(self, url, params=None, headers=None, timeout=None):
        self.requests.append(
            {"url": url, "params": params, "headers": headers, "timeout": timeout}
        )
        outcome = self.responses.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True


def make_points(*prices: float, start: datetime = T0, step_minutes: int = 60):
    return [
        PricePoint(timestamp=start + timedelta(minutes=i * step_minutes), price=p)
        for i, p in enumerate(prices)
    ]


def json_response(body, status: int = 200, headers: dict | None = None) -> HttpResponse:
    return HttpResponse(status_code=status, body=body, headers=headers or {}, url="")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeper(clock):
    return FakeSleeper(clock)
