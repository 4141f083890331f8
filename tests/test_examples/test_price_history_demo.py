"""The demo runs end to end against a scripted market-data port."""

import pytest

from conftest import ScriptedPriceClient, make_points
from cryptomap.config import ConfigState
from cryptomap.examples import price_history_demo
from cryptomap.shared.models import Timeframe


@pytest.mark.asyncio
async def test_demo_fetches_every_timeframe_then_hits_cache(monkeypatch):
    client = ScriptedPriceClient(*(make_points(1.0, 2.0) for _ in Timeframe))
    monkeypatch.setattr(price_history_demo, "get_config", lambda: ConfigState())
    monkeypatch.setattr(price_history_demo, "setup_logging", lambda **kwargs: None)
    monkeypatch.setattr(
        price_history_demo,
        "create_coingecko_client_from_settings",
        lambda settings: client,
    )

    await price_history_demo.demo_price_history("bitcoin")

    # four fetches; the repeated 24h request is served from cache
    assert [timeframe for _, timeframe in client.calls] == list(Timeframe)
    assert client.closed is True
