from __future__ import annotations

from typing import Optional

import pytest

from app.schemas.market import LatestQuote, OHLCVSeries
from app.services.base import ExternalAPIError
from app.services.data_ingestion.interface import ProviderAdapter, ProviderSuccess


def series_from_closes(closes: list[float], volumes: Optional[list[float]] = None) -> OHLCVSeries:
    return OHLCVSeries(
        closes=closes,
        highs=[c + 1 for c in closes],
        lows=[c - 1 for c in closes],
        volumes=volumes or [],
    )


class FakeAdapter(ProviderAdapter):
    """Adapter with a scripted outcome and a call counter."""

    def __init__(self, label: str, succeed: bool = True, closes: Optional[list[float]] = None) -> None:
        self._label = label
        self.succeed = succeed
        self.closes = closes or [100.0, 101.0, 102.0, 103.0, 104.0, 105.0]
        self.calls = 0

    @property
    def name(self) -> str:
        return self._label

    async def fetch(self, symbol: str, timeframe: str, credential: Optional[str] = None) -> ProviderSuccess:
        self.calls += 1
        if not self.succeed:
            raise ExternalAPIError(self._label, "scripted failure")
        series = series_from_closes(self.closes)
        quote = LatestQuote(
            price=series.last_close,
            high_24h=max(series.highs),
            low_24h=min(series.lows),
            bid=series.last_close - 0.01,
            ask=series.last_close + 0.01,
            last_update="2024-01-01T00:00:00+00:00",
        )
        return ProviderSuccess(provider=self._label, series=series, quote=quote)


@pytest.fixture
def make_series():
    return series_from_closes


@pytest.fixture
def fake_adapter():
    return FakeAdapter
