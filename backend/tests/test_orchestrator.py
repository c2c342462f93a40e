from __future__ import annotations

import asyncio
import itertools
from typing import Optional

import pytest

from app.schemas.market import AssetClass
from app.services.data_ingestion.interface import ProviderAdapter, ProviderSuccess
from app.services.data_ingestion.orchestrator import FallbackOrchestrator, build_default_registry
from app.services.data_ingestion.synthetic import SYNTHETIC_SOURCE, generate_synthetic


class CountingSynthetic:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, symbol: str, asset_class: Optional[AssetClass]):
        self.calls += 1
        return generate_synthetic(symbol, asset_class)


@pytest.mark.parametrize("outcomes", list(itertools.product([True, False], repeat=3)))
def test_first_success_short_circuits(outcomes: tuple[bool, bool, bool], fake_adapter) -> None:
    adapters = [fake_adapter(f"P{i}", succeed=ok) for i, ok in enumerate(outcomes)]
    synthetic = CountingSynthetic()
    orchestrator = FallbackOrchestrator({AssetClass.STOCK: adapters}, synthetic=synthetic)

    ingredients = asyncio.run(orchestrator.acquire("AAPL", "1H", AssetClass.STOCK))

    winner = next((i for i, ok in enumerate(outcomes) if ok), None)
    for i, adapter in enumerate(adapters):
        expected_calls = 1 if winner is None or i <= winner else 0
        assert adapter.calls == expected_calls

    if winner is None:
        assert synthetic.calls == 1
        assert ingredients.source == SYNTHETIC_SOURCE
    else:
        assert synthetic.calls == 0
        assert ingredients.source == f"P{winner}"


def test_empty_provider_list_goes_straight_to_synthetic() -> None:
    synthetic = CountingSynthetic()
    orchestrator = FallbackOrchestrator({AssetClass.COMMODITY: []}, synthetic=synthetic)

    ingredients = asyncio.run(orchestrator.acquire("XAGOIL", "1D", AssetClass.COMMODITY))

    assert synthetic.calls == 1
    assert ingredients.quote.price == 2045.3


class RaisingAdapter(ProviderAdapter):
    """Raises something try_fetch does not translate."""

    @property
    def name(self) -> str:
        return "Raiser"

    async def fetch(self, symbol: str, timeframe: str, credential: Optional[str] = None) -> ProviderSuccess:
        raise RuntimeError("boom")


class SlowAdapter(ProviderAdapter):
    @property
    def name(self) -> str:
        return "Slow"

    async def fetch(self, symbol: str, timeframe: str, credential: Optional[str] = None) -> ProviderSuccess:
        await asyncio.sleep(5)
        raise AssertionError("should have timed out")


def test_exceptions_and_timeouts_advance_to_next_provider(fake_adapter) -> None:
    backup = fake_adapter("Backup")
    orchestrator = FallbackOrchestrator(
        {AssetClass.FOREX: [RaisingAdapter(), SlowAdapter(), backup]},
        timeout=0.05,
    )

    ingredients = asyncio.run(orchestrator.acquire("EURUSD", "1H", AssetClass.FOREX))

    assert ingredients.source == "Backup"
    assert backup.calls == 1


class CredentialRecorder(ProviderAdapter):
    credential_key = "twelvedata"

    def __init__(self) -> None:
        self.seen: list[Optional[str]] = []

    @property
    def name(self) -> str:
        return "Recorder"

    async def fetch(self, symbol: str, timeframe: str, credential: Optional[str] = None) -> ProviderSuccess:
        self.seen.append(credential)
        raise RuntimeError("stop")


def test_credentials_are_resolved_per_provider() -> None:
    recorder = CredentialRecorder()
    orchestrator = FallbackOrchestrator({AssetClass.FOREX: [recorder]})

    asyncio.run(orchestrator.acquire("EURUSD", "1H", AssetClass.FOREX, {"twelvedata": "secret"}))
    asyncio.run(orchestrator.acquire("EURUSD", "1H", AssetClass.FOREX, {"fixer": "other"}))

    assert recorder.seen == ["secret", "demo"]


def test_default_registry_order() -> None:
    orchestrator = FallbackOrchestrator(build_default_registry())

    assert orchestrator.describe() == {
        "crypto": ["Binance (Real-time)"],
        "forex": ["Twelve Data", "Fixer.io", "Exchange Rate API (Free)"],
        "commodity": ["Metals API"],
        "stock": ["Yahoo Finance", "Alpha Vantage"],
    }
