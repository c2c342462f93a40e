"""
Provider Fallback Orchestrator

Tries the providers registered for an asset class strictly in order and
returns the first success. Failures, exceptions and timeouts are logged and
skipped; when nothing succeeds the synthetic generator supplies the data, so
acquisition as a whole never fails.

Providers are tried sequentially, never raced.
"""

import asyncio
import logging
from typing import Callable, Mapping, Optional, Sequence

from app.core.config import settings
from app.schemas.market import AssetClass
from app.services.data_ingestion.interface import (
    ProviderAdapter,
    ProviderFailure,
    ProviderResult,
    ProviderSuccess,
    SnapshotIngredients,
)
from app.services.data_ingestion.synthetic import generate_synthetic
from app.services.data_ingestion.binance_adapter import BinanceAdapter
from app.services.data_ingestion.twelvedata_adapter import TwelveDataAdapter
from app.services.data_ingestion.fixer_adapter import FixerAdapter
from app.services.data_ingestion.exchangerate_adapter import ExchangeRateAdapter
from app.services.data_ingestion.metals_adapter import MetalsAdapter
from app.services.data_ingestion.yahoo_adapter import YahooFinanceAdapter
from app.services.data_ingestion.alphavantage_adapter import AlphaVantageAdapter

logger = logging.getLogger(__name__)

SyntheticGenerator = Callable[[str, Optional[AssetClass]], SnapshotIngredients]


def build_default_registry() -> dict[AssetClass, list[ProviderAdapter]]:
    """
    Ordered provider chains per asset class.

    Priority:
    - crypto: Binance
    - forex: Twelve Data (full series) -> Fixer -> ExchangeRate-API (spot only)
    - commodity: Metals-API (spot only)
    - stock: Yahoo Finance -> Alpha Vantage
    """
    return {
        AssetClass.CRYPTO: [BinanceAdapter()],
        AssetClass.FOREX: [TwelveDataAdapter(), FixerAdapter(), ExchangeRateAdapter()],
        AssetClass.COMMODITY: [MetalsAdapter()],
        AssetClass.STOCK: [YahooFinanceAdapter(), AlphaVantageAdapter()],
    }


class FallbackOrchestrator:
    """Ordered provider trial with a synthetic terminal step."""

    def __init__(
        self,
        registry: Optional[Mapping[AssetClass, Sequence[ProviderAdapter]]] = None,
        synthetic: SyntheticGenerator = generate_synthetic,
        timeout: Optional[float] = None,
    ):
        self._registry = registry if registry is not None else build_default_registry()
        self._synthetic = synthetic
        self._timeout = timeout if timeout is not None else settings.provider_timeout_seconds

    def providers_for(self, asset_class: AssetClass) -> list[ProviderAdapter]:
        return list(self._registry.get(asset_class, ()))

    def describe(self) -> dict[str, list[str]]:
        """Provider names per asset class, in trial order."""
        return {
            asset_class.value: [adapter.name for adapter in self.providers_for(asset_class)]
            for asset_class in AssetClass
        }

    async def _attempt(
        self,
        adapter: ProviderAdapter,
        symbol: str,
        timeframe: str,
        credentials: Optional[dict[str, str]],
    ) -> ProviderResult:
        """One adapter call; never raises."""
        try:
            return await asyncio.wait_for(
                adapter.try_fetch(symbol, timeframe, adapter.resolve_credential(credentials)),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            return ProviderFailure(adapter.name, f"timed out after {self._timeout}s")
        except Exception as e:
            return ProviderFailure(adapter.name, f"unexpected error: {e!r}")

    async def acquire(
        self,
        symbol: str,
        timeframe: str,
        asset_class: AssetClass,
        credentials: Optional[dict[str, str]] = None,
    ) -> SnapshotIngredients:
        """Return ingredients from the first provider that succeeds."""
        failures: list[ProviderFailure] = []

        for adapter in self.providers_for(asset_class):
            result = await self._attempt(adapter, symbol, timeframe, credentials)

            if isinstance(result, ProviderSuccess):
                logger.info(
                    f"{result.provider}: {symbol} @ {result.quote.price} "
                    f"({len(result.series)} bars{', degraded' if result.degraded else ''})"
                )
                return SnapshotIngredients.from_success(result)

            failures.append(result)
            logger.warning(f"{result.provider} failed for {symbol}: {result.reason}")

        logger.warning(
            f"All {asset_class.value} providers failed for {symbol} "
            f"({len(failures)} tried); using synthetic data"
        )
        return self._synthetic(symbol, asset_class)


# Singleton instance
_orchestrator_instance: Optional[FallbackOrchestrator] = None


def get_orchestrator() -> FallbackOrchestrator:
    """Get or create the default orchestrator."""
    global _orchestrator_instance
    if _orchestrator_instance is None:
        _orchestrator_instance = FallbackOrchestrator()
    return _orchestrator_instance
