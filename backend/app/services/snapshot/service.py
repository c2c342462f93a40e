"""
Market Snapshot Service Implementation

Request -> asset class -> provider fallback -> indicators + heuristics -> snapshot.
"""

import logging
from typing import Optional

from app.schemas.market import MarketDataRequest, MarketSnapshot
from app.services.base import BaseService
from app.services.data_ingestion.classifier import classify_asset_class
from app.services.data_ingestion.orchestrator import FallbackOrchestrator, get_orchestrator
from app.services.indicators.service import IndicatorService, get_indicator_service
from app.services.snapshot.assembler import assemble_snapshot

logger = logging.getLogger(__name__)


class MarketSnapshotService(BaseService[MarketDataRequest, MarketSnapshot]):
    """
    Market Snapshot Service.

    Always returns a complete snapshot: provider problems are absorbed by the
    orchestrator and indicator math never raises.
    """

    def __init__(
        self,
        orchestrator: Optional[FallbackOrchestrator] = None,
        indicator_service: Optional[IndicatorService] = None,
    ):
        self._orchestrator = orchestrator or get_orchestrator()
        self._indicators = indicator_service or get_indicator_service()

    @property
    def name(self) -> str:
        return "MarketSnapshotService"

    @property
    def orchestrator(self) -> FallbackOrchestrator:
        return self._orchestrator

    async def execute(self, input_data: MarketDataRequest) -> MarketSnapshot:
        """Fetch, analyse and assemble a snapshot for one symbol."""
        asset_class = classify_asset_class(input_data.symbol)
        logger.info(f"Snapshot request: {input_data.symbol} [{asset_class.value}] {input_data.timeframe}")

        ingredients = await self._orchestrator.acquire(
            symbol=input_data.symbol,
            timeframe=input_data.timeframe,
            asset_class=asset_class,
            credentials=input_data.api_keys,
        )

        return assemble_snapshot(input_data.symbol, ingredients, self._indicators)

    async def health_check(self) -> bool:
        """Always healthy: the synthetic fallback guarantees an answer."""
        return True


# Singleton instance
_service_instance: Optional[MarketSnapshotService] = None


def get_market_snapshot_service() -> MarketSnapshotService:
    """Get or create market snapshot service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = MarketSnapshotService()
    return _service_instance
