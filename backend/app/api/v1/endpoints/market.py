"""
Market Data API Endpoints

Endpoints for fetching market snapshots.
"""

from fastapi import APIRouter

from app.schemas.market import MarketDataRequest, MarketSnapshot
from app.services.data_ingestion.classifier import classify_asset_class
from app.services.snapshot import get_market_snapshot_service

router = APIRouter()


@router.post("/data", response_model=MarketSnapshot, response_model_by_alias=True)
async def get_market_data(request: MarketDataRequest):
    """
    Fetch a market snapshot with technical indicators.

    Providers are tried in order for the symbol's asset class; if all fail,
    demo data is returned (source = "Demo Data").
    """
    service = get_market_snapshot_service()
    return await service.execute(request)


@router.get("/classify/{symbol}")
async def classify_symbol(symbol: str):
    """Asset class the symbol routes to."""
    symbol = symbol.upper().strip()
    return {"symbol": symbol, "assetClass": classify_asset_class(symbol).value}


@router.get("/providers")
async def list_providers():
    """Provider trial order per asset class."""
    service = get_market_snapshot_service()
    return service.orchestrator.describe()
