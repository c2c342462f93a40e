"""
Data Ingestion Service

CONTRACT:
    Input:  symbol, timeframe, asset class, credentials
    Output: SnapshotIngredients

RESPONSIBILITIES:
    - Classify symbols into asset classes
    - Try the asset class's providers in order (Binance, Twelve Data, Fixer,
      ExchangeRate-API, Metals-API, Yahoo Finance, Alpha Vantage)
    - Normalize every provider into an oldest-first OHLCVSeries + LatestQuote
    - Fall back to deterministic synthetic data when all providers fail

NO INDICATOR MATH - Pure data fetching and transformation.
"""

from app.services.data_ingestion.interface import (
    ProviderAdapter,
    HTTPProviderAdapter,
    ProviderSuccess,
    ProviderFailure,
    ProviderResult,
    SnapshotIngredients,
)
from app.services.data_ingestion.classifier import classify_asset_class
from app.services.data_ingestion.synthetic import generate_synthetic
from app.services.data_ingestion.orchestrator import (
    FallbackOrchestrator,
    build_default_registry,
    get_orchestrator,
)

__all__ = [
    "ProviderAdapter",
    "HTTPProviderAdapter",
    "ProviderSuccess",
    "ProviderFailure",
    "ProviderResult",
    "SnapshotIngredients",
    "classify_asset_class",
    "generate_synthetic",
    "FallbackOrchestrator",
    "build_default_registry",
    "get_orchestrator",
]
