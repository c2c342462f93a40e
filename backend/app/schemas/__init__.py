"""
Market Snapshot Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from app.schemas.indicators import (
    IndicatorSet,
    MACDData,
    BollingerBandsData,
    StochasticData,
    VolumeProfile,
    VolumeTrend,
    SupportResistance,
)
from app.schemas.market import (
    AssetClass,
    Timeframe,
    MarketDataRequest,
    OHLCVSeries,
    LatestQuote,
    MarketSnapshot,
)

__all__ = [
    # Indicators
    "IndicatorSet",
    "MACDData",
    "BollingerBandsData",
    "StochasticData",
    "VolumeProfile",
    "VolumeTrend",
    "SupportResistance",
    # Market
    "AssetClass",
    "Timeframe",
    "MarketDataRequest",
    "OHLCVSeries",
    "LatestQuote",
    "MarketSnapshot",
]
