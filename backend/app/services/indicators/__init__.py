"""
Indicator Engine Service

CONTRACT:
    Input:  OHLCVSeries
    Output: IndicatorSet

RESPONSIBILITIES:
    - Momentum: RSI, MACD, Stochastic
    - Trend: EMA 20/50/200, SMA 20/50, ADX proxy
    - Volatility: ATR, Bollinger Bands
    - Volume: volume profile vs. 20-bar average

PURE PYTHON - No I/O.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from app.services.indicators.interface import IndicatorServiceInterface
from app.services.indicators.service import IndicatorService, get_indicator_service

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
]
