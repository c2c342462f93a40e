"""
CONTRACT 2: Indicator Engine

Input: OHLCVSeries
Output: IndicatorSet

This module only describes shapes. All math lives in
app.services.indicators.calculations.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================


class VolumeTrend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"


# =============================================================================
# OUTPUT: Indicator Components
# =============================================================================


class MACDData(BaseModel):
    """MACD indicator values."""

    model_config = ConfigDict(frozen=True)

    value: float
    signal: float
    histogram: float


class BollingerBandsData(BaseModel):
    """Bollinger Bands values."""

    model_config = ConfigDict(frozen=True)

    upper: float
    middle: float
    lower: float


class StochasticData(BaseModel):
    """Stochastic oscillator values."""

    model_config = ConfigDict(frozen=True)

    k: float = Field(..., ge=0, le=100)
    d: float


class VolumeProfile(BaseModel):
    """Current volume relative to its 20-bar average."""

    model_config = ConfigDict(frozen=True)

    current: float
    average: float
    ratio: float
    trend: VolumeTrend


# =============================================================================
# OUTPUT: IndicatorSet
# =============================================================================


class IndicatorSet(BaseModel):
    """Fixed-shape indicator bundle for one series."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rsi: float = Field(..., ge=0, le=100)
    macd: MACDData
    ema20: float
    ema50: float
    ema200: float
    sma20: float
    sma50: float
    bollinger_bands: BollingerBandsData = Field(..., alias="bollingerBands")
    atr: float
    adx: float = Field(..., ge=0, le=100)
    stochastic: StochasticData
    volume_profile: Optional[VolumeProfile] = Field(default=None, alias="volumeProfile")


class SupportResistance(BaseModel):
    """Heuristic support/resistance bands."""

    model_config = ConfigDict(frozen=True)

    support: list[float]
    resistance: list[float]
