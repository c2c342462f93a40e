"""
CONTRACT 1: Market Data Layer

Input: MarketDataRequest
Output: MarketSnapshot

Providers return wildly different payloads (newest-first value lists,
timestamp-keyed maps, kline arrays, single spot rates). Everything is
normalized into OHLCVSeries + LatestQuote before the indicator engine sees it.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.schemas.indicators import IndicatorSet, SupportResistance


# =============================================================================
# ENUMS
# =============================================================================


class Timeframe(str, Enum):
    M1 = "1M"
    M5 = "5M"
    M15 = "15M"
    H1 = "1H"
    H4 = "4H"
    D1 = "1D"
    W1 = "1W"


class AssetClass(str, Enum):
    CRYPTO = "crypto"
    FOREX = "forex"
    COMMODITY = "commodity"
    STOCK = "stock"


# =============================================================================
# INPUT: MarketDataRequest
# =============================================================================


class MarketDataRequest(BaseModel):
    """
    Request for a market snapshot.
    Sent by: Frontend
    Received by: MarketSnapshotService

    The timeframe is kept as a raw code: adapters map unknown codes to
    their hourly granularity instead of rejecting the request.
    """

    model_config = ConfigDict(populate_by_name=True)

    symbol: str = Field(..., min_length=1, description="Ticker symbol (e.g., 'BTCUSD', 'EURUSD', 'AAPL')")
    timeframe: Optional[str] = Field(default=Timeframe.H1.value, description="One of 1M, 5M, 15M, 1H, 4H, 1D, 1W")
    api_keys: Optional[dict[str, Optional[str]]] = Field(
        default_factory=dict,
        alias="apiKeys",
        description="Provider name -> credential (twelvedata, fixer, metals, alphavantage)",
    )

    @field_validator("symbol")
    @classmethod
    def _normalize_symbol(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("symbol must not be blank")
        return value

    @field_validator("timeframe", mode="before")
    @classmethod
    def _normalize_timeframe(cls, value: Optional[str]) -> str:
        # null is treated as absent
        if value is None:
            return Timeframe.H1.value
        if not isinstance(value, str):
            return value
        return value.strip().upper() or Timeframe.H1.value

    @field_validator("api_keys", mode="before")
    @classmethod
    def _drop_empty_keys(cls, value: Optional[dict]) -> dict:
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value
        return {name: key for name, key in value.items() if key is not None}


# =============================================================================
# CANONICAL SERIES + QUOTE
# =============================================================================


class OHLCVSeries(BaseModel):
    """
    Canonical price series, oldest bar first.

    volumes is either empty (provider has no volume data) or aligned
    with closes.
    """

    model_config = ConfigDict(frozen=True)

    closes: tuple[float, ...]
    highs: tuple[float, ...]
    lows: tuple[float, ...]
    volumes: tuple[float, ...] = ()

    @model_validator(mode="after")
    def _check_alignment(self) -> "OHLCVSeries":
        if len(self.closes) < 1:
            raise ValueError("series must contain at least one bar")
        if len(self.highs) != len(self.closes) or len(self.lows) != len(self.closes):
            raise ValueError("closes, highs and lows must have the same length")
        if self.volumes and len(self.volumes) != len(self.closes):
            raise ValueError("volumes must be empty or aligned with closes")
        return self

    def __len__(self) -> int:
        return len(self.closes)

    @property
    def last_close(self) -> float:
        return self.closes[-1]

    @property
    def has_volume(self) -> bool:
        return len(self.volumes) > 0

    @classmethod
    def flat(cls, price: float, length: int) -> "OHLCVSeries":
        """Series of identical bars, used when only a spot value is known."""
        bars = (float(price),) * length
        return cls(closes=bars, highs=bars, lows=bars)


class LatestQuote(BaseModel):
    """Provider-native quote fields not expressible in a bare series."""

    price: float
    change: float = 0.0
    change_percent: float = 0.0
    volume: float = 0.0
    high_24h: float
    low_24h: float
    bid: float
    ask: float
    last_update: str = Field(..., description="ISO-8601 timestamp")


# =============================================================================
# OUTPUT: MarketSnapshot (Complete Response)
# =============================================================================


class MarketSnapshot(BaseModel):
    """
    Complete market snapshot.
    Returned by: MarketSnapshotService
    Consumed by: Frontend
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "symbol": "BTCUSD",
                "source": "Binance (Real-time)",
                "price": 64250.5,
                "change": 812.3,
                "changePercent": 1.28,
                "volume": 23145.2,
                "high24h": 64800.0,
                "low24h": 63010.0,
                "bid": 64250.4,
                "ask": 64250.6,
                "lastUpdate": "2024-02-04T10:30:00+00:00",
                "patterns": ["Uptrend"],
                "historicalData": [64010.0, 64120.2, 64250.5],
            }
        },
    )

    symbol: str
    source: str = Field(..., description="Provider or synthetic path that supplied the data")
    price: float
    change: float
    change_percent: float = Field(..., alias="changePercent")
    volume: float
    high_24h: float = Field(..., alias="high24h")
    low_24h: float = Field(..., alias="low24h")
    bid: float
    ask: float
    last_update: str = Field(..., alias="lastUpdate")
    indicators: IndicatorSet
    patterns: list[str]
    support_resistance: SupportResistance = Field(..., alias="supportResistance")
    historical_data: list[float] = Field(..., alias="historicalData")
    note: Optional[str] = None
