"""
Yahoo Finance Data Adapter

Fetches stock market data from Yahoo Finance via yfinance.
yfinance is blocking, so calls run in a worker thread.
"""

import asyncio
import logging
import math
from typing import Optional

import yfinance as yf

from app.schemas.market import LatestQuote, OHLCVSeries, Timeframe
from app.services.base import ExternalAPIError
from app.services.data_ingestion.interface import (
    ProviderAdapter,
    ProviderSuccess,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

STOCK_SPREAD = 0.01
RANGE_BARS = 24

# Timeframe mapping for yfinance (no native 4h interval)
TIMEFRAME_MAP = {
    Timeframe.M1: "1m",
    Timeframe.M5: "5m",
    Timeframe.M15: "15m",
    Timeframe.H1: "1h",
    Timeframe.H4: "1h",
    Timeframe.D1: "1d",
    Timeframe.W1: "1wk",
}

# Longest period Yahoo serves for each interval, capped at one month
# except where the interval needs more bars to be useful
PERIOD_MAP = {
    "1m": "7d",
    "5m": "1mo",
    "15m": "1mo",
    "1h": "1mo",
    "1d": "1y",
    "1wk": "5y",
}


def _clean(value) -> Optional[float]:
    """float or None for missing/NaN cells."""
    if value is None:
        return None
    value = float(value)
    return value if math.isfinite(value) else None


class YahooFinanceAdapter(ProviderAdapter):
    """Stock history + quote from Yahoo Finance."""

    timeframe_map = TIMEFRAME_MAP
    default_interval = "1h"

    @property
    def name(self) -> str:
        return "Yahoo Finance"

    def _fetch_sync(self, symbol: str, interval: str) -> tuple[OHLCVSeries, dict]:
        ticker = yf.Ticker(symbol)
        hist = ticker.history(period=PERIOD_MAP.get(interval, "1mo"), interval=interval)

        if hist is None or hist.empty:
            raise ExternalAPIError(self.name, f"no data returned for {symbol}")

        closes, highs, lows, volumes = [], [], [], []
        for _, row in hist.iterrows():
            close = _clean(row.get("Close"))
            if close is None:
                continue
            closes.append(close)
            highs.append(_clean(row.get("High")) or close)
            lows.append(_clean(row.get("Low")) or close)
            volumes.append(_clean(row.get("Volume")) or 0.0)

        if not closes:
            raise ExternalAPIError(self.name, f"only empty bars for {symbol}")

        # Live quote is optional enrichment
        info: dict = {}
        try:
            info = ticker.info or {}
        except Exception as e:
            logger.debug(f"Could not get live quote for {symbol}: {e}")

        return OHLCVSeries(closes=closes, highs=highs, lows=lows, volumes=volumes), info

    async def fetch(
        self, symbol: str, timeframe: str, credential: Optional[str] = None
    ) -> ProviderSuccess:
        interval = self.resolve_interval(timeframe)
        logger.info(f"Fetching {symbol} from Yahoo Finance ({interval})...")

        series, info = await asyncio.to_thread(self._fetch_sync, symbol, interval)

        price = _clean(info.get("regularMarketPrice")) or series.last_close
        previous_close = _clean(info.get("previousClose"))
        if previous_close is None:
            previous_close = series.closes[-2] if len(series) > 1 else price

        change = price - previous_close
        change_pct = round(change / previous_close * 100, 2) if previous_close else 0.0

        quote = LatestQuote(
            price=price,
            change=change,
            change_percent=change_pct,
            volume=series.volumes[-1] if series.has_volume else 0.0,
            high_24h=max(series.highs[-RANGE_BARS:]),
            low_24h=min(series.lows[-RANGE_BARS:]),
            bid=_clean(info.get("bid")) or price - STOCK_SPREAD,
            ask=_clean(info.get("ask")) or price + STOCK_SPREAD,
            last_update=utc_now_iso(),
        )

        return ProviderSuccess(provider=self.name, series=series, quote=quote)
