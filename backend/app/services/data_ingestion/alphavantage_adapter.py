"""
Alpha Vantage Adapter

Stock time series from Alpha Vantage. The series arrives as a map keyed by
timestamp string; keys sort chronologically, so sorting gives oldest-first.

Free-tier throttling is reported in-band ("Note"/"Information") with HTTP 200.
"""

import logging
from typing import Optional

from app.core.config import settings
from app.schemas.market import LatestQuote, OHLCVSeries, Timeframe
from app.services.base import ExternalAPIError, RateLimitError
from app.services.data_ingestion.interface import (
    HTTPProviderAdapter,
    ProviderSuccess,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

STOCK_SPREAD = 0.01
RANGE_BARS = 24

TIMEFRAME_MAP = {
    Timeframe.M1: "1min",
    Timeframe.M5: "5min",
    Timeframe.M15: "15min",
    Timeframe.H1: "60min",
    Timeframe.H4: "60min",
    Timeframe.D1: "daily",
    Timeframe.W1: "weekly",
}

# Non-intraday intervals use dedicated functions
FUNCTION_MAP = {
    "daily": "TIME_SERIES_DAILY",
    "weekly": "TIME_SERIES_WEEKLY",
}


class AlphaVantageAdapter(HTTPProviderAdapter):
    credential_key = "alphavantage"
    timeframe_map = TIMEFRAME_MAP
    default_interval = "60min"

    @property
    def name(self) -> str:
        return "Alpha Vantage"

    def _build_params(self, symbol: str, interval: str, credential: str) -> dict:
        params = {
            "function": FUNCTION_MAP.get(interval, "TIME_SERIES_INTRADAY"),
            "symbol": symbol,
            "apikey": credential,
        }
        if interval not in FUNCTION_MAP:
            params["interval"] = interval
        return params

    async def fetch(
        self, symbol: str, timeframe: str, credential: Optional[str] = None
    ) -> ProviderSuccess:
        interval = self.resolve_interval(timeframe)

        async with self._new_session() as session:
            data = await self._get_json(
                session,
                f"{settings.alphavantage_base_url}/query",
                self._build_params(symbol, interval, credential or settings.default_api_key),
            )

        if "Error Message" in data:
            raise ExternalAPIError(self.name, data["Error Message"])
        for key in ("Note", "Information"):
            if key in data:
                raise RateLimitError(self.name, data[key])

        series_key = next((k for k in data if "Time Series" in k), None)
        bars = data.get(series_key) if series_key else None
        if not bars:
            raise ExternalAPIError(self.name, f"no time series for {symbol}")

        timestamps = sorted(bars)
        closes = [float(bars[t]["4. close"]) for t in timestamps]
        highs = [float(bars[t]["2. high"]) for t in timestamps]
        lows = [float(bars[t]["3. low"]) for t in timestamps]
        volumes = [float(bars[t].get("5. volume", 0)) for t in timestamps]

        series = OHLCVSeries(closes=closes, highs=highs, lows=lows, volumes=volumes)

        current = closes[-1]
        previous = closes[-2] if len(closes) > 1 else current
        change = current - previous

        quote = LatestQuote(
            price=current,
            change=change,
            change_percent=round(change / previous * 100, 2) if previous else 0.0,
            volume=volumes[-1],
            high_24h=max(highs[-RANGE_BARS:]),
            low_24h=min(lows[-RANGE_BARS:]),
            bid=current - STOCK_SPREAD,
            ask=current + STOCK_SPREAD,
            last_update=utc_now_iso(),
        )

        logger.info(f"Alpha Vantage: {symbol} @ {current} ({len(closes)} bars)")
        return ProviderSuccess(provider=self.name, series=series, quote=quote)
