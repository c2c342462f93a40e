"""
Twelve Data Adapter

Intraday forex time series. Values are returned newest-first and are
reversed into the canonical oldest-first order here.
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
from app.services.data_ingestion.spot import FOREX_SPREAD, split_pair

logger = logging.getLogger(__name__)

RANGE_BARS = 24  # Bars used for high24h / low24h

TIMEFRAME_MAP = {
    Timeframe.M1: "1min",
    Timeframe.M5: "5min",
    Timeframe.M15: "15min",
    Timeframe.H1: "1h",
    Timeframe.H4: "4h",
    Timeframe.D1: "1day",
    Timeframe.W1: "1week",
}


class TwelveDataAdapter(HTTPProviderAdapter):
    """Full OHLC(V) series for currency pairs."""

    credential_key = "twelvedata"
    timeframe_map = TIMEFRAME_MAP
    default_interval = "1h"

    @property
    def name(self) -> str:
        return "Twelve Data"

    async def fetch(
        self, symbol: str, timeframe: str, credential: Optional[str] = None
    ) -> ProviderSuccess:
        base_ccy, quote_ccy = split_pair(symbol)
        pair = f"{base_ccy}/{quote_ccy}"

        async with self._new_session() as session:
            data = await self._get_json(
                session,
                f"{settings.twelvedata_base_url}/time_series",
                {
                    "symbol": pair,
                    "interval": self.resolve_interval(timeframe),
                    "outputsize": settings.twelvedata_outputsize,
                    "apikey": credential or settings.default_api_key,
                },
            )

        if data.get("status") == "error":
            message = data.get("message", "unknown error")
            if data.get("code") == 429:
                raise RateLimitError(self.name, message)
            raise ExternalAPIError(self.name, message)

        values = data.get("values") or []
        if not values:
            raise ExternalAPIError(self.name, f"no values for {pair}")

        # Newest-first upstream -> oldest-first canonical
        values = list(reversed(values))
        closes = [float(v["close"]) for v in values]
        highs = [float(v["high"]) for v in values]
        lows = [float(v["low"]) for v in values]

        has_volume = any(v.get("volume") not in (None, "") for v in values)
        volumes = [float(v.get("volume") or 0) for v in values] if has_volume else []

        series = OHLCVSeries(closes=closes, highs=highs, lows=lows, volumes=volumes)

        current = closes[-1]
        previous = closes[-2] if len(closes) > 1 else current
        change = current - previous
        change_pct = round(change / previous * 100, 2) if previous else 0.0

        quote = LatestQuote(
            price=current,
            change=change,
            change_percent=change_pct,
            volume=volumes[-1] if volumes else 0.0,
            high_24h=max(highs[-RANGE_BARS:]),
            low_24h=min(lows[-RANGE_BARS:]),
            bid=current - FOREX_SPREAD,
            ask=current + FOREX_SPREAD,
            last_update=utc_now_iso(),
        )

        logger.info(f"Twelve Data: {pair} @ {current} ({len(closes)} bars)")
        return ProviderSuccess(provider=self.name, series=series, quote=quote)
