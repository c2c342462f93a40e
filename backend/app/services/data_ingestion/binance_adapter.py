"""
Binance Data Adapter

Public (keyless) crypto market data from the Binance REST API.
Klines are returned oldest-first, which already matches the canonical order.
"""

import logging
from typing import Any, Optional

from app.core.config import settings
from app.schemas.market import LatestQuote, OHLCVSeries, Timeframe
from app.services.base import ExternalAPIError, RateLimitError
from app.services.data_ingestion.interface import (
    HTTPProviderAdapter,
    ProviderSuccess,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

# Binance error codes that mean "slow down"
RATE_LIMIT_CODES = {-1003, -1015}

# Timeframe mapping for Binance klines
TIMEFRAME_MAP = {
    Timeframe.M1: "1m",
    Timeframe.M5: "5m",
    Timeframe.M15: "15m",
    Timeframe.H1: "1h",
    Timeframe.H4: "4h",
    Timeframe.D1: "1d",
    Timeframe.W1: "1w",
}


def get_binance_symbol(symbol: str) -> str:
    """'BTC/USD' -> 'BTCUSDT'. Trailing USD is quoted in the USDT stablecoin."""
    cleaned = symbol.upper().strip()
    for sep in ("/", "-", "_", " "):
        cleaned = cleaned.replace(sep, "")

    if cleaned.endswith("USD"):
        cleaned = f"{cleaned}T"
    return cleaned


class BinanceAdapter(HTTPProviderAdapter):
    """24h ticker + current price + up to 200 klines."""

    timeframe_map = TIMEFRAME_MAP
    default_interval = "1h"

    @property
    def name(self) -> str:
        return "Binance (Real-time)"

    def _check_payload(self, payload: Any) -> Any:
        # Errors come back as {"code": -1121, "msg": "Invalid symbol."}
        if isinstance(payload, dict) and "code" in payload and "msg" in payload:
            if payload["code"] in RATE_LIMIT_CODES:
                raise RateLimitError(self.name, payload["msg"])
            raise ExternalAPIError(self.name, f"{payload['code']}: {payload['msg']}")
        return payload

    async def fetch(
        self, symbol: str, timeframe: str, credential: Optional[str] = None
    ) -> ProviderSuccess:
        binance_symbol = get_binance_symbol(symbol)
        base = settings.binance_base_url
        logger.info(f"Fetching {binance_symbol} from Binance...")

        async with self._new_session() as session:
            ticker = self._check_payload(
                await self._get_json(session, f"{base}/ticker/24hr", {"symbol": binance_symbol})
            )
            price = self._check_payload(
                await self._get_json(session, f"{base}/ticker/price", {"symbol": binance_symbol})
            )
            klines = self._check_payload(
                await self._get_json(
                    session,
                    f"{base}/klines",
                    {
                        "symbol": binance_symbol,
                        "interval": self.resolve_interval(timeframe),
                        "limit": settings.binance_kline_limit,
                    },
                )
            )

        if not isinstance(klines, list) or not klines:
            raise ExternalAPIError(self.name, f"no klines for {binance_symbol}")

        # Kline layout: [openTime, open, high, low, close, volume, ...]
        series = OHLCVSeries(
            closes=[float(k[4]) for k in klines],
            highs=[float(k[2]) for k in klines],
            lows=[float(k[3]) for k in klines],
            volumes=[float(k[5]) for k in klines],
        )

        quote = LatestQuote(
            price=float(price["price"]),
            change=float(ticker["priceChange"]),
            change_percent=float(ticker["priceChangePercent"]),
            volume=float(ticker["volume"]),
            high_24h=float(ticker["highPrice"]),
            low_24h=float(ticker["lowPrice"]),
            bid=float(ticker["bidPrice"]),
            ask=float(ticker["askPrice"]),
            last_update=utc_now_iso(),
        )

        return ProviderSuccess(provider=self.name, series=series, quote=quote)
