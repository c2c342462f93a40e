"""
Spot Rate Degradation

Some upstreams only return a single current rate. These helpers expand that
rate into a flat, internally consistent series + quote so the regular
indicator engine can still run (uninformative, but well-defined).
"""

from typing import Optional

from app.core.config import settings
from app.schemas.market import LatestQuote, OHLCVSeries
from app.services.base import ExternalAPIError, ValidationError
from app.services.data_ingestion.interface import ProviderSuccess, utc_now_iso

SPOT_SOURCE_SUFFIX = "(Spot Rate)"

# Quoted bid/ask half-spread for currency pairs
FOREX_SPREAD = 0.0001


def spot_source_label(provider_name: str) -> str:
    return f"{provider_name} {SPOT_SOURCE_SUFFIX}"


def build_spot_result(
    provider_name: str,
    price: float,
    spread: float,
    upgrade_hint: Optional[str] = None,
) -> ProviderSuccess:
    """
    Build a degraded-but-real result from one spot value.

    The quote mirrors the flat series: no change, no range, no volume.
    """
    price = float(price)
    if not price > 0:
        raise ExternalAPIError(provider_name, f"invalid spot price {price!r}")

    series = OHLCVSeries.flat(price, settings.history_length)
    quote = LatestQuote(
        price=price,
        change=0.0,
        change_percent=0.0,
        volume=0.0,
        high_24h=price,
        low_24h=price,
        bid=price - spread,
        ask=price + spread,
        last_update=utc_now_iso(),
    )

    note = f"Live rate from {provider_name} only - indicators computed on a flat series"
    if upgrade_hint:
        note = f"{note}. {upgrade_hint}"

    return ProviderSuccess(
        provider=spot_source_label(provider_name),
        series=series,
        quote=quote,
        note=note,
        degraded=True,
    )


def split_pair(symbol: str) -> tuple[str, str]:
    """'EURUSD' / 'EUR/USD' -> ('EUR', 'USD')."""
    cleaned = symbol.replace("/", "").replace("-", "").replace("_", "").upper()
    if len(cleaned) < 6:
        raise ValidationError("forex", f"cannot split currency pair from {symbol!r}")
    return cleaned[:3], cleaned[3:6]
