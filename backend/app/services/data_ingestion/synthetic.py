"""
Synthetic Data Generator

Terminal fallback when every real provider fails. Deterministic: every field
is a fixed ratio of a per-asset-class base price, so two calls differ only
in their timestamp.
"""

from typing import Optional

from app.core.config import settings
from app.schemas.indicators import (
    IndicatorSet,
    MACDData,
    BollingerBandsData,
    StochasticData,
    SupportResistance,
)
from app.schemas.market import AssetClass, LatestQuote, OHLCVSeries
from app.services.data_ingestion.interface import SnapshotIngredients, utc_now_iso
from app.services.scanner.patterns import RESISTANCE_OFFSETS, SUPPORT_OFFSETS

SYNTHETIC_SOURCE = "Demo Data"
SYNTHETIC_PATTERN = "Demo Pattern"

# Base prices per asset class
BASE_PRICES = {
    AssetClass.FOREX: 1.085,
    AssetClass.COMMODITY: 2045.3,
}
DEFAULT_BASE_PRICE = 178.5

# Labels used in the advisory note
ASSET_LABELS = {
    AssetClass.CRYPTO: "Crypto",
    AssetClass.FOREX: "Forex",
    AssetClass.COMMODITY: "Commodity",
    AssetClass.STOCK: "Stock",
}


def get_base_price(asset_class: Optional[AssetClass]) -> float:
    """Get base price for an asset class hint."""
    return BASE_PRICES.get(asset_class, DEFAULT_BASE_PRICE)


def generate_synthetic_indicators(base: float) -> IndicatorSet:
    """Fixed indicator set scaled to the base price."""
    return IndicatorSet(
        rsi=55.0,
        macd=MACDData(value=0.5, signal=0.3, histogram=0.2),
        ema20=base * 0.99,
        ema50=base * 0.97,
        ema200=base * 0.95,
        sma20=base * 0.99,
        sma50=base * 0.97,
        bollinger_bands=BollingerBandsData(upper=base * 1.02, middle=base, lower=base * 0.98),
        atr=base * 0.02,
        adx=25.0,
        stochastic=StochasticData(k=60.0, d=55.0),
        volume_profile=None,
    )


def generate_synthetic(
    symbol: str,
    asset_class: Optional[AssetClass] = None,
    last_update: Optional[str] = None,
) -> SnapshotIngredients:
    """Generate complete synthetic snapshot ingredients. Never fails."""
    base = get_base_price(asset_class)
    label = ASSET_LABELS.get(asset_class, "Stock")

    quote = LatestQuote(
        price=base,
        change=base * 0.012,
        change_percent=1.2,
        volume=1_000_000.0,
        high_24h=base * 1.02,
        low_24h=base * 0.98,
        bid=base - 0.01,
        ask=base + 0.01,
        last_update=last_update or utc_now_iso(),
    )

    return SnapshotIngredients(
        source=SYNTHETIC_SOURCE,
        series=OHLCVSeries.flat(base, settings.history_length),
        quote=quote,
        note=f"Demo data for {symbol} - all {label} providers unavailable; add an API key for real {label} data",
        indicators=generate_synthetic_indicators(base),
        patterns=[SYNTHETIC_PATTERN],
        support_resistance=SupportResistance(
            support=[base * offset for offset in SUPPORT_OFFSETS],
            resistance=[base * offset for offset in RESISTANCE_OFFSETS],
        ),
    )
