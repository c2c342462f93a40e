"""
Indicator Engine Service Implementation

Calculates the full indicator set from a canonical OHLCV series.
No I/O and no state: the same series always yields the same set.
"""

from typing import Optional

from app.schemas.market import OHLCVSeries
from app.schemas.indicators import (
    IndicatorSet,
    MACDData,
    BollingerBandsData,
    StochasticData,
)
from app.services.indicators.interface import IndicatorServiceInterface
from app.services.indicators.calculations import (
    sma,
    ema,
    rsi,
    macd,
    stochastic,
    atr,
    bollinger_bands,
    adx,
    volume_profile,
)


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Indicator families are independent; each one falls back to its own
    default so a single ill-conditioned input never aborts the snapshot.
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    def calculate(self, series: OHLCVSeries) -> IndicatorSet:
        """Calculate all indicators for a single series."""
        closes, highs, lows = series.closes, series.highs, series.lows

        macd_val, signal_val, hist_val = macd(closes)
        upper, middle, lower = bollinger_bands(closes, 20, 2.0)
        k_val, d_val = stochastic(highs, lows, closes, 14)

        return IndicatorSet(
            rsi=rsi(closes, 14),
            macd=MACDData(value=macd_val, signal=signal_val, histogram=hist_val),
            ema20=ema(closes, 20),
            ema50=ema(closes, 50),
            ema200=ema(closes, 200),
            sma20=sma(closes, 20),
            sma50=sma(closes, 50),
            bollinger_bands=BollingerBandsData(upper=upper, middle=middle, lower=lower),
            atr=atr(highs, lows, closes, 14),
            adx=adx(highs, lows, closes, 14),
            stochastic=StochasticData(k=k_val, d=d_val),
            volume_profile=volume_profile(series.volumes, 20),
        )

    async def execute(self, input_data: OHLCVSeries) -> IndicatorSet:
        return self.calculate(input_data)

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
