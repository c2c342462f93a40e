"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod

from app.services.base import BaseService
from app.schemas.market import OHLCVSeries
from app.schemas.indicators import IndicatorSet


class IndicatorServiceInterface(BaseService[OHLCVSeries, IndicatorSet]):
    """
    Indicator Engine Service Contract.

    INPUT: OHLCVSeries
        - closes/highs/lows/volumes, oldest bar first

    OUTPUT: IndicatorSet
        - RSI, MACD, EMA/SMA, Bollinger, ATR, ADX, Stochastic, Volume Profile
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    def calculate(self, series: OHLCVSeries) -> IndicatorSet:
        """Synchronous, pure calculation for one series."""
        pass

    @abstractmethod
    async def execute(self, input_data: OHLCVSeries) -> IndicatorSet:
        """Calculate indicators for a series."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
