"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
Every function returns a single finite float for the most recent bar and
never raises on short input: each has an explicit fallback branch.
"""

import math
from typing import Optional, Sequence

import numpy as np

from app.schemas.indicators import VolumeProfile, VolumeTrend


def _finite(value: float, default: float) -> float:
    """Collapse NaN/inf to a default."""
    value = float(value)
    return value if math.isfinite(value) else default


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: Sequence[float], period: int) -> float:
    """Simple Moving Average of the trailing `period` values."""
    if len(data) == 0:
        return 0.0
    arr = np.asarray(data, dtype=float)
    if len(arr) < period:
        return _finite(arr[-1], 0.0)

    return _finite(np.mean(arr[-period:]), float(arr[-1]))


def ema(data: Sequence[float], period: int) -> float:
    """
    Exponential Moving Average.

    Seeded with the value `period` steps from the end and walked forward,
    so only the trailing window contributes.
    """
    if len(data) == 0:
        return 0.0
    arr = np.asarray(data, dtype=float)
    if len(arr) < period:
        return _finite(arr[-1], 0.0)

    multiplier = 2 / (period + 1)
    result = arr[-period]
    for price in arr[len(arr) - period + 1 :]:
        result = (price - result) * multiplier + result

    return _finite(result, float(arr[-1]))


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: Sequence[float], period: int = 14) -> float:
    """Relative Strength Index over the trailing `period` changes."""
    if len(closes) < period + 1:
        return 50.0

    deltas = np.diff(np.asarray(closes, dtype=float)[-(period + 1) :])
    avg_gain = np.sum(deltas[deltas > 0]) / period
    avg_loss = -np.sum(deltas[deltas < 0]) / period

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    value = _finite(100 - (100 / (1 + rs)), 50.0)
    return min(100.0, max(0.0, value))


def macd(closes: Sequence[float]) -> tuple[float, float, float]:
    """
    MACD (Moving Average Convergence Divergence).

    The signal line is a fixed 0.9 multiple of the MACD value rather than a
    smoothed series.

    Returns: (value, signal, histogram)
    """
    macd_line = ema(closes, 12) - ema(closes, 26)
    signal = macd_line * 0.9
    return macd_line, signal, macd_line - signal


def stochastic(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> tuple[float, float]:
    """
    Stochastic Oscillator.

    %D is %K * 0.9, not a rolling average.

    Returns: (k, d)
    """
    if len(closes) == 0:
        return 0.0, 0.0

    highest_high = float(np.max(np.asarray(highs, dtype=float)[-period:]))
    lowest_low = float(np.min(np.asarray(lows, dtype=float)[-period:]))

    if highest_high == lowest_low:
        k = 0.0
    else:
        k = (closes[-1] - lowest_low) / (highest_high - lowest_low) * 100
        k = min(100.0, max(0.0, _finite(k, 0.0)))

    return k, k * 0.9


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def true_range(
    highs: Sequence[float], lows: Sequence[float], closes: Sequence[float]
) -> np.ndarray:
    """True Range for every bar after the first."""
    if len(closes) < 2:
        return np.array([], dtype=float)

    h = np.asarray(highs, dtype=float)[1:]
    l = np.asarray(lows, dtype=float)[1:]
    prev_close = np.asarray(closes, dtype=float)[:-1]

    return np.maximum.reduce([h - l, np.abs(h - prev_close), np.abs(l - prev_close)])


def atr(
    highs: Sequence[float], lows: Sequence[float], closes: Sequence[float], period: int = 14
) -> float:
    """Average True Range (simple average of TR)."""
    tr = true_range(highs, lows, closes)
    if len(tr) == 0:
        return 0.0
    return max(0.0, sma(tr, period))


def bollinger_bands(
    closes: Sequence[float], period: int = 20, std_dev: float = 2.0
) -> tuple[float, float, float]:
    """
    Bollinger Bands using population standard deviation.

    Returns: (upper, middle, lower)
    """
    middle = sma(closes, period)
    if len(closes) < period:
        return middle, middle, middle

    band = std_dev * _finite(np.std(np.asarray(closes, dtype=float)[-period:]), 0.0)
    return middle + band, middle, middle - band


# =============================================================================
# TREND INDICATORS
# =============================================================================


def adx(
    highs: Sequence[float], lows: Sequence[float], closes: Sequence[float], period: int = 14
) -> float:
    """
    Trend-strength proxy: price change over `period` bars in ATR units.

    Not the directional-movement ADX. Clamped to 0-100.
    """
    if len(closes) == 0:
        return 0.0

    atr_val = atr(highs, lows, closes, period)
    if atr_val == 0:
        return 0.0

    reference = closes[-1 - period] if len(closes) > period else closes[0]
    score = abs(closes[-1] - reference) / atr_val * 5
    return min(100.0, _finite(score, 0.0))


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def volume_profile(volumes: Sequence[float], period: int = 20) -> Optional[VolumeProfile]:
    """Current volume against its moving average; None without volume data."""
    if len(volumes) == 0:
        return None

    current = _finite(volumes[-1], 0.0)
    average = sma(volumes, period)
    ratio = _finite(current / average, 0.0) if average > 0 else 0.0

    return VolumeProfile(
        current=current,
        average=average,
        ratio=ratio,
        trend=VolumeTrend.INCREASING if current > average else VolumeTrend.DECREASING,
    )
