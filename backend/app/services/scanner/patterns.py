"""
Pattern Detection Heuristics

Trend labelling and support/resistance bands derived from closes.
Fixed lookback and offsets; no price-action analysis.
"""

from enum import Enum
from typing import Sequence

from app.schemas.indicators import SupportResistance


class TrendLabel(str, Enum):
    """Trend classification labels."""
    UPTREND = "Uptrend"
    DOWNTREND = "Downtrend"
    SIDEWAYS = "Sideways"
    INSUFFICIENT = "Insufficient data"


TREND_LOOKBACK = 5
TREND_THRESHOLD = 0.02

# Fixed offsets from current price, nearest first
SUPPORT_OFFSETS = (0.98, 0.95, 0.92)
RESISTANCE_OFFSETS = (1.02, 1.05, 1.08)


def classify_trend(closes: Sequence[float]) -> TrendLabel:
    """
    Compare the last close with the close TREND_LOOKBACK bars back
    (inclusive of the last bar).

    A move beyond +/-2% of the earlier close is a trend.
    """
    if len(closes) < TREND_LOOKBACK:
        return TrendLabel.INSUFFICIENT

    earlier = closes[-TREND_LOOKBACK]
    change = closes[-1] - earlier

    if change > earlier * TREND_THRESHOLD:
        return TrendLabel.UPTREND
    elif change < -earlier * TREND_THRESHOLD:
        return TrendLabel.DOWNTREND
    return TrendLabel.SIDEWAYS


def detect_patterns(closes: Sequence[float]) -> list[str]:
    """Ordered list of pattern labels for a close series."""
    return [classify_trend(closes).value]


def calculate_support_resistance(closes: Sequence[float]) -> SupportResistance:
    """
    Placeholder support/resistance: fixed percentage offsets from the
    current price. Does not look at historical turning points.
    """
    current = closes[-1]
    return SupportResistance(
        support=[current * offset for offset in SUPPORT_OFFSETS],
        resistance=[current * offset for offset in RESISTANCE_OFFSETS],
    )
