"""
Pattern & Level Heuristics

Trend labels and support/resistance bands computed from a close series.
"""

from app.services.scanner.patterns import (
    TrendLabel,
    classify_trend,
    detect_patterns,
    calculate_support_resistance,
)

__all__ = [
    "TrendLabel",
    "classify_trend",
    "detect_patterns",
    "calculate_support_resistance",
]
