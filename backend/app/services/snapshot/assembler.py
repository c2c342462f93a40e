"""
Snapshot Assembler

Combines acquired ingredients with indicator and heuristic output into the
response payload.
"""

from typing import Optional

from app.core.config import settings
from app.schemas.market import MarketSnapshot
from app.services.data_ingestion.interface import SnapshotIngredients
from app.services.indicators.service import IndicatorService, get_indicator_service
from app.services.scanner.patterns import calculate_support_resistance, detect_patterns


def assemble_snapshot(
    symbol: str,
    ingredients: SnapshotIngredients,
    indicator_service: Optional[IndicatorService] = None,
) -> MarketSnapshot:
    """Build a MarketSnapshot; preset analysis in the ingredients wins."""
    indicator_service = indicator_service or get_indicator_service()
    series = ingredients.series
    quote = ingredients.quote

    indicators = ingredients.indicators or indicator_service.calculate(series)
    patterns = ingredients.patterns or detect_patterns(series.closes)
    levels = ingredients.support_resistance or calculate_support_resistance(series.closes)

    return MarketSnapshot(
        symbol=symbol,
        source=ingredients.source,
        price=quote.price,
        change=quote.change,
        change_percent=quote.change_percent,
        volume=quote.volume,
        high_24h=quote.high_24h,
        low_24h=quote.low_24h,
        bid=quote.bid,
        ask=quote.ask,
        last_update=quote.last_update,
        indicators=indicators,
        patterns=list(patterns),
        support_resistance=levels,
        historical_data=list(series.closes[-settings.history_length :]),
        note=ingredients.note,
    )
