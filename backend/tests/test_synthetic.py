from __future__ import annotations

import pytest

from app.schemas.market import AssetClass
from app.services.data_ingestion.synthetic import (
    DEFAULT_BASE_PRICE,
    SYNTHETIC_PATTERN,
    SYNTHETIC_SOURCE,
    generate_synthetic,
)

FIXED_TIME = "2024-01-01T00:00:00+00:00"


def test_output_is_deterministic_apart_from_timestamp() -> None:
    first = generate_synthetic("EURUSD", AssetClass.FOREX, last_update=FIXED_TIME)
    second = generate_synthetic("EURUSD", AssetClass.FOREX, last_update=FIXED_TIME)

    assert first == second


@pytest.mark.parametrize(
    "asset_class,price",
    [
        (AssetClass.FOREX, 1.085),
        (AssetClass.COMMODITY, 2045.3),
        (AssetClass.STOCK, DEFAULT_BASE_PRICE),
        (AssetClass.CRYPTO, DEFAULT_BASE_PRICE),
        (None, DEFAULT_BASE_PRICE),
    ],
)
def test_base_price_per_asset_class(asset_class, price: float) -> None:
    ingredients = generate_synthetic("ANY", asset_class)

    assert ingredients.quote.price == price
    assert ingredients.source == SYNTHETIC_SOURCE


def test_fields_are_fixed_ratios_of_base() -> None:
    ingredients = generate_synthetic("XAUOIL", AssetClass.COMMODITY)
    base = 2045.3
    quote = ingredients.quote

    assert quote.change == pytest.approx(base * 0.012)
    assert quote.change_percent == 1.2
    assert quote.high_24h == pytest.approx(base * 1.02)
    assert quote.low_24h == pytest.approx(base * 0.98)
    assert quote.bid == pytest.approx(base - 0.01)
    assert quote.ask == pytest.approx(base + 0.01)

    assert ingredients.indicators.rsi == 55.0
    assert ingredients.indicators.ema200 == pytest.approx(base * 0.95)
    assert ingredients.patterns == [SYNTHETIC_PATTERN]
    assert ingredients.support_resistance.support[0] == pytest.approx(base * 0.98)
    assert ingredients.support_resistance.resistance[-1] == pytest.approx(base * 1.08)


def test_series_is_flat_and_note_names_the_asset_class() -> None:
    ingredients = generate_synthetic("GBPUSD", AssetClass.FOREX)

    assert len(ingredients.series) == 50
    assert set(ingredients.series.closes) == {1.085}
    assert "Forex" in ingredients.note
    assert "GBPUSD" in ingredients.note
