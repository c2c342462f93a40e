from __future__ import annotations

import math
import random

import pytest

from app.schemas.indicators import VolumeTrend
from app.services.indicators import calculations as calc
from app.services.indicators.service import IndicatorService


@pytest.mark.parametrize("length", [1, 2, 19])
def test_sma_and_ema_fall_back_to_last_price_when_series_is_short(length: int) -> None:
    data = [float(10 + i) for i in range(length)]

    assert calc.sma(data, 20) == data[-1]
    assert calc.ema(data, 20) == data[-1]


def test_sma_averages_trailing_window() -> None:
    assert calc.sma([1.0, 2.0, 3.0, 4.0], 2) == pytest.approx(3.5)
    assert calc.sma([float(i) for i in range(1, 21)], 20) == pytest.approx(10.5)


def test_ema_seeds_from_window_start() -> None:
    # seed 1, then 2 -> 1.5, then 3 -> 2.25 with multiplier 0.5
    assert calc.ema([1.0, 2.0, 3.0], 3) == pytest.approx(2.25)
    # leading values outside the window are ignored
    assert calc.ema([50.0, 1.0, 2.0, 3.0], 3) == pytest.approx(2.25)


def test_rsi_defaults_and_bounds() -> None:
    assert calc.rsi([100.0] * 10, 14) == 50.0
    assert calc.rsi([float(i) for i in range(20)], 14) == 100.0
    assert calc.rsi([float(i) for i in range(20, 0, -1)], 14) == pytest.approx(0.0)

    alternating = [100.0, 101.0] * 7 + [100.0]
    assert calc.rsi(alternating, 14) == pytest.approx(50.0)


def test_rsi_of_flat_series_is_100() -> None:
    assert calc.rsi([5.0] * 30, 14) == 100.0


def test_macd_signal_is_fixed_fraction() -> None:
    closes = [100.0 + i * 0.5 for i in range(60)]
    value, signal, histogram = calc.macd(closes)

    assert value == pytest.approx(calc.ema(closes, 12) - calc.ema(closes, 26))
    assert signal == pytest.approx(value * 0.9)
    assert histogram == pytest.approx(value - signal)


def test_macd_is_zero_for_short_series() -> None:
    assert calc.macd([10.0, 11.0]) == (0.0, 0.0, 0.0)


def test_bollinger_bands_use_population_std() -> None:
    closes = [float(i) for i in range(1, 21)]
    upper, middle, lower = calc.bollinger_bands(closes, 20, 2.0)

    std = math.sqrt(sum((c - 10.5) ** 2 for c in closes) / 20)
    assert middle == pytest.approx(10.5)
    assert upper == pytest.approx(10.5 + 2 * std)
    assert lower == pytest.approx(10.5 - 2 * std)


def test_bollinger_bands_collapse_on_short_series() -> None:
    assert calc.bollinger_bands([1.0, 2.0, 3.0], 20, 2.0) == (3.0, 3.0, 3.0)


def test_atr_requires_two_bars() -> None:
    assert calc.atr([11.0], [9.0], [10.0], 14) == 0.0
    assert calc.atr([11.0] * 30, [9.0] * 30, [10.0] * 30, 14) == pytest.approx(2.0)


def test_true_range_uses_previous_close() -> None:
    tr = calc.true_range([10.0, 15.0], [9.0, 14.0], [9.5, 14.5])

    assert list(tr) == [pytest.approx(5.5)]


def test_adx_proxy_formula() -> None:
    closes = [float(100 + i) for i in range(30)]
    highs = [c + 1 for c in closes]
    lows = [c - 1 for c in closes]

    # ATR = 2, change over 14 bars = 14 -> 14 / 2 * 5
    assert calc.adx(highs, lows, closes, 14) == pytest.approx(35.0)


def test_adx_is_zero_without_range_and_clamped_at_100() -> None:
    assert calc.adx([10.0] * 20, [10.0] * 20, [10.0] * 20, 14) == 0.0

    # narrow bar ranges with a large close jump push the raw score past 100
    closes = [1.0] * 19 + [1000.0]
    assert calc.adx([1.1] * 20, [1.0] * 20, closes, 14) == 100.0


def test_stochastic() -> None:
    closes = [float(i) for i in range(1, 15)]
    highs = [c + 1 for c in closes]
    lows = [c - 1 for c in closes]
    k, d = calc.stochastic(highs, lows, closes, 14)

    assert k == pytest.approx(14 / 15 * 100)
    assert d == pytest.approx(k * 0.9)


def test_stochastic_flat_window_is_zero() -> None:
    assert calc.stochastic([5.0] * 14, [5.0] * 14, [5.0] * 14, 14) == (0.0, 0.0)


def test_volume_profile() -> None:
    assert calc.volume_profile([]) is None

    profile = calc.volume_profile([100.0] * 19 + [200.0])
    assert profile.current == 200.0
    assert profile.average == pytest.approx(105.0)
    assert profile.ratio == pytest.approx(200.0 / 105.0)
    assert profile.trend == VolumeTrend.INCREASING

    zeros = calc.volume_profile([0.0] * 25)
    assert zeros.ratio == 0.0
    assert zeros.trend == VolumeTrend.DECREASING


@pytest.mark.parametrize("seed", range(5))
def test_indicator_set_is_finite_and_bounded_for_any_length(seed: int, make_series) -> None:
    rng = random.Random(seed)
    service = IndicatorService()

    for length in range(1, 61):
        closes = [rng.uniform(50, 150) for _ in range(length)]
        volumes = [rng.uniform(0, 1000) for _ in range(length)] if seed % 2 else []
        indicators = service.calculate(make_series(closes, volumes))

        flat_values = [
            indicators.rsi,
            indicators.ema20,
            indicators.ema50,
            indicators.ema200,
            indicators.sma20,
            indicators.sma50,
            indicators.atr,
            indicators.adx,
            indicators.macd.value,
            indicators.macd.signal,
            indicators.macd.histogram,
            indicators.bollinger_bands.upper,
            indicators.bollinger_bands.middle,
            indicators.bollinger_bands.lower,
            indicators.stochastic.k,
            indicators.stochastic.d,
        ]
        assert all(math.isfinite(v) for v in flat_values)
        assert 0 <= indicators.rsi <= 100
        assert 0 <= indicators.stochastic.k <= 100
        assert 0 <= indicators.adx <= 100

        if volumes:
            assert indicators.volume_profile is not None
            assert math.isfinite(indicators.volume_profile.ratio)
        else:
            assert indicators.volume_profile is None
