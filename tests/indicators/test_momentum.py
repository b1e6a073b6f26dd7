"""Tests for RSI, MACD, Stochastic and Williams %R."""

import numpy as np
import pandas as pd
import pytest

from stratspec.core.types import Action
from stratspec.indicators.momentum import MACD, RSI, Stochastic, WilliamsR


def _make_mktdata(
    closes: list[float],
    highs: list[float] | None = None,
    lows: list[float] | None = None,
) -> pd.DataFrame:
    dates = pd.date_range("2024-01-01", periods=len(closes), freq="15min")
    return pd.DataFrame(
        {
            "open": closes,
            "high": highs if highs is not None else closes,
            "low": lows if lows is not None else closes,
            "close": closes,
            "volume": 1000.0,
        },
        index=dates,
    )


def _v_shape(down: int = 40, up: int = 20) -> pd.DataFrame:
    closes = [100.0 - i for i in range(down)] + [100.0 - down + 2 * (i + 1) for i in range(up)]
    return _make_mktdata(closes)


# ---------------------------------------------------------------------------
# RSI
# ---------------------------------------------------------------------------


def test_rsi_only_gains_is_100() -> None:
    mktdata = _make_mktdata([100.0 + i for i in range(30)])
    rsi = RSI().compute(mktdata, period=14)["rsi"]
    assert rsi.iloc[-1] == 100.0


def test_rsi_only_losses_is_0() -> None:
    mktdata = _make_mktdata([100.0 - i for i in range(30)])
    rsi = RSI().compute(mktdata, period=14)["rsi"]
    assert rsi.iloc[-1] == 0.0


def test_rsi_warmup_is_nan_and_holds() -> None:
    mktdata = _make_mktdata([100.0 + i for i in range(30)])
    rsi = RSI().compute(mktdata, period=14)["rsi"]
    assert rsi.iloc[:14].isna().all()
    assert not np.isnan(rsi.iloc[14])
    actions = RSI().signal(mktdata, period=14)
    assert (actions.iloc[:14] == Action.HOLD).all()


def test_rsi_signal_directions() -> None:
    rising = _make_mktdata([100.0 + i for i in range(30)])
    falling = _make_mktdata([100.0 - i for i in range(30)])
    assert RSI().signal(rising, period=14, overbought=70, oversold=30).iloc[-1] is Action.SELL
    assert RSI().signal(falling, period=14, overbought=70, oversold=30).iloc[-1] is Action.BUY


def test_rsi_mixed_moves_between_bounds() -> None:
    closes = [100.0, 102.0, 101.0, 103.0, 102.0, 104.0, 103.0, 105.0]
    rsi = RSI().compute(_make_mktdata(closes), period=3)["rsi"]
    assert 0.0 < rsi.iloc[-1] < 100.0


# ---------------------------------------------------------------------------
# MACD
# ---------------------------------------------------------------------------


def test_macd_histogram_is_line_minus_signal() -> None:
    lines = MACD().compute(_v_shape(), fast=3, slow=6, signal=2)
    pd.testing.assert_series_equal(
        lines["histogram"], lines["macd"] - lines["macd_signal"], check_names=False,
    )


def test_macd_buys_after_reversal() -> None:
    actions = MACD().signal(_v_shape(), fast=3, slow=6, signal=2)
    trades = actions[actions != Action.HOLD]
    assert len(trades) >= 1
    assert trades.iloc[0] is Action.BUY
    assert actions.index.get_loc(trades.index[0]) >= 40


def test_macd_ignores_crossings_during_warmup() -> None:
    actions = MACD().signal(_v_shape(), fast=3, slow=6, signal=2)
    assert (actions.iloc[:6] == Action.HOLD).all()


# ---------------------------------------------------------------------------
# Stochastic / Williams %R
# ---------------------------------------------------------------------------


def test_stochastic_k_value() -> None:
    mktdata = _make_mktdata([9.0, 11.0, 10.0], highs=[10.0, 12.0, 11.0], lows=[8.0, 9.0, 7.0])
    k = Stochastic().compute(mktdata, period=3)["k"]
    # HH=12, LL=7 -> 100 * (10 - 7) / 5
    assert k.iloc[-1] == pytest.approx(60.0)


def test_stochastic_flat_window_holds() -> None:
    mktdata = _make_mktdata([50.0] * 20)
    lines = Stochastic().compute(mktdata, period=5)
    assert lines["k"].isna().all()
    assert (Stochastic().signal(mktdata, period=5) == Action.HOLD).all()


def test_stochastic_buys_on_cross_up_in_oversold_zone() -> None:
    # %K over 3 bars: 60, 0, 0, 10 against %D 20 then 3.3
    mktdata = _make_mktdata([10.0, 5.0, 8.0, 4.0, 3.0, 3.1])
    actions = Stochastic().signal(mktdata, period=3, overbought=80, oversold=20)
    assert actions.tolist() == [Action.HOLD] * 5 + [Action.BUY]


def test_stochastic_sells_on_cross_down_in_overbought_zone() -> None:
    # %K over 3 bars: 40, 100, 100, 90 against %D 80 then 96.7
    mktdata = _make_mktdata([10.0, 15.0, 12.0, 16.0, 17.0, 16.9])
    actions = Stochastic().signal(mktdata, period=3, overbought=80, oversold=20)
    assert actions.tolist() == [Action.HOLD] * 5 + [Action.SELL]


def test_stochastic_needs_prior_bar_strictly_below() -> None:
    # %K equals %D (both 0) on the bar before the rise, so there is no cross
    mktdata = _make_mktdata([10.0, 9.0, 8.0, 7.0, 6.0, 5.0, 5.1])
    actions = Stochastic().signal(mktdata, period=3, overbought=80, oversold=20)
    assert (actions == Action.HOLD).all()


def test_williams_r_value() -> None:
    mktdata = _make_mktdata([9.0, 11.0, 10.0], highs=[10.0, 12.0, 11.0], lows=[8.0, 9.0, 7.0])
    wr = WilliamsR().compute(mktdata, period=3)["williams_r"]
    # -100 * (12 - 10) / 5
    assert wr.iloc[-1] == pytest.approx(-40.0)


def test_williams_r_signal() -> None:
    highs = [10.0, 10.0, 10.0, 10.0]
    lows = [0.0, 0.0, 0.0, 0.0]
    mktdata = _make_mktdata([5.0, 5.0, 1.0, 9.5], highs=highs, lows=lows)
    actions = WilliamsR().signal(mktdata, period=3, overbought=-20, oversold=-80)
    assert actions.tolist() == [Action.HOLD, Action.HOLD, Action.BUY, Action.SELL]


def test_williams_r_flat_window_holds() -> None:
    mktdata = _make_mktdata([50.0] * 10)
    assert (WilliamsR().signal(mktdata, period=3) == Action.HOLD).all()
