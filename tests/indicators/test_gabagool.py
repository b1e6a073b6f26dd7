"""Tests for the Gabagool pair-cost arbitrage formula."""

import pandas as pd
import pytest

from stratspec.core.types import Action
from stratspec.indicators.gabagool import Gabagool, PairDecision, evaluate_pair, quote


def test_pair_cost_equal_to_max_is_skipped() -> None:
    decision = evaluate_pair(0.97, max_pair_cost=0.97)
    assert decision.decision is PairDecision.SKIP
    assert decision.locked_profit == 0.0


def test_pair_cost_just_below_max_trades() -> None:
    decision = evaluate_pair(0.9699, max_pair_cost=0.97)
    assert decision.decision is PairDecision.TRADE
    assert decision.locked_profit == pytest.approx(0.0301)


def test_quote_flat_candle() -> None:
    q = quote(100.0, 100.0, 100.0, 100.0, spread_multiplier=3, bid_offset=0.01)
    assert q.yes_mid == pytest.approx(0.5)
    assert q.no_mid == pytest.approx(0.5)
    # volatility 0 -> spread floored at 0.02
    assert q.spread == pytest.approx(0.02)
    assert q.yes_fill == pytest.approx(0.48)
    assert q.pair_cost == pytest.approx(0.96)


def test_quote_clamps_skew_spread_and_fills() -> None:
    q = quote(100.0, 110.0, 100.0, 110.0, spread_multiplier=3, bid_offset=0.01)
    # +10% move * 5 is clamped to +0.40
    assert q.yes_mid == pytest.approx(0.9)
    assert q.no_mid == pytest.approx(0.1)
    assert q.spread == pytest.approx(0.10)
    assert q.yes_fill == pytest.approx(0.84)
    # 0.1 - 0.05 - 0.01 = 0.04 is raised to the 0.05 floor
    assert q.no_fill == pytest.approx(0.05)


def test_quote_zero_open_is_neutral() -> None:
    q = quote(0.0, 1.0, 0.0, 1.0)
    assert q.yes_mid == 0.5
    assert q.spread == pytest.approx(0.02)


def test_compute_matches_scalar_quote() -> None:
    mktdata = pd.DataFrame(
        {
            "open": [100.0, 100.0],
            "high": [100.0, 110.0],
            "low": [100.0, 100.0],
            "close": [100.0, 110.0],
            "volume": [1.0, 1.0],
        },
    )
    frame = Gabagool().compute(mktdata, max_pair_cost=0.98, bid_offset=0.01, spread_multiplier=3)
    for i, row in enumerate(mktdata.itertuples(index=False)):
        q = quote(row.open, row.high, row.low, row.close, spread_multiplier=3, bid_offset=0.01)
        assert frame["pair_cost"].iloc[i] == pytest.approx(q.pair_cost)
    assert frame["trade"].tolist() == [True, True]
    assert frame["locked_profit"].iloc[0] == pytest.approx(0.04)


def test_signal_maps_trade_to_buy_and_skip_to_hold() -> None:
    mktdata = pd.DataFrame(
        {"open": [100.0], "high": [100.0], "low": [100.0], "close": [100.0], "volume": [1.0]},
    )
    assert Gabagool().signal(mktdata, max_pair_cost=0.98).tolist() == [Action.BUY]
    assert Gabagool().signal(mktdata, max_pair_cost=0.9).tolist() == [Action.HOLD]
