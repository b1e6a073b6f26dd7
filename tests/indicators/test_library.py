"""Tests for the formula library and its descriptions."""

import numpy as np
import pandas as pd
import pytest

from stratspec.core.types import Action, Formula, IndicatorKind
from stratspec.indicators import (
    FORMULAS,
    MISSING,
    describe,
    describe_variant,
    format_value,
    get_formula,
    variant_signal,
)
from stratspec.registry import VARIANTS, all_variants


def _make_mktdata(n: int = 120) -> pd.DataFrame:
    rng = np.random.default_rng(0)
    close = 100 + np.cumsum(rng.normal(0, 1, n))
    dates = pd.date_range("2024-01-01", periods=n, freq="15min")
    return pd.DataFrame(
        {
            "open": close + rng.normal(0, 0.2, n),
            "high": close + 1.0,
            "low": close - 1.0,
            "close": close,
            "volume": rng.uniform(100, 200, n),
        },
        index=dates,
    )


def test_one_formula_per_kind() -> None:
    assert set(FORMULAS) == set(IndicatorKind)
    for kind, formula in FORMULAS.items():
        assert formula.kind is kind


@pytest.mark.parametrize("kind", list(IndicatorKind))
def test_formulas_satisfy_protocol(kind: IndicatorKind) -> None:
    assert isinstance(get_formula(kind), Formula)


@pytest.mark.parametrize("kind", list(IndicatorKind))
def test_signals_are_actions(kind: IndicatorKind) -> None:
    mktdata = _make_mktdata()
    actions = get_formula(kind).signal(mktdata)
    assert len(actions) == len(mktdata)
    assert set(actions) <= {Action.BUY, Action.SELL, Action.HOLD}


def test_format_value() -> None:
    assert format_value(14.0) == "14"
    assert format_value(0.98) == "0.98"
    assert format_value(None) == MISSING


def test_describe_fills_values_and_marks_missing() -> None:
    d = describe(IndicatorKind.RSI, {"period": 14, "overbought": "70"})
    assert "period=14" in d.setup
    assert "overbought=70" in d.setup
    assert f"oversold={MISSING}" in d.setup
    assert [p.name for p in d.parameters] == ["period", "overbought", "oversold"]
    assert d.parameters[2].value == MISSING


def test_describe_ignores_garbage() -> None:
    d = describe(IndicatorKind.GABAGOOL, {"max_pair_cost": "cheap", "unrelated": 3})
    assert f"max_pair_cost={MISSING}" in d.setup


@pytest.mark.parametrize("tag", list(VARIANTS))
def test_describe_variant_mentions_every_canonical_key(tag: str) -> None:
    descriptor = VARIANTS[tag]
    for params in ({}, {name: 7 for name in descriptor.param_names}):
        d = describe_variant(descriptor, params)
        for name in descriptor.param_names:
            assert f"{name}=" in d.setup


def test_describe_variant_composite_uses_canonical_names_and_aliases() -> None:
    d = describe_variant(VARIANTS["rsi_bollinger"], {"rsi_period": 14, "rsi_ob": 75, "bb_mult": 2})
    assert "rsi_period=14" in d.setup
    assert "rsi_overbought=75" in d.setup
    assert "bb_multiplier=2" in d.setup
    assert f"bb_period={MISSING}" in d.setup
    assert d.composition is not None and "Unanimous" in d.composition
    assert [name for name, _ in d.sections] == ["RSI", "Bollinger Bands"]


def test_describe_variant_atomic_has_no_composition() -> None:
    d = describe_variant(VARIANTS["macd"], {"fast": 12, "slow": 26, "signal": 9})
    assert d.composition is None
    assert "fast=12" in d.setup


@pytest.mark.parametrize("descriptor", all_variants(), ids=lambda d: d.tag)
def test_variant_signal_runs_for_every_variant(descriptor) -> None:
    mktdata = _make_mktdata()
    actions = variant_signal(descriptor, mktdata, {})
    assert len(actions) == len(mktdata)
    assert set(actions) <= {Action.BUY, Action.SELL, Action.HOLD}


def test_variant_signal_composite_is_unanimous_of_components() -> None:
    mktdata = _make_mktdata()
    params = {"rsi_period": 5, "rsi_overbought": 60, "rsi_oversold": 40, "bb_period": 5, "bb_multiplier": 1}
    composed = variant_signal(VARIANTS["rsi_bollinger"], mktdata, params)
    rsi = get_formula(IndicatorKind.RSI).signal(mktdata, period=5, overbought=60, oversold=40)
    bb = get_formula(IndicatorKind.BOLLINGER_BANDS).signal(mktdata, period=5, multiplier=1)
    expected = [a if a == b else Action.HOLD for a, b in zip(rsi, bb)]
    assert composed.tolist() == expected


@pytest.mark.parametrize("period", [0, -5, 0.5])
def test_variant_signal_non_positive_lookback_uses_default(period) -> None:
    mktdata = _make_mktdata()
    fallback = variant_signal(VARIANTS["rsi"], mktdata, {"overbought": 60, "oversold": 40})
    actions = variant_signal(
        VARIANTS["rsi"], mktdata, {"period": period, "overbought": 60, "oversold": 40},
    )
    assert actions.tolist() == fallback.tolist()


def test_variant_signal_non_positive_composite_lookback() -> None:
    mktdata = _make_mktdata()
    actions = variant_signal(VARIANTS["macd_rsi"], mktdata, {"macd_fast": 0, "rsi_period": -1})
    assert len(actions) == len(mktdata)


@pytest.mark.parametrize("kind", list(IndicatorKind))
def test_every_formula_states_a_confidence_rule(kind: IndicatorKind) -> None:
    text = get_formula(kind).describe({})
    assert text.confidence_rule
