"""Tests for risk thresholds and sizing."""

import pytest

from stratspec.core.config import CompilerSettings
from stratspec.core.records import BacktestStats
from stratspec.core.types import SizingMode
from stratspec.policy.risk import RiskPolicy, SizingPolicy


def test_circuit_breaker_is_one_and_a_half_drawdowns() -> None:
    t = RiskPolicy().derive(BacktestStats(max_drawdown_pct=8.0))
    assert t.circuit_breaker_drawdown_pct == pytest.approx(12.0)
    assert t.observed_drawdown_pct == 8.0


def test_loss_limit_has_floor_of_ten() -> None:
    assert RiskPolicy().derive(BacktestStats(max_consecutive_losses=2)).consecutive_loss_limit == 10
    assert RiskPolicy().derive(BacktestStats(max_consecutive_losses=9)).consecutive_loss_limit == 12


@pytest.mark.parametrize("mode", list(SizingMode))
def test_every_sizing_mode_is_described(mode: SizingMode) -> None:
    assert "10%" in SizingPolicy().describe(mode)


def test_kelly_description_mentions_cap() -> None:
    assert "25%" in SizingPolicy().describe(SizingMode.KELLY)


def test_fixed_position() -> None:
    assert SizingPolicy().position_pct(SizingMode.FIXED) == 10.0


def test_kelly_falls_back_before_enough_trades() -> None:
    assert SizingPolicy().position_pct(SizingMode.KELLY, wins=5, total=9, avg_win=2, avg_loss=1) == 10.0


def test_kelly_fraction_and_cap() -> None:
    sizing = SizingPolicy()
    # p = 0.6, b = 1 -> (0.6 - 0.4) / 1 = 20%
    assert sizing.position_pct(
        SizingMode.KELLY, wins=6, total=10, avg_win=1, avg_loss=1,
    ) == pytest.approx(20.0)
    # p = 0.9, b = 3 -> 86.7% capped at 25%
    assert sizing.position_pct(SizingMode.KELLY, wins=9, total=10, avg_win=3, avg_loss=1) == 25.0
    # negative edge -> 0
    assert sizing.position_pct(SizingMode.KELLY, wins=2, total=10, avg_win=1, avg_loss=1) == 0.0


def test_confidence_weighted() -> None:
    sizing = SizingPolicy(CompilerSettings(base_position_pct=20.0))
    assert sizing.position_pct(SizingMode.CONFIDENCE_WEIGHTED, confidence=0.5) == 10.0
