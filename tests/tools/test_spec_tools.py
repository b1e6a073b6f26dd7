"""Tests for stratspec.tools.spec."""

from stratspec.indicators import MISSING
from stratspec.tools.spec import (
    spec_describe_variant,
    spec_fee_quote,
    spec_gabagool_quote,
    spec_list_variants,
    spec_render_document,
    spec_render_table,
    spec_risk_thresholds,
)

RECORD = {
    "strategy_name": "ema_rsi_sol",
    "strategy_type": "ema_rsi",
    "strategy_params": '{"ema_rsi": {"ema_fast": 9, "ema_slow": 21, "rsi_period": 14}}',
    "symbol": "SOLUSDT",
    "days": 14,
    "sizing_mode": "ConfidenceWeighted",
    "max_drawdown_pct": "5.0",
}


def test_list_variants() -> None:
    result = spec_list_variants()
    assert result["count"] == 22
    tags = [v["tag"] for v in result["variants"]]
    assert tags[0] == "rsi"
    triple = next(v for v in result["variants"] if v["tag"] == "triple_rsi_macd_bb")
    assert triple["mode"] == "majority"
    assert triple["components"] == ["rsi", "macd", "bollinger_bands"]


def test_describe_variant_known() -> None:
    result = spec_describe_variant("stoch_rsi", {"stoch_ob": 80, "rsi_period": 14})
    assert result["known"] is True
    assert "stoch_overbought=80" in result["setup"]
    assert result["parameters"][0]["name"] == "stoch_period"
    assert [c["name"] for c in result["components"]] == ["Stochastic", "RSI"]


def test_describe_variant_unknown() -> None:
    result = spec_describe_variant("dynamic_combo")
    assert result == {"strategy_type": "dynamic_combo", "known": False}


def test_render_table_tool() -> None:
    result = spec_render_table(RECORD)
    assert result["known"] is True
    values = {r["parameter"]: r["value"] for r in result["rows"]}
    assert values["ema_fast"] == "9"
    assert values["rsi_overbought"] == MISSING
    assert values["sizing_mode"] == "confidence_weighted"
    assert "Parameter" in result["text"]


def test_render_document_tool() -> None:
    result = spec_render_document(RECORD)
    assert result["strategy_type"] == "ema_rsi"
    assert "ema_fast=9" in result["document"]


def test_render_document_unknown() -> None:
    result = spec_render_document({"strategy_type": "mystery"})
    assert result["known"] is False
    assert "Unknown strategy type" in result["document"]


def test_risk_thresholds_tool() -> None:
    result = spec_risk_thresholds(max_drawdown_pct=10.0, max_consecutive_losses=8)
    assert result["circuit_breaker_drawdown_pct"] == 15.0
    assert result["consecutive_loss_limit"] == 11


def test_fee_quote_with_price() -> None:
    result = spec_fee_quote(contracts=100, price=0.5)
    assert result["fee"] == 1.5625
    assert result["charged_fee"] == 1.5625


def test_fee_quote_estimates_price() -> None:
    result = spec_fee_quote(contracts=10, entry_price=100.0, current_price=100.0)
    assert result["price"] == 0.5


def test_fee_quote_requires_a_price() -> None:
    assert "error" in spec_fee_quote(contracts=10)


def test_gabagool_quote_tool() -> None:
    result = spec_gabagool_quote(open=100.0, high=100.0, low=100.0, close=100.0)
    assert result["decision"] == "TRADE"
    assert abs(result["pair_cost"] - 0.96) < 1e-9
    skipped = spec_gabagool_quote(open=100.0, high=100.0, low=100.0, close=100.0, max_pair_cost=0.9)
    assert skipped["decision"] == "SKIP"
    assert skipped["locked_profit"] == 0.0
