"""Document mode: a step-by-step build guide for one strategy record."""

from __future__ import annotations

import math
from collections.abc import Mapping

from stratspec.core.config import CompilerSettings
from stratspec.core.records import StrategyRecord
from stratspec.core.types import SizingMode
from stratspec.indicators.base import CONFIDENCE_CLAMP
from stratspec.render.context import UNKNOWN_TITLE, RenderContext, build_context, signal_mapping

MIN_CANDLES = 50
CANDLE_MARGIN = 10


def candle_buffer(params: Mapping[str, float]) -> int:
    """Candles to keep in memory: the longest plausible lookback plus a margin."""
    lookbacks = [v for v in params.values() if 0 < v < 1000]
    return int(math.ceil(max([MIN_CANDLES, *lookbacks]))) + CANDLE_MARGIN


def _numbered(items: list[str]) -> list[str]:
    return [f"{i}. {item}" for i, item in enumerate(items, start=1)]


def _header(ctx: RenderContext) -> list[str]:
    r = ctx.record
    s = ctx.settings
    return [
        f"# Strategy specification: {r.strategy_name or '(unnamed)'}",
        "",
        f"- Strategy type: {ctx.type_label}",
        f"- Market: {s.market}",
        f"- Symbol: {r.symbol or '(unspecified)'}",
        f"- Timeframe: {s.interval} candles ({s.bars_per_day} per day)",
        f"- Backtest window: {r.days} days",
        f"- Position sizing: {ctx.sizing.describe(r.sizing_mode)}",
    ]


def _data_requirement(ctx: RenderContext) -> list[str]:
    s = ctx.settings
    return [
        "## 1. Data requirement",
        "",
        f"Fetch {s.interval} OHLCV candles for {ctx.record.symbol or 'the symbol'} from "
        f"{s.data_source}. Keep a rolling buffer of the most recent "
        f"{candle_buffer(ctx.record.strategy_params)} closed candles; evaluate only on closed "
        "candles.",
    ]


def _unknown(ctx: RenderContext) -> list[str]:
    lines = [
        f"## {UNKNOWN_TITLE}",
        "",
        f"The strategy type {ctx.record.strategy_type!r} is not in the variant registry, "
        "so no indicator formula or signal logic can be stated.",
    ]
    params = ctx.raw_params()
    if params:
        lines += ["", "Raw parameters on the record:", ""]
        lines += [f"- {k} = {v}" for k, v in params]
    return lines


def _computation(ctx: RenderContext) -> list[str]:
    assert ctx.description is not None
    lines = ["## 2. Indicator computation", "", ctx.description.setup, ""]
    lines += ["Parameters:", ""]
    lines += [
        f"- {p.name} = {p.value}: {p.description}" for p in ctx.description.parameters
    ]
    for name, text in ctx.description.sections:
        lines += ["", f"### {name}", ""]
        lines += _numbered(list(text.steps))
    return lines


def _confidence(ctx: RenderContext) -> list[str]:
    assert ctx.description is not None
    lines = ["Signal confidence (multiplies the position size):", ""]
    lines += [f"- {name}: {text.confidence_rule}" for name, text in ctx.description.sections]
    lines.append(f"- Then {CONFIDENCE_CLAMP}.")
    return lines


def _signal_logic(ctx: RenderContext) -> list[str]:
    assert ctx.description is not None
    lines = ["## 3. Signal logic", ""]
    for name, text in ctx.description.sections:
        lines += [
            f"{name}:",
            f"- BUY: {text.buy_rule}",
            f"- SELL: {text.sell_rule}",
            f"- HOLD: {text.hold_rule}",
            "",
        ]
    if ctx.description.composition is not None:
        lines += [f"Composition: {ctx.description.composition}", ""]
    if ctx.record.sizing_mode == SizingMode.CONFIDENCE_WEIGHTED:
        lines += _confidence(ctx) + [""]
    lines.append(f"Action mapping: {signal_mapping(ctx)}.")
    return lines


def _execution(ctx: RenderContext) -> list[str]:
    lines = ["## 4. Market execution", ""]
    if ctx.is_arbitrage:
        steps = [
            "On each closed candle compute the YES and NO fills and the pair cost.",
            "If the decision is TRADE, place maker bids for equal sizes of YES and NO at their fills.",
            "Hold both legs to settlement; one side pays 1.00, locking in 1.00 - pair cost per unit.",
            "If either leg does not fill, cancel the other before the market closes.",
        ]
    else:
        steps = [
            "Hold at most one position at a time.",
            "On BUY while flat, buy YES shares sized by the position sizing rule.",
            "On SELL while holding, sell the position at the market.",
            "Price each fill with p = clamp(0.5 + change% x 0.05, 0.05, 0.95), where change% "
            "is the move of the underlying since the first candle of the session.",
        ]
    return lines + _numbered(steps)


def _fees(ctx: RenderContext) -> list[str]:
    if ctx.is_arbitrage:
        charge = (
            "Charge the fee once per leg: on the YES size at the YES fill and on the NO size "
            "at the NO fill. There is no exit leg; subtract both fees from the locked profit."
        )
    else:
        charge = (
            "Charge the fee on every entry and every exit; subtract it from equity before "
            "computing P&L."
        )
    return ["## 5. Fees", "", ctx.fees.describe(), charge]


def _risk(ctx: RenderContext) -> list[str]:
    t = ctx.thresholds
    return [
        "## 6. Risk management",
        "",
        f"- Circuit breaker: stop trading when drawdown exceeds "
        f"{t.circuit_breaker_drawdown_pct:.2f}% (1.5 x backtest max drawdown of "
        f"{t.observed_drawdown_pct:.2f}%).",
        f"- Loss streak: stop after {t.consecutive_loss_limit} consecutive losses "
        f"(backtest max {t.observed_consecutive_losses}).",
        f"- Sizing: {ctx.sizing.describe(ctx.record.sizing_mode)}",
    ]


def _control_loop(ctx: RenderContext) -> list[str]:
    return ["## 7. Control loop", ""] + _numbered(
        [
            f"Every {ctx.settings.poll_seconds} seconds poll for newly closed candles.",
            "Append them to the buffer and drop the oldest beyond its size.",
            "Recompute the indicators and evaluate the signal on the latest candle.",
            "Check the risk limits; if a breaker has tripped, do not trade.",
            "Execute the resulting action and record fills, fees and P&L.",
        ],
    )


def _statistics(ctx: RenderContext) -> list[str]:
    st = ctx.record.stats
    lines = [
        "## 8. Backtest statistics",
        "",
        f"- Net P&L: {st.net_pnl:.2f}",
        f"- Win rate: {st.win_rate:.2f}%",
        f"- Sharpe ratio: {st.sharpe_ratio:.2f}",
        f"- Sortino ratio: {st.sortino_ratio:.2f}",
        f"- Max drawdown: {st.max_drawdown_pct:.2f}%",
        f"- Total trades: {st.total_trades}",
        f"- Profit factor: {st.profit_factor:.2f}",
        f"- Annualized return: {st.annualized_return_pct:.2f}%",
        f"- Strategy confidence: {st.strategy_confidence:.2f}",
        f"- Max consecutive losses: {st.max_consecutive_losses}",
        f"- Average trade P&L: {st.avg_trade_pnl:.4f}",
        f"- Total fees: {st.total_fees:.4f}",
    ]
    if st.hit_rate is not None:
        lines.append(f"- Hit rate: {st.hit_rate:.2f}%")
    if st.avg_locked_profit is not None:
        lines.append(f"- Average locked profit: {st.avg_locked_profit:.4f}")
    return lines


def render_document(
    record: StrategyRecord, settings: CompilerSettings | None = None,
) -> str:
    ctx = build_context(record, settings)
    parts = [_header(ctx), _data_requirement(ctx)]
    if ctx.description is None:
        parts.append(_unknown(ctx))
    else:
        parts += [_computation(ctx), _signal_logic(ctx), _execution(ctx), _fees(ctx), _risk(ctx)]
        parts.append(_control_loop(ctx))
    parts.append(_statistics(ctx))
    return "\n\n".join("\n".join(p) for p in parts) + "\n"
