"""Table mode: one row per parameter or policy fact."""

from __future__ import annotations

from dataclasses import dataclass

from stratspec.core.config import CompilerSettings
from stratspec.core.records import StrategyRecord
from stratspec.render.context import UNKNOWN_TITLE, build_context, signal_mapping


@dataclass(frozen=True)
class TableRow:
    parameter: str
    value: str
    description: str


def render_table(
    record: StrategyRecord, settings: CompilerSettings | None = None,
) -> list[TableRow]:
    ctx = build_context(record, settings)
    s = ctx.settings
    rows = [
        TableRow("strategy_name", record.strategy_name, "Name assigned by the discovery run"),
        TableRow("strategy_type", ctx.type_label, "Strategy variant"),
        TableRow("market", s.market, "Market the bot trades"),
        TableRow("symbol", record.symbol, "Underlying whose candles drive the signal"),
        TableRow("timeframe", s.interval, f"Candle interval ({s.bars_per_day} bars per day)"),
        TableRow("data_source", s.data_source, "OHLCV candle feed"),
        TableRow("sizing_mode", str(record.sizing_mode), ctx.sizing.describe(record.sizing_mode)),
    ]
    if ctx.description is None:
        rows.append(
            TableRow(
                "unknown_variant", record.strategy_type,
                f"{UNKNOWN_TITLE}; no formula is available",
            ),
        )
        rows.extend(TableRow(k, v, "Raw record parameter") for k, v in ctx.raw_params())
    else:
        rows.extend(
            TableRow(line.name, line.value, line.description)
            for line in ctx.description.parameters
        )
        if ctx.description.composition is not None:
            rows.append(
                TableRow("composition_mode", str(ctx.variant.mode), ctx.description.composition),
            )
    rows.extend(
        [
            TableRow("signal_mapping", signal_mapping(ctx), "How actions become orders"),
            TableRow("fee_model", "taker", ctx.fees.describe()),
            TableRow(
                "circuit_breaker_drawdown_pct",
                f"{ctx.thresholds.circuit_breaker_drawdown_pct:.2f}",
                f"Halt when drawdown exceeds 1.5 x backtest max drawdown "
                f"({ctx.thresholds.observed_drawdown_pct:.2f}%)",
            ),
            TableRow(
                "consecutive_loss_limit",
                str(ctx.thresholds.consecutive_loss_limit),
                f"Halt after this many losses in a row (backtest max "
                f"{ctx.thresholds.observed_consecutive_losses} + 3, at least 10)",
            ),
        ],
    )
    return rows


def format_table(rows: list[TableRow]) -> str:
    """Aligned plain-text table for export."""
    header = TableRow("Parameter", "Value", "Description")
    everything = [header, *rows]
    name_width = max(len(r.parameter) for r in everything)
    value_width = max(len(r.value) for r in everything)
    lines = []
    for row in everything:
        lines.append(
            f"{row.parameter:<{name_width}}  {row.value:<{value_width}}  {row.description}".rstrip(),
        )
        if row is header:
            lines.append(f"{'-' * name_width}  {'-' * value_width}  {'-' * len(header.description)}")
    return "\n".join(lines)
