"""Spec tools: list variants, describe them, render records, quote fees."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from stratspec.core.logging import get_logger
from stratspec.core.records import BacktestStats, StrategyRecord, normalize_params
from stratspec.core.types import VariantDescriptor
from stratspec.indicators import describe_variant, evaluate_pair, quote
from stratspec.policy import FeeModel, RiskPolicy, estimate_probability
from stratspec.registry import all_variants, resolve
from stratspec.render import format_table, render_document, render_table
from stratspec.tools.registry import registry

logger = get_logger(__name__)


def _variant_summary(d: VariantDescriptor) -> dict[str, Any]:
    return {
        "tag": d.tag,
        "display_name": d.display_name,
        "kind": str(d.kind),
        "components": [str(k) for k in d.components],
        "mode": str(d.mode) if d.mode is not None else None,
        "params": [
            {"name": p.name, "aliases": list(p.aliases), "description": p.description}
            for p in d.params
        ],
    }


@registry.tool(
    name="spec_list_variants",
    description="List every known strategy type with its components, composition mode and parameters.",
)
def spec_list_variants() -> dict[str, Any]:
    variants = [_variant_summary(d) for d in all_variants()]
    return {"variants": variants, "count": len(variants)}


@registry.tool(
    name="spec_describe_variant",
    description=(
        "Describe the formulas of one strategy type. "
        "Optional params (flat or wrapped as {type: {...}}) are filled into the text."
    ),
)
def spec_describe_variant(
    strategy_type: str, params: dict[str, Any] | str | None = None,
) -> dict[str, Any]:
    variant = resolve(strategy_type)
    if not isinstance(variant, VariantDescriptor):
        return {"strategy_type": strategy_type, "known": False}
    description = describe_variant(variant, normalize_params(params))
    return {
        "strategy_type": variant.tag,
        "known": True,
        "title": description.title,
        "setup": description.setup,
        "composition": description.composition,
        "parameters": [asdict(p) for p in description.parameters],
        "components": [
            {"name": name, **asdict(text)} for name, text in description.sections
        ],
    }


@registry.tool(
    name="spec_render_table",
    description="Compile a strategy record (JSON object) into parameter table rows.",
)
def spec_render_table(record: dict[str, Any]) -> dict[str, Any]:
    parsed = StrategyRecord.from_dict(record)
    rows = render_table(parsed)
    logger.info("rendered table", strategy_type=parsed.strategy_type, rows=len(rows))
    return {
        "strategy_type": parsed.strategy_type,
        "known": isinstance(resolve(parsed.strategy_type), VariantDescriptor),
        "rows": [asdict(r) for r in rows],
        "text": format_table(rows),
    }


@registry.tool(
    name="spec_render_document",
    description="Compile a strategy record (JSON object) into a step-by-step bot build document.",
)
def spec_render_document(record: dict[str, Any]) -> dict[str, Any]:
    parsed = StrategyRecord.from_dict(record)
    document = render_document(parsed)
    logger.info("rendered document", strategy_type=parsed.strategy_type, chars=len(document))
    return {
        "strategy_type": parsed.strategy_type,
        "known": isinstance(resolve(parsed.strategy_type), VariantDescriptor),
        "document": document,
    }


@registry.tool(
    name="spec_risk_thresholds",
    description="Derive circuit-breaker thresholds from a backtest's max drawdown and loss streak.",
)
def spec_risk_thresholds(
    max_drawdown_pct: float, max_consecutive_losses: int = 0,
) -> dict[str, Any]:
    stats = BacktestStats.from_dict(
        {"max_drawdown_pct": max_drawdown_pct, "max_consecutive_losses": max_consecutive_losses},
    )
    return asdict(RiskPolicy().derive(stats))


@registry.tool(
    name="spec_fee_quote",
    description=(
        "Quote the taker fee for a number of contracts. Give price directly, or "
        "entry_price and current_price of the underlying to estimate it."
    ),
)
def spec_fee_quote(
    contracts: float,
    price: float | None = None,
    entry_price: float | None = None,
    current_price: float | None = None,
) -> dict[str, Any]:
    if price is None:
        if entry_price is None or current_price is None:
            return {"error": "Provide 'price', or both 'entry_price' and 'current_price'."}
        price = estimate_probability(entry_price, current_price)
    model = FeeModel()
    return {
        "contracts": contracts,
        "price": price,
        "fee": model.fee(contracts, price),
        "charged_fee": model.charged_fee(contracts, price),
    }


@registry.tool(
    name="spec_gabagool_quote",
    description="Price both sides of the binary market from one candle and decide TRADE or SKIP.",
)
def spec_gabagool_quote(
    open: float,
    high: float,
    low: float,
    close: float,
    max_pair_cost: float = 0.98,
    bid_offset: float = 0.01,
    spread_multiplier: float = 3.0,
) -> dict[str, Any]:
    q = quote(open, high, low, close, spread_multiplier=spread_multiplier, bid_offset=bid_offset)
    decision = evaluate_pair(q.pair_cost, max_pair_cost)
    return {
        **asdict(q),
        "pair_cost": q.pair_cost,
        "decision": str(decision.decision),
        "locked_profit": decision.locked_profit,
    }
