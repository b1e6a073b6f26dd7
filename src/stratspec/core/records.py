"""Strategy records produced by the discovery/backtest service.

Records arrive JSON-shaped with decimals serialized as strings and with
``strategy_params`` either flat, wrapped as ``{"<type>": {...}}`` or still
JSON-encoded text. Ingestion here is total: bad fields fall back to their
defaults and never raise.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from stratspec.core.logging import get_logger
from stratspec.core.types import SizingMode

logger = get_logger(__name__)


def to_number(value: Any) -> float | None:
    """Coerce ints, floats and decimal strings to float; anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _numeric_items(obj: Mapping[str, Any]) -> dict[str, float]:
    result: dict[str, float] = {}
    for key, value in obj.items():
        number = to_number(value)
        if number is not None:
            result[str(key)] = number
    return result


def normalize_params(raw: Any) -> dict[str, float]:
    """Normalize a raw ``strategy_params`` value to a flat numeric mapping.

    >>> normalize_params('{"macd": {"fast": 12, "slow": 26}}')
    {'fast': 12.0, 'slow': 26.0}
    """
    obj = raw
    if isinstance(raw, (str, bytes)):
        try:
            obj = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("strategy_params is not valid JSON", raw=str(raw)[:80])
            return {}
    if not isinstance(obj, Mapping):
        if obj is not None:
            logger.warning("strategy_params is not an object", kind=type(obj).__name__)
        return {}
    if len(obj) == 1:
        (inner,) = obj.values()
        if isinstance(inner, Mapping):
            obj = inner
    return _numeric_items(obj)


@dataclass(frozen=True)
class BacktestStats:
    """Performance statistics attached to a record by the backtest service."""

    net_pnl: float = 0.0
    win_rate: float = 0.0
    sharpe_ratio: float = 0.0
    sortino_ratio: float = 0.0
    max_drawdown_pct: float = 0.0
    total_trades: int = 0
    profit_factor: float = 0.0
    annualized_return_pct: float = 0.0
    strategy_confidence: float = 0.0
    max_consecutive_losses: int = 0
    avg_trade_pnl: float = 0.0
    total_fees: float = 0.0
    # Arbitrage variants only
    hit_rate: float | None = None
    avg_locked_profit: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BacktestStats:
        def num(key: str) -> float:
            value = to_number(data.get(key))
            return value if value is not None else 0.0

        def count(key: str) -> int:
            return int(num(key))

        return cls(
            net_pnl=num("net_pnl"),
            win_rate=num("win_rate"),
            sharpe_ratio=num("sharpe_ratio"),
            sortino_ratio=num("sortino_ratio"),
            max_drawdown_pct=num("max_drawdown_pct"),
            total_trades=count("total_trades"),
            profit_factor=num("profit_factor"),
            annualized_return_pct=num("annualized_return_pct"),
            strategy_confidence=num("strategy_confidence"),
            max_consecutive_losses=count("max_consecutive_losses"),
            avg_trade_pnl=num("avg_trade_pnl"),
            total_fees=num("total_fees"),
            hit_rate=to_number(data.get("hit_rate")),
            avg_locked_profit=to_number(data.get("avg_locked_profit")),
        )


_SIZING_ALIASES = {
    "fixed": SizingMode.FIXED,
    "kelly": SizingMode.KELLY,
    "confidence_weighted": SizingMode.CONFIDENCE_WEIGHTED,
    "confidenceweighted": SizingMode.CONFIDENCE_WEIGHTED,
}


def parse_sizing_mode(value: Any) -> SizingMode:
    """Accept snake_case or the service's Debug spelling (``ConfidenceWeighted``)."""
    if isinstance(value, SizingMode):
        return value
    key = str(value or "").strip().lower()
    return _SIZING_ALIASES.get(key, SizingMode.FIXED)


@dataclass(frozen=True)
class StrategyRecord:
    """Read-only strategy record; the compiler never mutates or persists it."""

    strategy_name: str
    strategy_type: str
    strategy_params: dict[str, float] = field(default_factory=dict)
    symbol: str = ""
    days: int = 0
    sizing_mode: SizingMode = SizingMode.FIXED
    stats: BacktestStats = field(default_factory=BacktestStats)

    def __post_init__(self) -> None:
        object.__setattr__(self, "strategy_params", normalize_params(self.strategy_params))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StrategyRecord:
        """Build a record from a service row; statistics are read from the same mapping."""
        days = to_number(data.get("days"))
        return cls(
            strategy_name=str(data.get("strategy_name") or ""),
            strategy_type=str(data.get("strategy_type") or ""),
            strategy_params=normalize_params(data.get("strategy_params")),
            symbol=str(data.get("symbol") or ""),
            days=int(days) if days is not None else 0,
            sizing_mode=parse_sizing_mode(data.get("sizing_mode")),
            stats=BacktestStats.from_dict(data),
        )
