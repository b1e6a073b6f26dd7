"""Risk thresholds and position sizing derived from backtest statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import assert_never

from stratspec.core.config import CompilerSettings
from stratspec.core.records import BacktestStats
from stratspec.core.types import SizingMode


@dataclass(frozen=True)
class RiskThresholds:
    observed_drawdown_pct: float
    circuit_breaker_drawdown_pct: float
    observed_consecutive_losses: int
    consecutive_loss_limit: int


@dataclass(frozen=True)
class RiskPolicy:
    """Circuit-breaker rules scaled from what the backtest actually saw."""

    drawdown_multiplier: float = 1.5
    loss_streak_buffer: int = 3
    min_loss_streak_limit: int = 10

    def derive(self, stats: BacktestStats) -> RiskThresholds:
        return RiskThresholds(
            observed_drawdown_pct=stats.max_drawdown_pct,
            circuit_breaker_drawdown_pct=stats.max_drawdown_pct * self.drawdown_multiplier,
            observed_consecutive_losses=stats.max_consecutive_losses,
            consecutive_loss_limit=max(
                stats.max_consecutive_losses + self.loss_streak_buffer,
                self.min_loss_streak_limit,
            ),
        )


@dataclass(frozen=True)
class SizingPolicy:
    settings: CompilerSettings = field(default_factory=CompilerSettings)

    def describe(self, mode: SizingMode) -> str:
        base = f"{self.settings.base_position_pct:g}%"
        match mode:
            case SizingMode.FIXED:
                return f"Fixed: {base} of equity per entry."
            case SizingMode.KELLY:
                return (
                    "Kelly: f = (p x b - q) / b from a rolling window of closed trades "
                    "(p = win rate, q = 1 - p, b = average win / average loss), clamped to "
                    f"[0%, {self.settings.kelly_cap_pct:g}%]. Uses {base} until at least "
                    f"{self.settings.kelly_min_trades} trades have closed and an average loss exists."
                )
            case SizingMode.CONFIDENCE_WEIGHTED:
                return (
                    f"Confidence-weighted: {base} of equity x signal confidence "
                    "(0.3 to 1 on a BUY; see the signal confidence rules)."
                )
            case _:
                assert_never(mode)

    def position_pct(
        self,
        mode: SizingMode,
        *,
        wins: int = 0,
        total: int = 0,
        avg_win: float = 0.0,
        avg_loss: float = 0.0,
        confidence: float = 1.0,
    ) -> float:
        """Percent of equity to commit to the next entry."""
        base = self.settings.base_position_pct
        match mode:
            case SizingMode.FIXED:
                return base
            case SizingMode.KELLY:
                if total < self.settings.kelly_min_trades or avg_loss <= 0:
                    return base
                p = wins / total
                b = avg_win / avg_loss
                if b <= 0:
                    return 0.0
                kelly = (p * b - (1.0 - p)) / b * 100.0
                return max(0.0, min(self.settings.kelly_cap_pct, kelly))
            case SizingMode.CONFIDENCE_WEIGHTED:
                return base * confidence
            case _:
                assert_never(mode)
