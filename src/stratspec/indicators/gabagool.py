"""Gabagool: pair-cost arbitrage on a binary YES/NO market.

Each candle is turned into synthetic YES and NO mids, both sides are bid
just below their mids, and the pair is bought only when the two fills cost
strictly less than ``max_pair_cost``. One side always settles at 1.00, so
``1 - pair_cost`` per unit is locked in whichever way the market resolves.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

import pandas as pd

from stratspec.core.types import IndicatorKind
from stratspec.indicators.base import FormulaText, actions, label

MOVE_SCALE = 5.0
MAX_SKEW = 0.40
MIN_SPREAD = 0.02
MAX_SPREAD = 0.10
MIN_FILL = 0.05
MAX_FILL = 0.95


class PairDecision(StrEnum):
    TRADE = "TRADE"
    SKIP = "SKIP"


@dataclass(frozen=True)
class GabagoolQuote:
    yes_mid: float
    no_mid: float
    spread: float
    yes_fill: float
    no_fill: float

    @property
    def pair_cost(self) -> float:
        return self.yes_fill + self.no_fill


@dataclass(frozen=True)
class GabagoolDecision:
    decision: PairDecision
    pair_cost: float
    locked_profit: float


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def quote(
    open_: float,
    high: float,
    low: float,
    close: float,
    spread_multiplier: float = 3.0,
    bid_offset: float = 0.01,
) -> GabagoolQuote:
    """Price both sides of the binary market from one candle."""
    if open_ > 0:
        price_change = (close - open_) / open_
        volatility = (high - low) / open_
    else:
        price_change = 0.0
        volatility = 0.0
    yes_mid = 0.5 + _clamp(price_change * MOVE_SCALE, -MAX_SKEW, MAX_SKEW)
    no_mid = 1.0 - yes_mid
    spread = _clamp(volatility * spread_multiplier, MIN_SPREAD, MAX_SPREAD)
    yes_fill = _clamp(yes_mid - spread / 2 - bid_offset, MIN_FILL, MAX_FILL)
    no_fill = _clamp(no_mid - spread / 2 - bid_offset, MIN_FILL, MAX_FILL)
    return GabagoolQuote(yes_mid, no_mid, spread, yes_fill, no_fill)


def evaluate_pair(pair_cost: float, max_pair_cost: float = 0.98) -> GabagoolDecision:
    """TRADE only when *pair_cost* is strictly below *max_pair_cost*."""
    if pair_cost < max_pair_cost:
        return GabagoolDecision(PairDecision.TRADE, pair_cost, 1.0 - pair_cost)
    return GabagoolDecision(PairDecision.SKIP, pair_cost, 0.0)


class Gabagool:
    """Vectorized form of :func:`quote` and :func:`evaluate_pair`."""

    name = "Gabagool"
    kind = IndicatorKind.GABAGOOL

    def compute(
        self,
        mktdata: pd.DataFrame,
        max_pair_cost: float = 0.98,
        bid_offset: float = 0.01,
        spread_multiplier: float = 3.0,
    ) -> pd.DataFrame:
        open_ = mktdata["open"]
        valid = open_ > 0.0
        price_change = ((mktdata["close"] - open_) / open_).where(valid, 0.0)
        volatility = ((mktdata["high"] - mktdata["low"]) / open_).where(valid, 0.0)
        yes_mid = 0.5 + (price_change * MOVE_SCALE).clip(-MAX_SKEW, MAX_SKEW)
        no_mid = 1.0 - yes_mid
        spread = (volatility * spread_multiplier).clip(MIN_SPREAD, MAX_SPREAD)
        yes_fill = (yes_mid - spread / 2 - bid_offset).clip(MIN_FILL, MAX_FILL)
        no_fill = (no_mid - spread / 2 - bid_offset).clip(MIN_FILL, MAX_FILL)
        pair_cost = yes_fill + no_fill
        trade = pair_cost < max_pair_cost
        return pd.DataFrame(
            {
                "price_change": price_change,
                "volatility": volatility,
                "yes_mid": yes_mid,
                "no_mid": no_mid,
                "spread": spread,
                "yes_fill": yes_fill,
                "no_fill": no_fill,
                "pair_cost": pair_cost,
                "trade": trade,
                "locked_profit": (1.0 - pair_cost).where(trade, 0.0),
            },
            index=mktdata.index,
        )

    def signal(
        self,
        mktdata: pd.DataFrame,
        max_pair_cost: float = 0.98,
        bid_offset: float = 0.01,
        spread_multiplier: float = 3.0,
    ) -> pd.Series:
        trade = self.compute(mktdata, max_pair_cost, bid_offset, spread_multiplier)["trade"]
        return actions(trade, pd.Series(False, index=mktdata.index))

    def describe(self, labels: Mapping[str, str]) -> FormulaText:
        max_pair_cost = label(labels, "max_pair_cost")
        bid_offset = label(labels, "bid_offset")
        spread_multiplier = label(labels, "spread_multiplier")
        return FormulaText(
            setup=(
                f"Gabagool pair-cost arbitrage: bid both YES and NO below mid ({bid_offset}), "
                f"spread scaled by candle volatility ({spread_multiplier}), and buy the pair "
                f"only when YES fill + NO fill < {max_pair_cost}."
            ),
            steps=(
                "priceChange = (close - open) / open; volatility = (high - low) / open",
                f"YES mid = 0.5 + clamp(priceChange x {MOVE_SCALE:g}, -{MAX_SKEW:.2f}, "
                f"{MAX_SKEW:.2f}); NO mid = 1 - YES mid",
                f"spread = clamp(volatility x spread_multiplier, {MIN_SPREAD:.2f}, "
                f"{MAX_SPREAD:.2f}), {spread_multiplier}",
                f"fill = clamp(mid - spread / 2 - bid_offset, {MIN_FILL:.2f}, {MAX_FILL:.2f}) "
                f"for each side, {bid_offset}",
                "pairCost = YES fill + NO fill",
                "locked profit = 1.00 - pairCost per unit, realized whichever side wins",
            ),
            buy_rule=f"TRADE (buy YES and NO) when pairCost < {max_pair_cost} (strict)",
            sell_rule="never; both legs are held to settlement",
            hold_rule=f"SKIP when pairCost >= {max_pair_cost}",
            confidence_rule="not used; both legs are always the same size",
        )
