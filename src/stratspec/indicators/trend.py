"""Trend indicators: EMA crossover and ADX."""

from __future__ import annotations

from collections.abc import Mapping

import pandas as pd

from stratspec.core.types import IndicatorKind
from stratspec.indicators.base import FormulaText, actions, bars_seen, label
from stratspec.indicators.sma import ema, wilder
from stratspec.indicators.volatility import true_range
from stratspec.signals.crossover import Crossover


class EMACrossover:
    """Golden cross (fast above slow) buys, death cross sells."""

    name = "EMA Crossover"
    kind = IndicatorKind.EMA_CROSSOVER

    def compute(
        self, mktdata: pd.DataFrame, fast_period: float = 10, slow_period: float = 26,
    ) -> pd.DataFrame:
        close = mktdata["close"]
        return pd.DataFrame(
            {"ema_fast": ema(close, fast_period), "ema_slow": ema(close, slow_period)},
            index=mktdata.index,
        )

    def signal(
        self, mktdata: pd.DataFrame, fast_period: float = 10, slow_period: float = 26,
    ) -> pd.Series:
        lines = self.compute(mktdata, fast_period, slow_period)
        cross = Crossover().compute(lines, fast="ema_fast", slow="ema_slow")
        warm = bars_seen(mktdata) > int(slow_period)
        return actions(warm & (cross == 1), warm & (cross == -1))

    def describe(self, labels: Mapping[str, str]) -> FormulaText:
        fast = label(labels, "fast_period")
        slow = label(labels, "slow_period")
        return FormulaText(
            setup=f"EMA crossover of {fast} over {slow}; golden cross BUY, death cross SELL.",
            steps=(
                f"fast = EMA(close, {fast}), slow = EMA(close, {slow}), alpha = 2/(span+1)",
                f"ignore crosses during the first {slow} bars (warmup)",
            ),
            buy_rule="golden cross: fast <= slow on the previous bar and fast > slow now",
            sell_rule="death cross: fast >= slow on the previous bar and fast < slow now",
            confidence_rule="|fast - slow| / slow x 100",
        )


class ADX:
    """Average Directional Index; direction from DI, permission from ADX strength."""

    name = "ADX"
    kind = IndicatorKind.ADX

    def compute(
        self, mktdata: pd.DataFrame, period: float = 14, adx_threshold: float = 25.0,
    ) -> pd.DataFrame:
        high = mktdata["high"]
        low = mktdata["low"]
        has_prev = mktdata["close"].shift(1).notna()
        up = high - high.shift(1)
        down = low.shift(1) - low
        plus_dm = up.where((up > down) & (up > 0.0), 0.0).where(has_prev)
        minus_dm = down.where((down > up) & (down > 0.0), 0.0).where(has_prev)
        tr = wilder(true_range(mktdata).where(has_prev), period)
        tr = tr.where(tr > 0.0)
        plus_di = 100.0 * wilder(plus_dm, period) / tr
        minus_di = 100.0 * wilder(minus_dm, period) / tr
        di_sum = plus_di + minus_di
        dx = (100.0 * (plus_di - minus_di).abs() / di_sum).mask(di_sum == 0.0, 0.0)
        return pd.DataFrame(
            {"plus_di": plus_di, "minus_di": minus_di, "adx": wilder(dx, period)},
            index=mktdata.index,
        )

    def signal(
        self, mktdata: pd.DataFrame, period: float = 14, adx_threshold: float = 25.0,
    ) -> pd.Series:
        lines = self.compute(mktdata, period, adx_threshold)
        strong = lines["adx"] > adx_threshold
        return actions(
            strong & (lines["plus_di"] > lines["minus_di"]),
            strong & (lines["minus_di"] > lines["plus_di"]),
        )

    def describe(self, labels: Mapping[str, str]) -> FormulaText:
        period = label(labels, "period")
        threshold = label(labels, "adx_threshold")
        return FormulaText(
            setup=(
                f"ADX trend filter over {period}; trade only when ADX > {threshold}, "
                "in the direction of the dominant DI."
            ),
            steps=(
                "up = high - prev high, down = prev low - low",
                "+DM = up if up > down and up > 0 else 0; -DM = down if down > up and down > 0 else 0",
                "TR = max(high - low, |high - prev close|, |low - prev close|)",
                f"smooth TR, +DM, -DM with EMA alpha = 1/period, {period}",
                "+DI = 100 x smoothed +DM / smoothed TR; -DI = 100 x smoothed -DM / smoothed TR",
                "DX = 100 x |+DI - -DI| / (+DI + -DI), 0 when both DI are 0",
                "ADX = EMA of DX with the same alpha",
            ),
            buy_rule=f"ADX > {threshold} and +DI > -DI",
            sell_rule=f"ADX > {threshold} and -DI > +DI",
            hold_rule=f"ADX <= {threshold} (weak trend) or +DI = -DI",
            confidence_rule="min(ADX / 100, 1)",
        )
