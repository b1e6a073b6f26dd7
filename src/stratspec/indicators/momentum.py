"""Oscillators: RSI, MACD, Stochastic and Williams %R."""

from __future__ import annotations

from collections.abc import Mapping

import pandas as pd

from stratspec.core.types import IndicatorKind
from stratspec.indicators.base import FormulaText, actions, bars_seen, label
from stratspec.indicators.sma import ema, wilder
from stratspec.signals.crossover import Crossover


class RSI:
    """Relative Strength Index with Wilder smoothing.

    When the average loss is zero RSI is defined as 100, so a series that
    only rises reads 100 and one that only falls reads 0.
    """

    name = "RSI"
    kind = IndicatorKind.RSI

    def compute(
        self,
        mktdata: pd.DataFrame,
        period: float = 14,
        overbought: float = 70.0,
        oversold: float = 30.0,
    ) -> pd.DataFrame:
        delta = mktdata["close"].diff()
        avg_gain = wilder(delta.clip(lower=0.0), period)
        avg_loss = wilder((-delta).clip(lower=0.0), period)
        rsi = 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)
        rsi = rsi.mask(avg_loss == 0.0, 100.0)
        return pd.DataFrame({"rsi": rsi}, index=mktdata.index)

    def signal(
        self,
        mktdata: pd.DataFrame,
        period: float = 14,
        overbought: float = 70.0,
        oversold: float = 30.0,
    ) -> pd.Series:
        rsi = self.compute(mktdata, period, overbought, oversold)["rsi"]
        return actions(rsi < oversold, rsi > overbought)

    def describe(self, labels: Mapping[str, str]) -> FormulaText:
        period = label(labels, "period")
        overbought = label(labels, "overbought")
        oversold = label(labels, "oversold")
        return FormulaText(
            setup=(
                f"RSI of closes over {period}; BUY when RSI < {oversold}, "
                f"SELL when RSI > {overbought}."
            ),
            steps=(
                "delta = close - previous close; gain = max(delta, 0); loss = max(-delta, 0)",
                f"avg_gain, avg_loss = Wilder averages (alpha = 1/period) of gain and loss, {period}",
                "RSI = 100 - 100 / (1 + avg_gain / avg_loss); RSI = 100 when avg_loss = 0",
            ),
            buy_rule=f"RSI < {oversold} (oversold)",
            sell_rule=f"RSI > {overbought} (overbought)",
            confidence_rule=(
                f"BUY: (oversold - RSI) / oversold, {oversold}; "
                f"SELL: (RSI - overbought) / (100 - overbought), {overbought}"
            ),
        )


class MACD:
    """Moving Average Convergence Divergence; trades histogram sign changes."""

    name = "MACD"
    kind = IndicatorKind.MACD

    def compute(
        self,
        mktdata: pd.DataFrame,
        fast: float = 12,
        slow: float = 26,
        signal: float = 9,
    ) -> pd.DataFrame:
        close = mktdata["close"]
        macd = ema(close, fast) - ema(close, slow)
        macd_signal = ema(macd, signal)
        return pd.DataFrame(
            {"macd": macd, "macd_signal": macd_signal, "histogram": macd - macd_signal},
            index=mktdata.index,
        )

    def signal(
        self,
        mktdata: pd.DataFrame,
        fast: float = 12,
        slow: float = 26,
        signal: float = 9,
    ) -> pd.Series:
        lines = self.compute(mktdata, fast, slow, signal)
        cross = Crossover().compute(lines, fast="macd", slow="macd_signal")
        warm = bars_seen(mktdata) > int(slow)
        return actions(warm & (cross == 1), warm & (cross == -1))

    def describe(self, labels: Mapping[str, str]) -> FormulaText:
        fast = label(labels, "fast")
        slow = label(labels, "slow")
        signal = label(labels, "signal")
        return FormulaText(
            setup=(
                f"MACD with {fast}, {slow}, {signal}; trade when the histogram "
                "changes sign between consecutive bars."
            ),
            steps=(
                f"MACD line = EMA(close, {fast}) - EMA(close, {slow}), EMA alpha = 2/(span+1)",
                f"signal line = EMA(MACD line, {signal})",
                "histogram = MACD line - signal line",
                f"ignore crossings during the first {slow} bars (warmup)",
            ),
            buy_rule="histogram moves from <= 0 on the previous bar to > 0 on this bar",
            sell_rule="histogram moves from >= 0 on the previous bar to < 0 on this bar",
            confidence_rule="|histogram| / close x 1000",
        )


def _range_position(mktdata: pd.DataFrame, period: float) -> tuple[pd.Series, pd.Series]:
    """Return (highest high, range) over *period*; a zero range becomes NaN."""
    period = int(period)
    highest = mktdata["high"].rolling(period).max()
    lowest = mktdata["low"].rolling(period).min()
    span = highest - lowest
    return highest, span.where(span > 0.0)


class Stochastic:
    """Stochastic oscillator; a flat window leaves %K undefined and the bar holds."""

    name = "Stochastic"
    kind = IndicatorKind.STOCHASTIC

    def compute(
        self,
        mktdata: pd.DataFrame,
        period: float = 14,
        overbought: float = 80.0,
        oversold: float = 20.0,
    ) -> pd.DataFrame:
        highest, span = _range_position(mktdata, period)
        lowest = highest - span
        k = 100.0 * (mktdata["close"] - lowest) / span
        d = k.rolling(3).mean()
        return pd.DataFrame({"k": k, "d": d}, index=mktdata.index)

    def signal(
        self,
        mktdata: pd.DataFrame,
        period: float = 14,
        overbought: float = 80.0,
        oversold: float = 20.0,
    ) -> pd.Series:
        lines = self.compute(mktdata, period, overbought, oversold)
        cross = Crossover().compute(lines, fast="k", slow="d", strict=True)
        k = lines["k"]
        warm = bars_seen(mktdata) > int(period)
        return actions(
            warm & (cross == 1) & (k < oversold),
            warm & (cross == -1) & (k > overbought),
        )

    def describe(self, labels: Mapping[str, str]) -> FormulaText:
        period = label(labels, "period")
        overbought = label(labels, "overbought")
        oversold = label(labels, "oversold")
        return FormulaText(
            setup=(
                f"Stochastic %K/%D over {period}; BUY on a bullish %K/%D cross below "
                f"{oversold}, SELL on a bearish cross above {overbought}."
            ),
            steps=(
                f"HH = highest high, LL = lowest low of the last bars, {period}",
                "%K = 100 x (close - LL) / (HH - LL); if HH = LL, %K is undefined and the bar is HOLD",
                "%D = SMA(%K, 3)",
                f"ignore crosses during the first bars of the window, {period}",
            ),
            buy_rule=f"previous %K < previous %D, now %K > %D, and %K < {oversold}",
            sell_rule=f"previous %K > previous %D, now %K < %D, and %K > {overbought}",
            confidence_rule=(
                f"BUY: (oversold - %K) / oversold, {oversold}; "
                f"SELL: (%K - overbought) / (100 - overbought), {overbought}"
            ),
        )


class WilliamsR:
    """Williams %R in [-100, 0]; same flat-window rule as the Stochastic."""

    name = "Williams %R"
    kind = IndicatorKind.WILLIAMS_R

    def compute(
        self,
        mktdata: pd.DataFrame,
        period: float = 14,
        overbought: float = -20.0,
        oversold: float = -80.0,
    ) -> pd.DataFrame:
        highest, span = _range_position(mktdata, period)
        wr = -100.0 * (highest - mktdata["close"]) / span
        return pd.DataFrame({"williams_r": wr}, index=mktdata.index)

    def signal(
        self,
        mktdata: pd.DataFrame,
        period: float = 14,
        overbought: float = -20.0,
        oversold: float = -80.0,
    ) -> pd.Series:
        wr = self.compute(mktdata, period, overbought, oversold)["williams_r"]
        return actions(wr < oversold, wr > overbought)

    def describe(self, labels: Mapping[str, str]) -> FormulaText:
        period = label(labels, "period")
        overbought = label(labels, "overbought")
        oversold = label(labels, "oversold")
        return FormulaText(
            setup=(
                f"Williams %R over {period}; BUY below {oversold}, SELL above {overbought}."
            ),
            steps=(
                f"HH = highest high, LL = lowest low of the last bars, {period}",
                "%R = -100 x (HH - close) / (HH - LL); if HH = LL, %R is undefined and the bar is HOLD",
            ),
            buy_rule=f"%R < {oversold} (oversold)",
            sell_rule=f"%R > {overbought} (overbought)",
            confidence_rule=(
                f"BUY: (oversold - %R) / (100 + oversold), {oversold}; "
                f"SELL: (%R - overbought) / -overbought, {overbought}"
            ),
        )
