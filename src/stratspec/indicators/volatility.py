"""Band indicators: Bollinger Bands and ATR mean reversion."""

from __future__ import annotations

from collections.abc import Mapping

import pandas as pd

from stratspec.core.types import IndicatorKind
from stratspec.indicators.base import FormulaText, actions, label
from stratspec.indicators.sma import sma


def true_range(mktdata: pd.DataFrame) -> pd.Series:
    """max(high - low, |high - prev close|, |low - prev close|); first bar is high - low."""
    prev_close = mktdata["close"].shift(1)
    ranges = pd.concat(
        [
            mktdata["high"] - mktdata["low"],
            (mktdata["high"] - prev_close).abs(),
            (mktdata["low"] - prev_close).abs(),
        ],
        axis=1,
    )
    return ranges.max(axis=1)


class BollingerBands:
    """SMA +/- multiplier x population standard deviation (ddof=0)."""

    name = "Bollinger Bands"
    kind = IndicatorKind.BOLLINGER_BANDS

    def compute(
        self, mktdata: pd.DataFrame, period: float = 20, multiplier: float = 2.0,
    ) -> pd.DataFrame:
        close = mktdata["close"]
        middle = sma(close, period)
        std = close.rolling(int(period)).std(ddof=0)
        return pd.DataFrame(
            {
                "bb_middle": middle,
                "bb_upper": middle + multiplier * std,
                "bb_lower": middle - multiplier * std,
            },
            index=mktdata.index,
        )

    def signal(
        self, mktdata: pd.DataFrame, period: float = 20, multiplier: float = 2.0,
    ) -> pd.Series:
        bands = self.compute(mktdata, period, multiplier)
        close = mktdata["close"]
        open_band = (bands["bb_upper"] - bands["bb_lower"]) > 0.0
        return actions(
            open_band & (close < bands["bb_lower"]),
            open_band & (close > bands["bb_upper"]),
        )

    def describe(self, labels: Mapping[str, str]) -> FormulaText:
        period = label(labels, "period")
        multiplier = label(labels, "multiplier")
        return FormulaText(
            setup=(
                f"Bollinger Bands over {period} at {multiplier} standard deviations; "
                "BUY below the lower band, SELL above the upper band."
            ),
            steps=(
                f"middle = SMA(close), {period}",
                "sigma = population standard deviation (divide by N) of the same closes",
                f"upper = middle + multiplier x sigma, lower = middle - multiplier x sigma, {multiplier}",
                "if upper = lower (zero bandwidth) the bar is HOLD",
            ),
            buy_rule="close < lower band",
            sell_rule="close > upper band",
            confidence_rule=(
                "BUY: (lower - close) / (upper - lower); SELL: (close - upper) / (upper - lower)"
            ),
        )


class ATRMeanReversion:
    """Fade moves further than ``multiplier`` ATRs from the close SMA."""

    name = "ATR Mean Reversion"
    kind = IndicatorKind.ATR_MEAN_REVERSION

    def compute(
        self,
        mktdata: pd.DataFrame,
        atr_period: float = 14,
        sma_period: float = 20,
        multiplier: float = 2.0,
    ) -> pd.DataFrame:
        atr = sma(true_range(mktdata), atr_period)
        mean = sma(mktdata["close"], sma_period)
        return pd.DataFrame(
            {
                "atr": atr,
                "atr_mean": mean,
                "atr_upper": mean + multiplier * atr,
                "atr_lower": mean - multiplier * atr,
            },
            index=mktdata.index,
        )

    def signal(
        self,
        mktdata: pd.DataFrame,
        atr_period: float = 14,
        sma_period: float = 20,
        multiplier: float = 2.0,
    ) -> pd.Series:
        bands = self.compute(mktdata, atr_period, sma_period, multiplier)
        close = mktdata["close"]
        live = bands["atr"] > 0.0
        return actions(
            live & (close < bands["atr_lower"]),
            live & (close > bands["atr_upper"]),
        )

    def describe(self, labels: Mapping[str, str]) -> FormulaText:
        atr_period = label(labels, "atr_period")
        sma_period = label(labels, "sma_period")
        multiplier = label(labels, "multiplier")
        return FormulaText(
            setup=(
                f"ATR mean reversion: ATR over {atr_period}, mean = SMA over {sma_period}, "
                f"bands at {multiplier} ATRs; fade closes outside the bands."
            ),
            steps=(
                "TR = max(high - low, |high - prev close|, |low - prev close|)",
                f"ATR = SMA(TR), {atr_period}",
                f"mean = SMA(close), {sma_period}",
                f"upper = mean + multiplier x ATR, lower = mean - multiplier x ATR, {multiplier}",
                "if ATR <= 0 the bar is HOLD",
            ),
            buy_rule="close < lower bound (price stretched below the mean)",
            sell_rule="close > upper bound (price stretched above the mean)",
            confidence_rule=f"|close - mean| / (multiplier x ATR), {multiplier}",
        )
