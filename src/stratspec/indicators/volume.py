"""Volume-weighted indicators: VWAP and OBV."""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np
import pandas as pd

from stratspec.core.types import IndicatorKind
from stratspec.indicators.base import FormulaText, actions, label
from stratspec.indicators.sma import sma


class VWAP:
    """Rolling volume-weighted average of the typical price."""

    name = "VWAP"
    kind = IndicatorKind.VWAP

    def compute(self, mktdata: pd.DataFrame, period: float = 20) -> pd.DataFrame:
        period = int(period)
        typical = (mktdata["high"] + mktdata["low"] + mktdata["close"]) / 3.0
        volume = mktdata["volume"]
        traded = (typical * volume).rolling(period).sum()
        total = volume.rolling(period).sum()
        return pd.DataFrame({"vwap": traded / total.where(total > 0.0)}, index=mktdata.index)

    def signal(self, mktdata: pd.DataFrame, period: float = 20) -> pd.Series:
        vwap = self.compute(mktdata, period)["vwap"]
        close = mktdata["close"]
        return actions(close < vwap, close > vwap)

    def describe(self, labels: Mapping[str, str]) -> FormulaText:
        period = label(labels, "period")
        return FormulaText(
            setup=f"Rolling VWAP over {period}; BUY below VWAP, SELL above it.",
            steps=(
                "typical price = (high + low + close) / 3",
                f"VWAP = sum(typical x volume) / sum(volume) over the last bars, {period}",
                "if the window's volume sums to 0 VWAP is undefined and the bar is HOLD",
            ),
            buy_rule="close < VWAP (trading below fair value)",
            sell_rule="close > VWAP (trading above fair value)",
            confidence_rule="|close - VWAP| / VWAP x 10",
        )


class OBV:
    """On-Balance Volume against its own SMA."""

    name = "OBV"
    kind = IndicatorKind.OBV

    def compute(self, mktdata: pd.DataFrame, sma_period: float = 20) -> pd.DataFrame:
        direction = np.sign(mktdata["close"].diff()).fillna(0.0)
        obv = (direction * mktdata["volume"]).cumsum()
        return pd.DataFrame(
            {"obv": obv, "obv_sma": sma(obv, sma_period)}, index=mktdata.index,
        )

    def signal(self, mktdata: pd.DataFrame, sma_period: float = 20) -> pd.Series:
        lines = self.compute(mktdata, sma_period)
        return actions(lines["obv"] > lines["obv_sma"], lines["obv"] < lines["obv_sma"])

    def describe(self, labels: Mapping[str, str]) -> FormulaText:
        sma_period = label(labels, "sma_period")
        return FormulaText(
            setup=f"On-Balance Volume against its SMA over {sma_period}.",
            steps=(
                "OBV starts at 0; add volume on an up close, subtract it on a down close, "
                "unchanged on a flat close",
                f"OBV_SMA = SMA(OBV), {sma_period}",
            ),
            buy_rule="OBV > OBV_SMA (accumulation)",
            sell_rule="OBV < OBV_SMA (distribution)",
            confidence_rule=(
                "min(|OBV - OBV two bars earlier| / 2 / max(volume of this bar, 1), 1)"
            ),
        )
