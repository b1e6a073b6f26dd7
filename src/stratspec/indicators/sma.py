"""Moving averages used as building blocks by the formulas."""

from __future__ import annotations

import pandas as pd


class SMA:
    """Simple Moving Average.

    Computes the rolling mean of a specified column over a given period.
    """

    name = "SMA"

    def compute(
        self, mktdata: pd.DataFrame, column: str = "close", period: int = 20,
    ) -> pd.Series:
        """Return the SMA series (first ``period - 1`` values will be NaN)."""
        return mktdata[column].rolling(int(period)).mean()


class EMA:
    """Exponential Moving Average with ``alpha = 2 / (span + 1)``, seeded at the first bar."""

    name = "EMA"

    def compute(
        self, mktdata: pd.DataFrame, column: str = "close", period: int = 20,
    ) -> pd.Series:
        return ema(mktdata[column], period)


def sma(series: pd.Series, period: float) -> pd.Series:
    return series.rolling(int(period)).mean()


def ema(series: pd.Series, period: float) -> pd.Series:
    return series.ewm(span=int(period), adjust=False).mean()


def wilder(series: pd.Series, period: float) -> pd.Series:
    """Wilder smoothing (``alpha = 1 / period``); NaN until ``period`` observations."""
    period = int(period)
    return series.ewm(alpha=1.0 / period, adjust=False, min_periods=period).mean()
