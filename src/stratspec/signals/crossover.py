"""Crossover signal: detects when a fast line crosses a slow line."""

from __future__ import annotations

import numpy as np
import pandas as pd


class Crossover:
    """Detect crossovers between two columns of one candle frame.

    Produces ``+1`` on bars where *fast* crosses above *slow* (previous bar
    fast <= slow, current bar fast > slow), ``-1`` on bars where it crosses
    below (previous fast >= slow, current fast < slow) and ``0`` elsewhere.
    With ``strict=True`` the previous bar must be strictly on the other side,
    so a bar that only touches the slow line never starts a cross.
    """

    name = "Crossover"

    def compute(
        self,
        mktdata: pd.DataFrame,
        fast: str = "",
        slow: str = "",
        strict: bool = False,
    ) -> pd.Series:
        f = mktdata[fast]
        s = mktdata[slow]
        prev_f = f.shift(1)
        prev_s = s.shift(1)
        if strict:
            up = (prev_f < prev_s) & (f > s)
            down = (prev_f > prev_s) & (f < s)
        else:
            up = (prev_f <= prev_s) & (f > s)
            down = (prev_f >= prev_s) & (f < s)
        return pd.Series(np.where(up, 1, np.where(down, -1, 0)), index=mktdata.index)
