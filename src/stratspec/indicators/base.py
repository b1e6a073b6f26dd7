"""Shared pieces of the indicator formulas."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np
import pandas as pd

from stratspec.core.types import Action

MISSING = "(undefined)"

# BUY and SELL confidences are clamped to this range; HOLD carries 0.
MIN_CONFIDENCE = 0.3
MAX_CONFIDENCE = 1.0
CONFIDENCE_CLAMP = (
    f"clamp the raw confidence of a BUY or SELL to [{MIN_CONFIDENCE:g}, {MAX_CONFIDENCE:g}]; "
    "a HOLD has confidence 0"
)


@dataclass(frozen=True)
class FormulaText:
    """Natural-language half of a formula definition."""

    setup: str
    steps: tuple[str, ...]
    buy_rule: str
    sell_rule: str
    hold_rule: str = "otherwise HOLD"
    confidence_rule: str = ""


def label(labels: Mapping[str, str], field: str) -> str:
    """Return the ``name=value`` label for *field*, or a missing marker."""
    return labels.get(field, f"{field}={MISSING}")


def actions(buy: pd.Series, sell: pd.Series) -> pd.Series:
    """Turn boolean BUY/SELL masks into an Action series (BUY wins ties)."""
    buy = buy.fillna(False).astype(bool)
    sell = sell.fillna(False).astype(bool)
    values = [
        Action.BUY if b else Action.SELL if s else Action.HOLD
        for b, s in zip(buy, sell)
    ]
    return pd.Series(values, index=buy.index, dtype=object)


def bars_seen(mktdata: pd.DataFrame) -> pd.Series:
    """1-based bar counter used for warmup gates."""
    return pd.Series(np.arange(1, len(mktdata) + 1), index=mktdata.index)


def format_value(value: float | None) -> str:
    """Render a parameter value; integral floats print without a decimal point."""
    if value is None:
        return MISSING
    if float(value).is_integer():
        return str(int(value))
    return format(value, "g")
