"""Core types shared by the registry, formula library, composer and renderer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import pandas as pd

if TYPE_CHECKING:
    from stratspec.indicators.base import FormulaText


class Action(StrEnum):
    """Atomic or composed trading vote."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"

    def opposite(self) -> Action:
        if self is Action.BUY:
            return Action.SELL
        if self is Action.SELL:
            return Action.BUY
        return Action.HOLD


class IndicatorKind(StrEnum):
    RSI = "rsi"
    BOLLINGER_BANDS = "bollinger_bands"
    MACD = "macd"
    EMA_CROSSOVER = "ema_crossover"
    STOCHASTIC = "stochastic"
    ATR_MEAN_REVERSION = "atr_mean_reversion"
    VWAP = "vwap"
    OBV = "obv"
    WILLIAMS_R = "williams_r"
    ADX = "adx"
    GABAGOOL = "gabagool"


class CompositionMode(StrEnum):
    UNANIMOUS = "unanimous"
    PRIMARY_CONFIRMER = "primary_confirmer"
    MAJORITY = "majority"


class VariantKind(StrEnum):
    ATOMIC = "atomic"
    COMPOSITE = "composite"


class SizingMode(StrEnum):
    FIXED = "fixed"
    KELLY = "kelly"
    CONFIDENCE_WEIGHTED = "confidence_weighted"


@dataclass(frozen=True)
class ParamSpec:
    """One canonical parameter of a variant.

    ``component`` indexes into the owning descriptor's ``components`` and
    ``field`` is the parameter name the indicator formula itself uses.
    """

    name: str
    description: str
    component: int
    field: str
    aliases: tuple[str, ...] = ()

    @property
    def spellings(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)


@dataclass(frozen=True)
class VariantDescriptor:
    """Registry entry describing how a strategy type is computed and composed."""

    tag: str
    display_name: str
    kind: VariantKind
    components: tuple[IndicatorKind, ...]
    params: tuple[ParamSpec, ...]
    mode: CompositionMode | None = None

    @property
    def is_composite(self) -> bool:
        return self.kind is VariantKind.COMPOSITE

    @property
    def is_arbitrage(self) -> bool:
        return IndicatorKind.GABAGOOL in self.components

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.params)

    def params_for(self, component: int) -> tuple[ParamSpec, ...]:
        return tuple(p for p in self.params if p.component == component)


@dataclass(frozen=True)
class UnknownVariant:
    """Resolution outcome for a strategy type tag with no registry entry."""

    tag: str


@runtime_checkable
class Formula(Protocol):
    """Indicator formula: numeric computation plus its description."""

    name: str
    kind: IndicatorKind

    def compute(self, mktdata: pd.DataFrame, **params: Any) -> pd.DataFrame: ...

    def signal(self, mktdata: pd.DataFrame, **params: Any) -> pd.Series: ...

    def describe(self, labels: Mapping[str, str]) -> FormulaText: ...
