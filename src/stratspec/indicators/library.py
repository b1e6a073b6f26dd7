"""Formula library: one formula object per indicator kind.

``describe`` and ``describe_variant`` are total. A missing parameter shows
up as ``name=(undefined)`` in the text and never raises.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import pandas as pd

from stratspec.core.errors import RegistryError
from stratspec.core.records import to_number
from stratspec.core.types import Formula, IndicatorKind, VariantDescriptor
from stratspec.indicators.base import FormulaText, format_value
from stratspec.indicators.gabagool import Gabagool
from stratspec.indicators.momentum import MACD, RSI, Stochastic, WilliamsR
from stratspec.indicators.trend import ADX, EMACrossover
from stratspec.indicators.volatility import ATRMeanReversion, BollingerBands
from stratspec.indicators.volume import OBV, VWAP
from stratspec.registry import component_params, resolve_params
from stratspec.registry.schema import INDICATOR_FIELDS
from stratspec.signals.composer import compose_frame, describe_mode

FORMULAS: dict[IndicatorKind, Formula] = {
    f.kind: f
    for f in (
        RSI(),
        BollingerBands(),
        MACD(),
        EMACrossover(),
        Stochastic(),
        ATRMeanReversion(),
        VWAP(),
        OBV(),
        WilliamsR(),
        ADX(),
        Gabagool(),
    )
}

LOOKBACK_FIELDS = frozenset(
    {"period", "fast", "slow", "signal", "fast_period", "slow_period", "atr_period", "sma_period"},
)

_missing = set(IndicatorKind) - set(FORMULAS)
if _missing:
    raise RegistryError(f"indicator kinds without a formula: {sorted(_missing)}")


@dataclass(frozen=True)
class ParameterLine:
    name: str
    value: str
    description: str


@dataclass(frozen=True)
class Description:
    """Rendered description of an indicator or a whole variant."""

    title: str
    setup: str
    sections: tuple[tuple[str, FormulaText], ...]
    parameters: tuple[ParameterLine, ...]
    composition: str | None = None


def get_formula(kind: IndicatorKind) -> Formula:
    return FORMULAS[IndicatorKind(kind)]


def labels_for(
    descriptor: VariantDescriptor, index: int, resolved: Mapping[str, float | None],
) -> dict[str, str]:
    """``field -> "canonical=value"`` labels for one component of *descriptor*."""
    return {
        spec.field: f"{spec.name}={format_value(resolved.get(spec.name))}"
        for spec in descriptor.params_for(index)
    }


def describe(kind: IndicatorKind, params: Mapping[str, Any]) -> Description:
    """Describe a single indicator from parameters keyed by its own field names."""
    formula = get_formula(kind)
    labels: dict[str, str] = {}
    lines = []
    for field, description in INDICATOR_FIELDS[formula.kind]:
        value = format_value(to_number(params.get(field)))
        labels[field] = f"{field}={value}"
        lines.append(ParameterLine(field, value, description))
    text = formula.describe(labels)
    return Description(
        title=formula.name,
        setup=text.setup,
        sections=((formula.name, text),),
        parameters=tuple(lines),
    )


def describe_variant(descriptor: VariantDescriptor, params: Mapping[str, Any]) -> Description:
    """Describe every component of *descriptor* using its canonical parameter names."""
    resolved = resolve_params(descriptor, params)
    sections = []
    for index, kind in enumerate(descriptor.components):
        formula = get_formula(kind)
        sections.append((formula.name, formula.describe(labels_for(descriptor, index, resolved))))
    setup = " ".join(text.setup for _, text in sections)
    composition = None
    if descriptor.mode is not None:
        composition = describe_mode(descriptor.mode, [name for name, _ in sections])
        setup = f"{setup} {composition}"
    parameters = tuple(
        ParameterLine(spec.name, format_value(resolved[spec.name]), spec.description)
        for spec in descriptor.params
    )
    return Description(
        title=descriptor.display_name,
        setup=setup,
        sections=tuple(sections),
        parameters=parameters,
        composition=composition,
    )


def _usable(field: str, value: float | None) -> bool:
    if value is None:
        return False
    return field not in LOOKBACK_FIELDS or int(value) >= 1


def variant_signal(
    descriptor: VariantDescriptor, mktdata: pd.DataFrame, params: Mapping[str, Any],
) -> pd.Series:
    """Per-bar actions of a whole variant.

    Parameters absent from *params*, and lookbacks shorter than one bar, fall
    back to each formula's own defaults; composites are combined with the
    variant's mode.
    """
    resolved = resolve_params(descriptor, params)
    votes = {}
    for index, kind in enumerate(descriptor.components):
        kwargs = {
            field: value
            for field, value in component_params(descriptor, index, resolved).items()
            if _usable(field, value)
        }
        votes[f"{index}:{kind}"] = get_formula(kind).signal(mktdata, **kwargs)
    if descriptor.mode is None:
        return next(iter(votes.values()))
    return compose_frame(pd.DataFrame(votes, index=mktdata.index), descriptor.mode)
