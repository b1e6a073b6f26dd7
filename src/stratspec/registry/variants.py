"""Closed variant registry: strategy type tag -> VariantDescriptor.

Every known tag maps to exactly one descriptor. Unknown tags resolve to an
:class:`UnknownVariant` value so callers can render a placeholder instead of
guessing a formula. Parameter aliasing is resolved here and nowhere else.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from stratspec.core.errors import RegistryError
from stratspec.core.logging import get_logger
from stratspec.core.records import to_number
from stratspec.core.types import (
    CompositionMode,
    IndicatorKind,
    ParamSpec,
    UnknownVariant,
    VariantDescriptor,
    VariantKind,
)
from stratspec.registry.schema import COMPONENT_NAMES, INDICATOR_FIELDS, OBSERVED_ALIASES

logger = get_logger(__name__)

_ATOMICS: tuple[tuple[str, str, IndicatorKind], ...] = (
    ("rsi", "RSI", IndicatorKind.RSI),
    ("bollinger_bands", "Bollinger Bands", IndicatorKind.BOLLINGER_BANDS),
    ("macd", "MACD", IndicatorKind.MACD),
    ("ema_crossover", "EMA Crossover", IndicatorKind.EMA_CROSSOVER),
    ("stochastic", "Stochastic", IndicatorKind.STOCHASTIC),
    ("atr_mean_reversion", "ATR Mean Reversion", IndicatorKind.ATR_MEAN_REVERSION),
    ("vwap", "VWAP", IndicatorKind.VWAP),
    ("obv", "OBV", IndicatorKind.OBV),
    ("williams_r", "Williams %R", IndicatorKind.WILLIAMS_R),
    ("adx", "ADX", IndicatorKind.ADX),
    ("gabagool", "Gabagool", IndicatorKind.GABAGOOL),
)

# Components are listed primary first.
_COMPOSITES: tuple[tuple[str, str, tuple[IndicatorKind, ...], CompositionMode], ...] = (
    (
        "rsi_bollinger", "RSI+Bollinger",
        (IndicatorKind.RSI, IndicatorKind.BOLLINGER_BANDS),
        CompositionMode.UNANIMOUS,
    ),
    (
        "macd_rsi", "MACD+RSI",
        (IndicatorKind.MACD, IndicatorKind.RSI),
        CompositionMode.PRIMARY_CONFIRMER,
    ),
    (
        "ema_rsi", "EMA+RSI",
        (IndicatorKind.EMA_CROSSOVER, IndicatorKind.RSI),
        CompositionMode.PRIMARY_CONFIRMER,
    ),
    (
        "stoch_rsi", "Stoch+RSI",
        (IndicatorKind.STOCHASTIC, IndicatorKind.RSI),
        CompositionMode.UNANIMOUS,
    ),
    (
        "macd_bollinger", "MACD+Bollinger",
        (IndicatorKind.MACD, IndicatorKind.BOLLINGER_BANDS),
        CompositionMode.PRIMARY_CONFIRMER,
    ),
    (
        "triple_rsi_macd_bb", "Triple:RSI+MACD+BB",
        (IndicatorKind.RSI, IndicatorKind.MACD, IndicatorKind.BOLLINGER_BANDS),
        CompositionMode.MAJORITY,
    ),
    (
        "triple_ema_rsi_stoch", "Triple:EMA+RSI+Stoch",
        (IndicatorKind.EMA_CROSSOVER, IndicatorKind.RSI, IndicatorKind.STOCHASTIC),
        CompositionMode.MAJORITY,
    ),
    (
        "vwap_rsi", "VWAP+RSI",
        (IndicatorKind.VWAP, IndicatorKind.RSI),
        CompositionMode.PRIMARY_CONFIRMER,
    ),
    (
        "obv_macd", "OBV+MACD",
        (IndicatorKind.MACD, IndicatorKind.OBV),
        CompositionMode.PRIMARY_CONFIRMER,
    ),
    (
        "adx_ema", "ADX+EMA",
        (IndicatorKind.EMA_CROSSOVER, IndicatorKind.ADX),
        CompositionMode.PRIMARY_CONFIRMER,
    ),
    (
        "williams_r_stoch", "Williams%R+Stoch",
        (IndicatorKind.WILLIAMS_R, IndicatorKind.STOCHASTIC),
        CompositionMode.UNANIMOUS,
    ),
)


def _atomic_params(kind: IndicatorKind) -> tuple[ParamSpec, ...]:
    specs = []
    for field, description in INDICATOR_FIELDS[kind]:
        prefixed = COMPONENT_NAMES[kind][field]
        aliases = tuple(
            a for a in (prefixed, *OBSERVED_ALIASES.get(prefixed, ())) if a != field
        )
        specs.append(ParamSpec(field, description, 0, field, aliases))
    return tuple(specs)


def _composite_params(kinds: tuple[IndicatorKind, ...]) -> tuple[ParamSpec, ...]:
    specs = []
    for index, kind in enumerate(kinds):
        for field, description in INDICATOR_FIELDS[kind]:
            name = COMPONENT_NAMES[kind][field]
            specs.append(
                ParamSpec(name, description, index, field, OBSERVED_ALIASES.get(name, ())),
            )
    return tuple(specs)


def _build() -> dict[str, VariantDescriptor]:
    table: dict[str, VariantDescriptor] = {}
    for tag, display, kind in _ATOMICS:
        table[tag] = VariantDescriptor(
            tag=tag,
            display_name=display,
            kind=VariantKind.ATOMIC,
            components=(kind,),
            params=_atomic_params(kind),
        )
    for tag, display, kinds, mode in _COMPOSITES:
        table[tag] = VariantDescriptor(
            tag=tag,
            display_name=display,
            kind=VariantKind.COMPOSITE,
            components=kinds,
            params=_composite_params(kinds),
            mode=mode,
        )
    return table


def _check(table: dict[str, VariantDescriptor]) -> None:
    if len(table) != len(_ATOMICS) + len(_COMPOSITES):
        raise RegistryError("duplicate strategy type tag in registry")
    atomic_kinds = {d.components[0] for d in table.values() if not d.is_composite}
    missing = set(IndicatorKind) - atomic_kinds
    if missing:
        raise RegistryError(f"indicator kinds without an atomic variant: {sorted(missing)}")
    for d in table.values():
        if len(set(d.param_names)) != len(d.params):
            raise RegistryError(f"{d.tag}: canonical parameter names collide")
        if not d.is_composite:
            continue
        if not 2 <= len(d.components) <= 3:
            raise RegistryError(f"{d.tag}: composites take 2 or 3 components")
        if d.mode is CompositionMode.MAJORITY and len(d.components) != 3:
            raise RegistryError(f"{d.tag}: majority needs exactly 3 components")
        if IndicatorKind.GABAGOOL in d.components:
            raise RegistryError(f"{d.tag}: arbitrage cannot be a composite component")


VARIANTS: dict[str, VariantDescriptor] = _build()
_check(VARIANTS)


def resolve(tag: str) -> VariantDescriptor | UnknownVariant:
    """Look up a strategy type tag (case and surrounding whitespace ignored)."""
    descriptor = VARIANTS.get(str(tag).strip().lower())
    if descriptor is None:
        logger.warning("unknown strategy type", strategy_type=tag)
        return UnknownVariant(tag=str(tag))
    return descriptor


def all_variants() -> list[VariantDescriptor]:
    """Return all descriptors, atomics first, in registry order."""
    return list(VARIANTS.values())


def resolve_params(
    descriptor: VariantDescriptor, params: Mapping[str, Any],
) -> dict[str, float | None]:
    """Map raw record parameters onto the descriptor's canonical names.

    The first spelling present with a numeric value wins. Missing
    parameters map to ``None``; no default is substituted.
    """
    resolved: dict[str, float | None] = {}
    for spec in descriptor.params:
        value = None
        for spelling in spec.spellings:
            if spelling in params:
                value = to_number(params[spelling])
                if value is not None:
                    break
        resolved[spec.name] = value
    return resolved


def component_params(
    descriptor: VariantDescriptor, index: int, resolved: Mapping[str, float | None],
) -> dict[str, float | None]:
    """Canonical values of one component, keyed by the indicator's own field names."""
    return {spec.field: resolved.get(spec.name) for spec in descriptor.params_for(index)}
