from stratspec.core.config import CompilerSettings, resolve_settings
from stratspec.core.errors import CompositionError, RegistryError, StratSpecError
from stratspec.core.logging import configure_logging, get_logger
from stratspec.core.records import BacktestStats, StrategyRecord, normalize_params
from stratspec.core.types import (
    Action,
    CompositionMode,
    Formula,
    IndicatorKind,
    ParamSpec,
    SizingMode,
    UnknownVariant,
    VariantDescriptor,
    VariantKind,
)

__all__ = [
    "Action",
    "BacktestStats",
    "CompilerSettings",
    "CompositionError",
    "CompositionMode",
    "Formula",
    "IndicatorKind",
    "ParamSpec",
    "RegistryError",
    "SizingMode",
    "StratSpecError",
    "StrategyRecord",
    "UnknownVariant",
    "VariantDescriptor",
    "VariantKind",
    "configure_logging",
    "get_logger",
    "normalize_params",
    "resolve_settings",
]
