"""Pieces shared by the table and document renderers."""

from __future__ import annotations

from dataclasses import dataclass

from stratspec.core.config import CompilerSettings, resolve_settings
from stratspec.core.records import StrategyRecord
from stratspec.core.types import UnknownVariant, VariantDescriptor
from stratspec.indicators import Description, describe_variant, format_value
from stratspec.policy import FeeModel, RiskPolicy, RiskThresholds, SizingPolicy
from stratspec.registry import resolve

UNKNOWN_TITLE = "Unknown strategy type"


@dataclass(frozen=True)
class RenderContext:
    record: StrategyRecord
    settings: CompilerSettings
    variant: VariantDescriptor | UnknownVariant
    description: Description | None
    thresholds: RiskThresholds
    fees: FeeModel
    sizing: SizingPolicy

    @property
    def is_known(self) -> bool:
        return isinstance(self.variant, VariantDescriptor)

    @property
    def is_arbitrage(self) -> bool:
        return isinstance(self.variant, VariantDescriptor) and self.variant.is_arbitrage

    @property
    def type_label(self) -> str:
        if isinstance(self.variant, VariantDescriptor):
            return f"{self.variant.display_name} ({self.variant.tag})"
        return f"{UNKNOWN_TITLE}: {self.variant.tag!r}"

    def raw_params(self) -> list[tuple[str, str]]:
        return [(k, format_value(v)) for k, v in self.record.strategy_params.items()]


def build_context(
    record: StrategyRecord, settings: CompilerSettings | None = None,
) -> RenderContext:
    settings = settings or resolve_settings()
    variant = resolve(record.strategy_type)
    description = None
    if isinstance(variant, VariantDescriptor):
        description = describe_variant(variant, record.strategy_params)
    return RenderContext(
        record=record,
        settings=settings,
        variant=variant,
        description=description,
        thresholds=RiskPolicy().derive(record.stats),
        fees=FeeModel(),
        sizing=SizingPolicy(settings),
    )


def signal_mapping(ctx: RenderContext) -> str:
    if ctx.is_arbitrage:
        return "TRADE -> buy YES and NO at the maker fills; SKIP -> do nothing"
    return (
        "BUY -> open a long YES position when flat; SELL -> close the open position; "
        "HOLD -> do nothing"
    )
