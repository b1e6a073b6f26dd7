"""Compiler settings: market identity, data source and logging knobs."""

from __future__ import annotations

import os
from dataclasses import dataclass

ENV_PREFIX = "STRATSPEC_"


@dataclass(frozen=True)
class CompilerSettings:
    """Values the renderer states as facts about the target market and bot."""

    interval: str = "15m"
    bars_per_day: int = 96
    data_source: str = "Binance klines (GET /api/v3/klines)"
    market: str = "Polymarket 15-minute crypto up/down binary market"
    base_position_pct: float = 10.0
    kelly_cap_pct: float = 25.0
    kelly_min_trades: int = 10
    poll_seconds: int = 60
    log_level: str = "INFO"
    log_format: str = "console"


def resolve_settings(
    interval: str | None = None,
    log_level: str | None = None,
    log_format: str | None = None,
) -> CompilerSettings:
    """Resolve settings.

    Priority: parameter > $STRATSPEC_<NAME> > default.
    """
    defaults = CompilerSettings()
    return CompilerSettings(
        interval=interval or os.environ.get(f"{ENV_PREFIX}INTERVAL") or defaults.interval,
        log_level=(
            log_level or os.environ.get(f"{ENV_PREFIX}LOG_LEVEL") or defaults.log_level
        ).upper(),
        log_format=(
            log_format or os.environ.get(f"{ENV_PREFIX}LOG_FORMAT") or defaults.log_format
        ).lower(),
    )
