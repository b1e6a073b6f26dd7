"""Per-indicator parameter schemas and their canonical spellings."""

from __future__ import annotations

from stratspec.core.types import IndicatorKind

# Indicator field -> human description, in canonical order.
INDICATOR_FIELDS: dict[IndicatorKind, tuple[tuple[str, str], ...]] = {
    IndicatorKind.RSI: (
        ("period", "RSI lookback in bars (Wilder smoothing)"),
        ("overbought", "RSI level above which the bar votes SELL"),
        ("oversold", "RSI level below which the bar votes BUY"),
    ),
    IndicatorKind.BOLLINGER_BANDS: (
        ("period", "SMA and standard deviation lookback in bars"),
        ("multiplier", "Band width in population standard deviations"),
    ),
    IndicatorKind.MACD: (
        ("fast", "Fast EMA span in bars"),
        ("slow", "Slow EMA span in bars"),
        ("signal", "Signal-line EMA span applied to the MACD line"),
    ),
    IndicatorKind.EMA_CROSSOVER: (
        ("fast_period", "Fast EMA span in bars"),
        ("slow_period", "Slow EMA span in bars"),
    ),
    IndicatorKind.STOCHASTIC: (
        ("period", "%K lookback for highest high / lowest low"),
        ("overbought", "%K level above which a bearish cross votes SELL"),
        ("oversold", "%K level below which a bullish cross votes BUY"),
    ),
    IndicatorKind.ATR_MEAN_REVERSION: (
        ("atr_period", "SMA window of the true range"),
        ("sma_period", "SMA window of the close (the mean)"),
        ("multiplier", "Band distance from the mean in ATRs"),
    ),
    IndicatorKind.VWAP: (
        ("period", "Rolling VWAP window in bars"),
    ),
    IndicatorKind.OBV: (
        ("sma_period", "SMA window applied to on-balance volume"),
    ),
    IndicatorKind.WILLIAMS_R: (
        ("period", "Lookback for highest high / lowest low"),
        ("overbought", "%R level (negative) above which the bar votes SELL"),
        ("oversold", "%R level (negative) below which the bar votes BUY"),
    ),
    IndicatorKind.ADX: (
        ("period", "Smoothing period for DI and ADX (alpha = 1/period)"),
        ("adx_threshold", "Minimum ADX for any trade"),
    ),
    IndicatorKind.GABAGOOL: (
        ("max_pair_cost", "Trade only when YES fill + NO fill is strictly below this"),
        ("bid_offset", "Maker bid distance below each side's mid price"),
        ("spread_multiplier", "Synthetic spread = candle volatility x multiplier"),
    ),
}

# Indicator field -> canonical name when the indicator is a composite component.
COMPONENT_NAMES: dict[IndicatorKind, dict[str, str]] = {
    IndicatorKind.RSI: {
        "period": "rsi_period",
        "overbought": "rsi_overbought",
        "oversold": "rsi_oversold",
    },
    IndicatorKind.BOLLINGER_BANDS: {"period": "bb_period", "multiplier": "bb_multiplier"},
    IndicatorKind.MACD: {"fast": "macd_fast", "slow": "macd_slow", "signal": "macd_signal"},
    IndicatorKind.EMA_CROSSOVER: {"fast_period": "ema_fast", "slow_period": "ema_slow"},
    IndicatorKind.STOCHASTIC: {
        "period": "stoch_period",
        "overbought": "stoch_overbought",
        "oversold": "stoch_oversold",
    },
    IndicatorKind.ATR_MEAN_REVERSION: {
        "atr_period": "atr_period",
        "sma_period": "atr_sma_period",
        "multiplier": "atr_multiplier",
    },
    IndicatorKind.VWAP: {"period": "vwap_period"},
    IndicatorKind.OBV: {"sma_period": "obv_sma_period"},
    IndicatorKind.WILLIAMS_R: {
        "period": "wr_period",
        "overbought": "wr_overbought",
        "oversold": "wr_oversold",
    },
    IndicatorKind.ADX: {"period": "adx_period", "adx_threshold": "adx_threshold"},
    IndicatorKind.GABAGOOL: {
        "max_pair_cost": "max_pair_cost",
        "bid_offset": "bid_offset",
        "spread_multiplier": "spread_multiplier",
    },
}

# Spellings observed in persisted records for the same concept.
OBSERVED_ALIASES: dict[str, tuple[str, ...]] = {
    "rsi_overbought": ("rsi_ob",),
    "rsi_oversold": ("rsi_os",),
    "bb_multiplier": ("bb_mult",),
    "stoch_overbought": ("stoch_ob",),
    "stoch_oversold": ("stoch_os",),
    "ema_fast": ("ema_fast_period",),
    "ema_slow": ("ema_slow_period",),
    "wr_overbought": ("wr_ob",),
    "wr_oversold": ("wr_os",),
}
