from stratspec.indicators.base import MISSING, FormulaText, format_value
from stratspec.indicators.gabagool import Gabagool, evaluate_pair, quote
from stratspec.indicators.library import (
    FORMULAS,
    Description,
    ParameterLine,
    describe,
    describe_variant,
    get_formula,
    labels_for,
    variant_signal,
)
from stratspec.indicators.momentum import MACD, RSI, Stochastic, WilliamsR
from stratspec.indicators.sma import EMA, SMA
from stratspec.indicators.trend import ADX, EMACrossover
from stratspec.indicators.volatility import ATRMeanReversion, BollingerBands
from stratspec.indicators.volume import OBV, VWAP

__all__ = [
    "ADX",
    "ATRMeanReversion",
    "BollingerBands",
    "Description",
    "EMA",
    "EMACrossover",
    "FORMULAS",
    "FormulaText",
    "Gabagool",
    "MACD",
    "MISSING",
    "OBV",
    "ParameterLine",
    "RSI",
    "SMA",
    "Stochastic",
    "VWAP",
    "WilliamsR",
    "describe",
    "describe_variant",
    "evaluate_pair",
    "format_value",
    "get_formula",
    "labels_for",
    "quote",
    "variant_signal",
]
