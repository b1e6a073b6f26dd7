"""MACD+RSI build guide: render a discovered strategy record both ways.

Strategy: MACD histogram crossings are the primary signal,
          RSI vetoes a BUY when overbought and a SELL when oversold.

Usage:
    python examples/strategies/macd_rsi_guide.py
"""

import numpy as np
import pandas as pd

from stratspec.core import StrategyRecord, configure_logging
from stratspec.indicators import variant_signal
from stratspec.registry import resolve
from stratspec.render import RenderMode, format_table, render

configure_logging()

# ── Record as stored by the discovery service ────────────────────────────

record = StrategyRecord.from_dict(
    {
        "strategy_name": "macd_rsi_btc_30d",
        "strategy_type": "macd_rsi",
        "strategy_params": (
            '{"type": "macd_rsi", "macd_fast": 12, "macd_slow": 26, "macd_signal": 9, '
            '"rsi_period": 14, "rsi_ob": "70", "rsi_os": "30"}'
        ),
        "symbol": "BTCUSDT",
        "days": 30,
        "sizing_mode": "Kelly",
        "net_pnl": "412.37",
        "win_rate": "57.1",
        "sharpe_ratio": "1.84",
        "max_drawdown_pct": "6.2",
        "total_trades": 63,
        "max_consecutive_losses": 4,
        "total_fees": "18.22",
    },
)

# ── Table mode ───────────────────────────────────────────────────────────

print(format_table(render(record, RenderMode.TABLE)))
print()

# ── Document mode ────────────────────────────────────────────────────────

print(render(record, RenderMode.DOCUMENT))

# ── Reference signal on synthetic 15m candles ────────────────────────────

rng = np.random.default_rng(7)
close = 60_000 + np.cumsum(rng.normal(0, 80, 400))
mktdata = pd.DataFrame(
    {
        "open": close - rng.normal(0, 20, 400),
        "high": close + 60,
        "low": close - 60,
        "close": close,
        "volume": rng.uniform(10, 50, 400),
    },
    index=pd.date_range("2024-01-01", periods=400, freq="15min"),
)
actions = variant_signal(resolve(record.strategy_type), mktdata, record.strategy_params)
print(actions.value_counts().to_string())
