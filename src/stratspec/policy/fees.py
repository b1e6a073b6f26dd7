"""Taker fee model of the binary prediction market."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal

FEE_TICK = Decimal("0.0001")


@dataclass(frozen=True)
class FeeModel:
    """``fee(C, p) = C x fee_rate x (p(1 - p))^exponent``.

    The fee peaks at ``p = 0.5`` and vanishes toward either settlement price.
    """

    fee_rate: float = 0.25
    exponent: float = 2.0

    def fee(self, contracts: float, price: float) -> float:
        if contracts <= 0 or price <= 0 or price >= 1:
            return 0.0
        return contracts * self.fee_rate * (price * (1.0 - price)) ** self.exponent

    def charged_fee(self, contracts: float, price: float) -> float:
        """Fee as settled by the exchange: floored to 4 decimals, dust becomes 0."""
        floored = Decimal(repr(self.fee(contracts, price))).quantize(FEE_TICK, rounding=ROUND_DOWN)
        return float(floored) if floored >= FEE_TICK else 0.0

    @property
    def peak_rate(self) -> float:
        """Fee per contract at p = 0.5."""
        return self.fee_rate * 0.25**self.exponent

    def describe(self) -> str:
        return (
            f"fee = C x {self.fee_rate:g} x (p x (1 - p))^{self.exponent:g}, where C is the "
            "number of contracts and p the fill price; 0 when p <= 0 or p >= 1. "
            f"Peak {self.peak_rate:g} per contract at p = 0.5. The exchange floors the fee "
            "to 4 decimals; fees below 0.0001 are not charged."
        )


def estimate_probability(entry_price: float, current_price: float) -> float:
    """Map the underlying's move since entry to a YES-share price.

    ``clamp(0.5 + change_pct x 0.05, 0.05, 0.95)`` with ``change_pct`` in
    percent; 0.5 when *entry_price* is not positive.
    """
    if entry_price <= 0:
        return 0.5
    change_pct = (current_price - entry_price) / entry_price * 100.0
    return max(0.05, min(0.95, 0.5 + change_pct * 0.05))
