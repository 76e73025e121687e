from __future__ import annotations

from martingale_calc.core.types import sign


def liquidation_price(price: float, amount: float, leverage: float, min_margin: float) -> float:
    """Longs liquidate below `price`, shorts above, offset by 1/leverage minus the maintenance margin."""
    return float(price) * (1 + (1 / float(leverage) - float(min_margin)) * sign(amount) * -1)


def liquidation_distance(next_price: float, liq_price: float, amount: float) -> float:
    # positive while the next fill still happens before liquidation
    if amount > 0:
        return float(next_price) - float(liq_price)
    return float(liq_price) - float(next_price)
