from __future__ import annotations

from martingale_calc.core.precision import precision


def position_pl(entry_price: float, exit_price: float, amount: float, fee: float) -> float:
    """P/L of closing `amount` at `exit_price`, net of a taker fee charged on the exit notional."""
    pl = (float(exit_price) - float(entry_price)) * float(amount)
    exit_fee = float(exit_price) * abs(float(amount)) * float(fee)
    return precision(pl - exit_fee)


def position_cost(entry_price: float, exit_price: float, amount: float) -> float:
    positive_amount = abs(float(amount))
    if amount < 0:
        # shorts are margined against the worse of entry and exit
        return max(positive_amount * float(entry_price), positive_amount * float(exit_price), 0.0)
    return max(positive_amount * float(entry_price), 0.0)


def position_pl_percent(entry_price: float, exit_price: float, amount: float) -> float:
    pl = position_pl(entry_price, exit_price, amount, 0.0)
    cost = position_cost(entry_price, exit_price, amount)
    if pl == 0 or cost == 0:
        return 0.0
    return precision(pl / cost * 100)
