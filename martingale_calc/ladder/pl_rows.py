from __future__ import annotations

from collections.abc import Sequence

from martingale_calc.core.precision import percent_price, precision
from martingale_calc.core.types import OrderRow, PlResult, PlRow
from martingale_calc.portfolio.pnl import position_pl, position_pl_percent
from martingale_calc.portfolio.position import average_position

DEFAULT_EXIT_PERCENTS: tuple[float, ...] = (1, 2, 3)


def get_pl_rows(orders: Sequence[OrderRow], exit_percents: Sequence[float] = DEFAULT_EXIT_PERCENTS) -> list[PlRow]:
    """One exit scenario per percent, all starting from the full-ladder position."""
    pos = average_position(orders)
    return [
        PlRow(
            id=f"exit{n}",
            price=pos.price,
            amount=pos.amount,
            exit_price=percent_price(pos.price, pct),
        )
        for n, pct in enumerate(exit_percents, start=1)
    ]


def evaluate_pl_row(row: PlRow, fee: float) -> PlResult:
    pl = position_pl(row.price, row.exit_price, row.amount, fee)
    plp = position_pl_percent(row.price, row.exit_price, row.amount)
    return PlResult(pl=precision(pl, 3), pl_percent=precision(plp, 2))
