from __future__ import annotations

from collections.abc import Sequence

from martingale_calc.core.errors import ZeroPositionSize
from martingale_calc.core.precision import precision
from martingale_calc.core.types import OrderRow, PositionSnapshot
from martingale_calc.monitoring.logger import get_logger

log = get_logger(__name__)

EMPTY_POSITION = PositionSnapshot(price=0.0, amount=0.0)


def cost(price: float, amount: float) -> float:
    return float(price) * float(amount)


def fold_order(position: PositionSnapshot, op: float, oa: float) -> PositionSnapshot:
    """
    Add one filled order to a running position.

    Cost terms are rounded before they are summed, then the quotient is
    rounded. The same granularity is used for every fold.
    """
    pp, pa = position.price, position.amount
    op, oa = float(op), float(oa)
    total = pa + oa
    if total == 0:
        log.warning("position size reached zero (pa=%s oa=%s)", pa, oa)
        raise ZeroPositionSize(f"cumulative position amount is zero after order ({op}, {oa})")
    price = precision((precision(cost(pp, pa)) + precision(cost(op, oa))) / total)
    return PositionSnapshot(price=price, amount=precision(total))


def average_position(orders: Sequence[OrderRow], prefix_length: int | None = None) -> PositionSnapshot:
    """Fold orders[:prefix_length] (default: all) into one cost-weighted position."""
    if prefix_length is None:
        prefix_length = len(orders)
    if prefix_length < 0:
        raise ValueError(f"prefix_length must be >= 0, got {prefix_length}")
    prefix = orders[:prefix_length]
    if not prefix:
        raise ZeroPositionSize("cannot average an empty order prefix")
    position = EMPTY_POSITION
    for order in prefix:
        position = fold_order(position, order.op, order.oa)
    return position


def scan_positions(orders: Sequence[OrderRow]) -> list[PositionSnapshot]:
    """Cumulative position after each order, computed in a single pass."""
    out: list[PositionSnapshot] = []
    position = EMPTY_POSITION
    for order in orders:
        position = fold_order(position, order.op, order.oa)
        out.append(position)
    log.debug("scanned %d positions", len(out))
    return out
