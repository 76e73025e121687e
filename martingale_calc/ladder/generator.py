from __future__ import annotations

import math

from martingale_calc.core.errors import InvalidSettings, LadderDivergence
from martingale_calc.core.precision import precision
from martingale_calc.core.types import IdSequence, OrderRow, Settings
from martingale_calc.monitoring.logger import get_logger
from martingale_calc.portfolio.position import EMPTY_POSITION, fold_order

log = get_logger(__name__)

MAX_LADDER_ROWS = 1000


def validate_settings(settings: Settings) -> None:
    for name in ("entry_price", "leverage"):
        value = getattr(settings, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidSettings(f"{name} must be numeric, got {value!r}")
        if not math.isfinite(value) or value <= 0:
            raise InvalidSettings(f"{name} must be a positive number, got {value!r}")
    for name in ("entry_amount", "price_percent", "x_price", "x_amount", "min_margin", "fee"):
        value = getattr(settings, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise InvalidSettings(f"{name} must be a finite number, got {value!r}")


def next_price(price: float, x_price: float, sign: int, index: int, log_steps: bool) -> float:
    if log_steps:
        return precision(price + sign * price * x_price * math.log10((index + 2) * 1.3))
    return precision(price + sign * price * x_price)


def generate_ladder(
    settings: Settings,
    *,
    ids: IdSequence | None = None,
    max_rows: int = MAX_LADDER_ROWS,
) -> list[OrderRow]:
    """
    Build the martingale order ladder from the entry price toward settings.end_price.

    Prices step away from the entry by x_price per rung (scaled by
    log10((index + 2) * 1.3) in log mode). From rung x_amount_after onward
    each amount is the previous order amount, or the cumulative position
    amount when x_position_amount is set, multiplied by x_amount.
    """
    validate_settings(settings)
    if ids is None:
        ids = IdSequence()

    sign = settings.direction
    end_price = settings.end_price
    price = float(settings.entry_price)
    amount = float(settings.entry_amount)
    position = EMPTY_POSITION

    rows: list[OrderRow] = []
    while price * sign < sign * end_price:
        if len(rows) >= max_rows:
            log.warning(
                "ladder for %s did not reach %s after %d rows (last price %s)",
                settings.symbol,
                end_price,
                max_rows,
                price,
            )
            raise LadderDivergence(
                f"ladder did not reach end price {end_price} within {max_rows} rows (last price {price})"
            )
        rows.append(OrderRow(id=ids.next_id(), op=price, oa=amount))
        index = len(rows) - 1
        if settings.x_position_amount:
            position = fold_order(position, price, amount)

        price = next_price(price, settings.x_price, sign, index, settings.log)
        if index + 1 >= settings.x_amount_after:
            base = position.amount if settings.x_position_amount else amount
            amount = precision(base * settings.x_amount)

    log.debug("generated %d ladder rows for %s (end price %s)", len(rows), settings.symbol, end_price)
    return rows
