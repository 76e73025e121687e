from __future__ import annotations

from collections.abc import Iterator, Sequence

from martingale_calc.core.precision import precision
from martingale_calc.core.types import GridRow, OrderRow, PositionSnapshot, Settings
from martingale_calc.ladder.generator import validate_settings
from martingale_calc.portfolio.pnl import position_pl, position_pl_percent
from martingale_calc.portfolio.position import cost, scan_positions
from martingale_calc.risk.liquidation import liquidation_distance, liquidation_price


def _diff(previous: float | None, current: float) -> tuple[float, float]:
    """(previous - current, percent of previous); zeros when there is no previous value."""
    if previous is None:
        return 0.0, 0.0
    diff = previous - current
    diff_percent = diff / previous * 100 if previous else 0.0
    return precision(diff), precision(diff_percent, 2)


def _grid_row(
    rows: Sequence[OrderRow],
    positions: Sequence[PositionSnapshot],
    i: int,
    settings: Settings,
) -> GridRow:
    row = rows[i]
    pos = positions[i]
    prev_pos = positions[i - 1] if i > 0 else None
    prev_row = rows[i - 1] if i > 0 else None
    next_row = rows[i + 1] if i + 1 < len(rows) else row

    pos_liq = liquidation_price(pos.price, pos.amount, settings.leverage, settings.min_margin)
    order_liq = liquidation_price(row.op, row.oa, settings.leverage, settings.min_margin)
    pos_diff, pos_diff_pct = _diff(prev_pos.price if prev_pos else None, pos.price)
    ord_diff, ord_diff_pct = _diff(prev_row.op if prev_row else None, row.op)

    # P/L of the whole position if it were closed at this rung's fill price
    plp = position_pl_percent(pos.price, row.op, pos.amount)

    return GridRow(
        id=row.id,
        pos_price=pos.price,
        pos_amount=pos.amount,
        pos_cost=precision(cost(pos.price, pos.amount)),
        pos_price_diff=pos_diff,
        pos_price_diff_percent=pos_diff_pct,
        pos_liq_price=precision(pos_liq),
        pos_liq_distance=precision(liquidation_distance(next_row.op, pos_liq, pos.amount)),
        order_price=row.op,
        order_amount=row.oa,
        order_cost=precision(cost(row.op, row.oa)),
        order_liq_price=precision(order_liq),
        order_price_diff=ord_diff,
        order_price_diff_percent=ord_diff_pct,
        pl=precision(position_pl(pos.price, row.op, pos.amount, 0.0), 3),
        pl_percent=precision(plp, 2),
        fee_pl=precision(position_pl(pos.price, row.op, pos.amount, settings.round_trip_fee), 3),
        fee_pl_percent=precision(plp, 2),
    )


def build_grid(rows: Sequence[OrderRow], settings: Settings) -> list[GridRow]:
    """Derived columns for every row, served from one prefix scan of `rows`."""
    validate_settings(settings)
    positions = scan_positions(rows)
    return [_grid_row(rows, positions, i, settings) for i in range(len(rows))]


class DerivedGridModel:
    """
    Read-only projection of an order row array into per-row position columns.

    Nothing is cached: every read rescans the current rows, so edits made by
    the caller through `replace_rows` are visible on the next read.
    """

    def __init__(self, rows: Sequence[OrderRow], settings: Settings) -> None:
        validate_settings(settings)
        self._rows = list(rows)
        self._settings = settings

    @property
    def order_rows(self) -> list[OrderRow]:
        return list(self._rows)

    @property
    def settings(self) -> Settings:
        return self._settings

    def replace_rows(self, rows: Sequence[OrderRow]) -> None:
        self._rows = list(rows)

    def replace_settings(self, settings: Settings) -> None:
        validate_settings(settings)
        self._settings = settings

    def rows(self) -> list[GridRow]:
        return build_grid(self._rows, self._settings)

    def row(self, index: int) -> GridRow:
        if not 0 <= index < len(self._rows):
            raise IndexError(f"row index {index} out of range for {len(self._rows)} rows")
        # the prefix through `index` is all this row depends on, except for the next order price
        positions = scan_positions(self._rows[: index + 1])
        return _grid_row(self._rows, positions, index, self._settings)

    def positions(self) -> list[PositionSnapshot]:
        return scan_positions(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[GridRow]:
        return iter(self.rows())
