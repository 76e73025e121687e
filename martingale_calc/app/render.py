from __future__ import annotations

from collections.abc import Sequence

from martingale_calc.core.precision import format_number as _n
from martingale_calc.core.types import GridRow, PlResult, PlRow

GRID_COLUMNS: list[tuple[str, str]] = [
    ("Pos Price", "pos_price"),
    ("Pos Liq Price (diff)", "pos_liq"),
    ("Pos Price diff", "pos_diff"),
    ("Pos Amount", "pos_amount"),
    ("Pos Cost", "pos_cost"),
    ("Ord Price", "order_price"),
    ("Ord Liq Price", "order_liq_price"),
    ("Ord Price diff", "order_diff"),
    ("Ord Amount", "order_amount"),
    ("Ord Cost", "order_cost"),
    ("P/L (%)", "pl"),
    ("Fee P/L (%)", "fee_pl"),
]


def _cells(row: GridRow) -> dict[str, str]:
    return {
        "pos_price": _n(row.pos_price),
        "pos_liq": f"{_n(row.pos_liq_price)} ({_n(row.pos_liq_distance)})",
        "pos_diff": f"{_n(row.pos_price_diff)} ({_n(row.pos_price_diff_percent)}%)",
        "pos_amount": _n(row.pos_amount),
        "pos_cost": _n(row.pos_cost),
        "order_price": _n(row.order_price),
        "order_liq_price": _n(row.order_liq_price),
        "order_diff": f"{_n(row.order_price_diff)} ({_n(row.order_price_diff_percent)}%)",
        "order_amount": _n(row.order_amount),
        "order_cost": _n(row.order_cost),
        "pl": f"{_n(row.pl)} ({_n(row.pl_percent)}%)",
        "fee_pl": f"{_n(row.fee_pl)} ({_n(row.fee_pl_percent)}%)",
    }


def _table(headers: list[str], body: list[list[str]]) -> str:
    widths = [len(h) for h in headers]
    for line in body:
        widths = [max(w, len(c)) for w, c in zip(widths, line)]
    out = ["  ".join(h.rjust(w) for h, w in zip(headers, widths))]
    out.append("  ".join("-" * w for w in widths))
    out.extend("  ".join(c.rjust(w) for c, w in zip(line, widths)) for line in body)
    return "\n".join(out)


def render_grid(rows: Sequence[GridRow]) -> str:
    headers = [title for title, _ in GRID_COLUMNS]
    body = []
    for row in rows:
        cells = _cells(row)
        body.append([cells[key] for _, key in GRID_COLUMNS])
    return _table(headers, body)


def render_pl_rows(rows: Sequence[tuple[PlRow, PlResult]]) -> str:
    headers = ["Pos Price", "Pos Amount", "Exit Price", "P/L"]
    body = [
        [_n(r.price), _n(r.amount), _n(r.exit_price), f"{_n(res.pl)} ({_n(res.pl_percent)}%)"]
        for r, res in rows
    ]
    return _table(headers, body)
