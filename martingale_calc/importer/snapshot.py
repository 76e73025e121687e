from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from martingale_calc.core.types import OrderRow, PlRow, Settings, sign
from martingale_calc.monitoring.logger import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ImportedSnapshot:
    pl_rows: list[PlRow] = field(default_factory=list)
    order_rows: list[OrderRow] = field(default_factory=list)


def _require_list(obj: Any, what: str) -> list[dict[str, Any]]:
    if not isinstance(obj, list) or not all(isinstance(x, dict) for x in obj):
        raise ValueError(f"snapshot {what} must be a list of objects")
    return obj


def import_snapshot(data: dict[str, Any], settings: Settings) -> ImportedSnapshot:
    """
    Filter an exchange UI state dump into P/L rows and order rows.

    Expected shape: {"positions": [...], "orders": {"all": [...]}}.
    Active positions on the settings symbol come first in the order rows,
    followed by active LIMIT orders on the same side as the entry amount.
    """
    if not isinstance(data, dict):
        raise ValueError("snapshot must be a JSON object")
    try:
        positions = _require_list(data["positions"], "positions")
        orders_section = data["orders"]
        if not isinstance(orders_section, dict):
            raise ValueError("snapshot orders must be an object")
        orders = _require_list(orders_section["all"], "orders.all")
    except KeyError as e:
        raise ValueError(f"snapshot is missing key {e.args[0]!r}") from e

    active = [p for p in positions if p.get("status") == "ACTIVE"]
    try:
        pl_rows = [
            PlRow(
                id=str(p["id"]),
                price=float(p["basePrice"]),
                amount=float(p["amount"]),
                exit_price=float(p["basePrice"]),
            )
            for p in active
        ]
        position_rows = [
            OrderRow(id=p["id"], op=float(p["basePrice"]), oa=float(p["amount"]))
            for p in active
            if p.get("pair") == settings.symbol
        ]
        # order symbols drop the leading type prefix ("tBTCUSD" -> "BTCUSD")
        order_symbol = settings.symbol[1:]
        entry_sign = sign(settings.entry_amount)
        order_rows = [
            OrderRow(id=o["id"], op=float(o["price"]), oa=float(o["amount"]))
            for o in orders
            if o.get("symbol") == order_symbol
            and o.get("status") == "ACTIVE"
            and o.get("type") == "LIMIT"
            and sign(float(o.get("amount", 0))) == entry_sign
        ]
    except KeyError as e:
        raise ValueError(f"snapshot entry is missing key {e.args[0]!r}") from e
    except (TypeError, ValueError) as e:
        raise ValueError(f"snapshot entry has a non-numeric field: {e}") from e

    log.debug(
        "imported %d pl rows, %d position rows, %d order rows for %s",
        len(pl_rows),
        len(position_rows),
        len(order_rows),
        settings.symbol,
    )
    return ImportedSnapshot(pl_rows=pl_rows, order_rows=position_rows + order_rows)
