from __future__ import annotations

from typing import Any

from martingale_calc.core.precision import format_number
from martingale_calc.core.types import OrderRow, Settings
from martingale_calc.export.base import OrderExporter, compact_json


class BitfinexExporter(OrderExporter):
    """
    Venue A: a websocket "new order" request wrapped in a store dispatch call.

    The order itself travels as a JSON-encoded string inside `payload`.
    Keys whose value is unset are dropped, as JSON.stringify drops undefined.
    """

    name = "bitfinex"

    def order_data(self, settings: Settings, row: OrderRow) -> dict[str, Any]:
        meta: dict[str, Any] = {}
        if settings.leverage:
            meta["lev"] = settings.leverage
        if settings.aff_code is not None:
            meta["aff_code"] = settings.aff_code
        return {
            "type": "LIMIT",
            "symbol": settings.symbol,
            "flags": 0,
            "price": format_number(row.op),
            "amount": format_number(row.oa),
            "meta": meta,
        }

    def render_order(self, settings: Settings, row: OrderRow) -> str:
        message = {
            "type": "WS_REQUEST_SEND",
            "meta": {"isPublic": False, "throttle": True},
            "payload": compact_json([0, "on", None, self.order_data(settings, row)]),
        }
        return f"__dispatch({compact_json(message)})"
