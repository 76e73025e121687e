from __future__ import annotations

from typing import Any

from martingale_calc.core.precision import format_number
from martingale_calc.core.types import OrderRow, PositionSide, Settings, Side
from martingale_calc.export.base import OrderExporter, compact_json


class BinanceFuturesExporter(OrderExporter):
    """Venue B: a GTC limit order dispatched to the futures order form store."""

    name = "binance_futures"

    def order_payload(self, settings: Settings, row: OrderRow) -> dict[str, Any]:
        is_buy = row.oa > 0
        return {
            "symbol": settings.symbol,
            "quantity": abs(row.oa),
            "type": "LIMIT",
            "timeInForce": "GTC",
            "leverage": settings.leverage,
            "side": (Side.BUY if is_buy else Side.SELL).value,
            "stopPrice": None,
            "workingType": None,
            "positionSide": (PositionSide.LONG if is_buy else PositionSide.SHORT).value,
            "price": format_number(row.op),
        }

    def render_order(self, settings: Settings, row: OrderRow) -> str:
        message = {"type": "futuresOrderForm/placeOrder", "payload": self.order_payload(settings, row)}
        return f"__NEXT_REDUX_STORE__.dispatch({compact_json(message)})"
