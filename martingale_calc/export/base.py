from __future__ import annotations

import json
import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from martingale_calc.core.precision import format_number
from martingale_calc.core.types import OrderRow, Settings


def compact_json(obj: Any) -> str:
    """
    Serialise like JSON.stringify: no whitespace, insertion order kept.

    Numbers use JavaScript text (0.00005, not 5e-05); non-finite numbers become null.
    """
    if obj is None or isinstance(obj, (bool, str)):
        return json.dumps(obj, ensure_ascii=False)
    if isinstance(obj, (int, float)):
        return format_number(obj) if math.isfinite(obj) else "null"
    if isinstance(obj, dict):
        items = (f"{json.dumps(str(k), ensure_ascii=False)}:{compact_json(v)}" for k, v in obj.items())
        return "{" + ",".join(items) + "}"
    if isinstance(obj, (list, tuple)):
        return "[" + ",".join(compact_json(v) for v in obj) + "]"
    raise TypeError(f"cannot serialise {type(obj).__name__} to JSON")


class OrderExporter(ABC):
    """Renders one order row as a venue-specific command string."""

    name: str

    @abstractmethod
    def render_order(self, settings: Settings, row: OrderRow) -> str:
        raise NotImplementedError


def export_orders(exporter: OrderExporter, settings: Settings, rows: Sequence[OrderRow]) -> str:
    return "\n".join(exporter.render_order(settings, row) for row in rows)
