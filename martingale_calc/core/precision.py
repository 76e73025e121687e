from __future__ import annotations

import math
from decimal import Decimal

# (upper bound on |value|, decimals); values >= the last bound use 0 decimals
_DECIMAL_STEPS: tuple[tuple[float, int], ...] = (
    (0.0005, 6),
    (0.005, 5),
    (0.05, 4),
    (0.5, 3),
    (1000.0, 2),
    (10000.0, 1),
)


def get_decimals(value: float) -> int:
    abs_value = abs(value)
    for bound, decimals in _DECIMAL_STEPS:
        if abs_value < bound:
            return decimals
    return 0


def precision(value: float, decimals: int | None = None) -> float:
    """
    Truncate toward negative infinity at a magnitude-dependent decimal count.

    -1.2367 at 3 decimals -> -1.237 (floor, not symmetric truncation).
    Non-finite values pass through unchanged.
    """
    value = float(value)
    if not math.isfinite(value):
        return value
    if decimals is None:
        decimals = get_decimals(value)
    scale = 10**decimals
    return math.floor(value * scale) / scale


def percent_price(entry_price: float, percent: float) -> float:
    entry_price = float(entry_price)
    return precision(entry_price + entry_price * (float(percent) / 100))


def price_percent(price: float, entry_price: float) -> float:
    entry_price = float(entry_price)
    return precision(((float(price) - entry_price) * 100) / entry_price)


def format_number(value: float) -> str:
    """
    Render a number like JavaScript's String().

    9000.0 -> '9000', 0.000012 -> '0.000012'. Exponent notation is used only
    outside [1e-6, 1e21), as '1e-7' / '1e+21'.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")
    mantissa, exponent = text.split("e")
    return f"{mantissa}e{int(exponent):+d}"
