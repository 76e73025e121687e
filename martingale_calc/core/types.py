from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from martingale_calc.core.precision import percent_price


class Side(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class PositionSide(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"


def sign(x: float) -> int:
    if x > 0:
        return 1
    if x < 0:
        return -1
    return 0


@dataclass(frozen=True)
class Settings:
    symbol: str
    entry_price: float
    entry_amount: float
    price_percent: float
    x_price: float
    x_amount: float
    x_amount_after: int = 2
    x_position_amount: bool = False
    leverage: float = 1.0
    min_margin: float = 0.0
    fee: float = 0.0  # fraction per side, e.g. 0.00075
    log: bool = True  # log10 price stepping; False = linear
    aff_code: str | None = None

    @property
    def direction(self) -> int:
        return sign(self.price_percent)

    @property
    def end_price(self) -> float:
        return percent_price(self.entry_price, self.price_percent)

    @property
    def round_trip_fee(self) -> float:
        return 2 * self.fee


@dataclass(frozen=True)
class OrderRow:
    id: int | str
    op: float  # order price
    oa: float  # order amount, signed


@dataclass(frozen=True)
class PositionSnapshot:
    price: float
    amount: float

    @property
    def position_side(self) -> PositionSide | None:
        if self.amount > 0:
            return PositionSide.LONG
        if self.amount < 0:
            return PositionSide.SHORT
        return None


@dataclass(frozen=True)
class PlRow:
    id: str
    price: float
    amount: float
    exit_price: float


@dataclass(frozen=True)
class PlResult:
    pl: float
    pl_percent: float


@dataclass(frozen=True)
class GridRow:
    id: int | str
    pos_price: float
    pos_amount: float
    pos_cost: float
    pos_price_diff: float
    pos_price_diff_percent: float
    pos_liq_price: float
    pos_liq_distance: float
    order_price: float
    order_amount: float
    order_cost: float
    order_liq_price: float
    order_price_diff: float
    order_price_diff_percent: float
    pl: float
    pl_percent: float
    fee_pl: float
    fee_pl_percent: float


@dataclass
class IdSequence:
    """
    Caller-owned row id counter.

    Threaded explicitly through every call that creates rows so that id
    assignment is deterministic and independent of process state.
    """

    next_value: int = 0

    @classmethod
    def after(cls, rows: Iterable[OrderRow]) -> IdSequence:
        int_ids = [r.id for r in rows if isinstance(r.id, int)]
        return cls(next_value=(max(int_ids) + 1) if int_ids else 0)

    def next_id(self) -> int:
        value = self.next_value
        self.next_value += 1
        return value
