from __future__ import annotations

import pytest

from martingale_calc.core.types import OrderRow, Settings
from martingale_calc.importer.snapshot import import_snapshot


def _settings(entry_amount: float = 0.005) -> Settings:
    return Settings(
        symbol="tBTCF0:USTF0",
        entry_price=9000.0,
        entry_amount=entry_amount,
        price_percent=-10.0,
        x_price=0.011,
        x_amount=2.0,
        leverage=25.0,
    )


def _snapshot() -> dict:
    return {
        "positions": [
            {"id": 11, "pair": "tBTCF0:USTF0", "status": "ACTIVE", "basePrice": 9100, "amount": 0.01},
            {"id": 12, "pair": "tETHF0:USTF0", "status": "ACTIVE", "basePrice": 210, "amount": 1},
            {"id": 13, "pair": "tBTCF0:USTF0", "status": "CLOSED", "basePrice": 8000, "amount": 0.02},
        ],
        "orders": {
            "all": [
                {"id": 21, "symbol": "BTCF0:USTF0", "status": "ACTIVE", "type": "LIMIT", "price": 8900, "amount": 0.02},
                {"id": 22, "symbol": "BTCF0:USTF0", "status": "ACTIVE", "type": "LIMIT", "price": 9500, "amount": -0.02},
                {"id": 23, "symbol": "BTCF0:USTF0", "status": "ACTIVE", "type": "STOP", "price": 8000, "amount": 0.02},
                {"id": 24, "symbol": "ETHF0:USTF0", "status": "ACTIVE", "type": "LIMIT", "price": 200, "amount": 1},
                {"id": 25, "symbol": "BTCF0:USTF0", "status": "CANCELED", "type": "LIMIT", "price": 8800, "amount": 0.02},
            ]
        },
    }


def test_import_filters_positions_and_orders():
    snap = import_snapshot(_snapshot(), _settings())
    assert snap.order_rows == [
        OrderRow(id=11, op=9100.0, oa=0.01),
        OrderRow(id=21, op=8900.0, oa=0.02),
    ]
    assert [r.id for r in snap.pl_rows] == ["11", "12"]
    assert snap.pl_rows[0].exit_price == snap.pl_rows[0].price == 9100.0


def test_import_keeps_short_side_orders_for_short_entry():
    snap = import_snapshot(_snapshot(), _settings(entry_amount=-0.005))
    assert [r.id for r in snap.order_rows] == [11, 22]


@pytest.mark.parametrize(
    "data",
    [
        None,
        [],
        {"positions": []},
        {"positions": [], "orders": []},
        {"positions": "x", "orders": {"all": []}},
        {"positions": [{"status": "ACTIVE", "basePrice": 1}], "orders": {"all": []}},
        {"positions": [{"id": 1, "status": "ACTIVE", "basePrice": "abc", "amount": 1}], "orders": {"all": []}},
    ],
)
def test_malformed_snapshot_rejected(data):
    with pytest.raises(ValueError):
        import_snapshot(data, _settings())
