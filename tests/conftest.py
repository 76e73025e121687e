from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `import martingale_calc.*` works when running tests without installing the package.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from martingale_calc.core.types import OrderRow, Settings  # noqa: E402


@pytest.fixture()
def long_settings() -> Settings:
    # 128 -> 96 -> 72 with x_price 0.25 stays exact in binary floating point
    return Settings(
        symbol="tBTCF0:USTF0",
        entry_price=128.0,
        entry_amount=1.0,
        price_percent=-50.0,
        x_price=0.25,
        x_amount=2.0,
        x_amount_after=2,
        leverage=2.0,
        min_margin=0.0,
        fee=0.001,
        log=False,
    )


@pytest.fixture()
def long_rows() -> list[OrderRow]:
    return [
        OrderRow(id=0, op=128.0, oa=1.0),
        OrderRow(id=1, op=96.0, oa=1.0),
        OrderRow(id=2, op=72.0, oa=2.0),
    ]
