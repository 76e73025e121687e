from __future__ import annotations

import pytest

from martingale_calc.core.errors import ZeroPositionSize
from martingale_calc.core.types import PlRow
from martingale_calc.ladder.pl_rows import evaluate_pl_row, get_pl_rows


def test_pl_rows_copy_full_position(long_rows):
    rows = get_pl_rows(long_rows)
    assert [r.id for r in rows] == ["exit1", "exit2", "exit3"]
    assert all((r.price, r.amount) == (92.0, 4.0) for r in rows)
    assert rows[0].exit_price == pytest.approx(92.92, abs=0.011)
    assert rows[1].exit_price == pytest.approx(93.84, abs=0.011)
    assert rows[2].exit_price == pytest.approx(94.76, abs=0.011)


def test_custom_exit_percents(long_rows):
    rows = get_pl_rows(long_rows, [50])
    assert len(rows) == 1
    assert rows[0].exit_price == 138


def test_pl_rows_need_a_position():
    with pytest.raises(ZeroPositionSize):
        get_pl_rows([])


def test_evaluate_pl_row():
    res = evaluate_pl_row(PlRow(id="exit1", price=100.0, amount=1.0, exit_price=110.0), 0.0)
    assert res.pl == 10
    assert res.pl_percent == 10


def test_evaluate_pl_row_with_fee():
    res = evaluate_pl_row(PlRow(id="exit1", price=100.0, amount=1.0, exit_price=100.0), 0.002)
    assert res.pl == pytest.approx(-0.2, abs=0.0011)
    assert res.pl_percent == 0
