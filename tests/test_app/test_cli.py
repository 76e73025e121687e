from __future__ import annotations

from pathlib import Path

import pytest

from martingale_calc.app.main import run


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


@pytest.fixture()
def config_path() -> str:
    return str(_repo_root() / "configs" / "default.yaml")


def test_ladder_prints_grid(config_path, capsys):
    assert run(["ladder", "--config", config_path]) == 0
    out = capsys.readouterr().out
    assert "Pos Price" in out
    assert "Fee P/L (%)" in out
    assert "9000" in out


def test_pl_prints_exit_rows(config_path, capsys):
    assert run(["pl", "--config", config_path]) == 0
    out = capsys.readouterr().out.splitlines()
    # header, separator, three exit rows
    assert len(out) == 5
    assert "Exit Price" in out[0]


@pytest.mark.parametrize(("venue", "prefix"), [("bitfinex", "__dispatch("), ("binance_futures", "__NEXT_REDUX_STORE__.dispatch(")])
def test_export_prints_commands(config_path, capsys, venue, prefix):
    assert run(["export", "--config", config_path, "--venue", venue]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines
    assert all(line.startswith(prefix) for line in lines)


def test_divergent_config_exits_with_error(tmp_path: Path, capsys):
    p = tmp_path / "flat.yaml"
    p.write_text("ladder:\n  x_price: 0\n  x_amount: 1\n  log: false\ngrid:\n  max_rows: 20\n")
    assert run(["--log-level", "DEBUG", "ladder", "--config", str(p)]) == 2
    assert capsys.readouterr().out == ""


def test_missing_config_exits_with_error(tmp_path: Path):
    assert run(["ladder", "--config", str(tmp_path / "nope.yaml")]) == 2


def test_unknown_venue_is_rejected(config_path):
    with pytest.raises(SystemExit):
        run(["export", "--config", config_path, "--venue", "kraken"])


def test_serve_runs_http_app(monkeypatch):
    import uvicorn

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    assert run(["serve", "--port", "9001"]) == 0
    ((app, kwargs),) = calls
    assert app == "martingale_calc.app.ui_server:app"
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 9001
    assert kwargs["log_config"] is None
