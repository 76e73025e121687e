from __future__ import annotations

import argparse
import sys

from martingale_calc.app.render import render_grid, render_pl_rows
from martingale_calc.core.config import AppConfig, load_config
from martingale_calc.core.errors import EngineError
from martingale_calc.export.base import export_orders
from martingale_calc.export.registry import get_exporter, list_venues
from martingale_calc.ladder.generator import generate_ladder
from martingale_calc.ladder.grid import build_grid
from martingale_calc.ladder.pl_rows import evaluate_pl_row, get_pl_rows
from martingale_calc.monitoring.logger import get_logger, setup_logging

log = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="martingale-calc")
    p.add_argument("--log-level", default=None, help="Override logging.level from the config")
    sub = p.add_subparsers(dest="command", required=True)

    ladder = sub.add_parser("ladder", help="Generate the ladder and print the derived grid")
    ladder.add_argument("--config", required=True, help="Path to YAML config (e.g., configs/default.yaml)")

    pl = sub.add_parser("pl", help="Print P/L at the configured exit percents")
    pl.add_argument("--config", required=True, help="Path to YAML config (e.g., configs/default.yaml)")

    export = sub.add_parser("export", help="Print venue order commands, one per ladder row")
    export.add_argument("--config", required=True, help="Path to YAML config (e.g., configs/default.yaml)")
    export.add_argument("--venue", required=True, choices=list_venues())

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return p


def _run(command: str, cfg: AppConfig, args: argparse.Namespace) -> str:
    settings = cfg.ladder.to_settings()
    rows = generate_ladder(settings, max_rows=cfg.grid.max_rows)
    log.info("%s: %d ladder rows for %s", command, len(rows), settings.symbol)

    if command == "ladder":
        return render_grid(build_grid(rows, settings))
    if command == "pl":
        pl_rows = get_pl_rows(rows, cfg.grid.exit_percents)
        return render_pl_rows([(r, evaluate_pl_row(r, cfg.grid.pl_fee)) for r in pl_rows])
    if command == "export":
        return export_orders(get_exporter(args.venue), settings, rows)
    raise ValueError(f"unknown command {command!r}")


def _serve(host: str, port: int) -> int:
    import uvicorn

    log.info("serving HTTP API on %s:%d", host, port)
    # log_config=None keeps the handlers and levels set by setup_logging
    uvicorn.run("martingale_calc.app.ui_server:app", host=host, port=port, log_config=None)
    return 0


def run(argv: list[str]) -> int:
    args = _build_parser().parse_args(argv)
    if args.command == "serve":
        setup_logging(args.log_level or "INFO")
        return _serve(args.host, args.port)

    try:
        cfg = load_config(args.config)
    except FileNotFoundError as e:
        setup_logging(args.log_level or "INFO")
        log.error("config not found: %s", e)
        return 2
    except EngineError as e:
        setup_logging(args.log_level or "INFO")
        log.error("invalid config: %s", e)
        return 2
    setup_logging(args.log_level or cfg.logging.level)

    try:
        output = _run(args.command, cfg, args)
    except EngineError as e:
        log.error("%s failed: %s: %s", args.command, type(e).__name__, e)
        return 2
    print(output)
    return 0


def main() -> None:
    try:
        rc = run(sys.argv[1:])
    except KeyboardInterrupt:
        rc = 130
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
