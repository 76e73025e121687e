from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException

from martingale_calc.core.config import settings_from_payload
from martingale_calc.core.errors import EngineError
from martingale_calc.core.types import OrderRow, Settings
from martingale_calc.export.base import export_orders
from martingale_calc.export.registry import get_exporter, list_venues
from martingale_calc.importer.snapshot import import_snapshot
from martingale_calc.ladder.generator import generate_ladder
from martingale_calc.ladder.grid import build_grid
from martingale_calc.ladder.pl_rows import DEFAULT_EXIT_PERCENTS, evaluate_pl_row, get_pl_rows
from martingale_calc.monitoring.logger import get_logger

API_VERSION = "1"

app = FastAPI()
log = get_logger("ui")


def _settings(payload: dict[str, Any]) -> Settings:
    raw = payload.get("settings")
    if not isinstance(raw, dict):
        raise HTTPException(status_code=400, detail="settings object is required")
    try:
        return settings_from_payload(raw)
    except EngineError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def _rows(payload: dict[str, Any]) -> list[OrderRow] | None:
    raw = payload.get("rows")
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise HTTPException(status_code=400, detail="rows must be a list")
    try:
        return [OrderRow(id=r["id"], op=float(r["op"]), oa=float(r["oa"])) for r in raw]
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"invalid order row: {e}") from e


def _row_dict(row: OrderRow) -> dict[str, Any]:
    return {"id": row.id, "op": row.op, "oa": row.oa}


@app.get("/ui_meta")
def ui_meta() -> dict[str, Any]:
    return {"version": API_VERSION, "venues": list_venues()}


@app.post("/ladder")
def ladder(payload: dict[str, Any]) -> dict[str, Any]:
    settings = _settings(payload)
    try:
        rows = generate_ladder(settings)
    except EngineError as e:
        log.error("ladder failed: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"end_price": settings.end_price, "items": [_row_dict(r) for r in rows]}


@app.post("/grid")
def grid(payload: dict[str, Any]) -> dict[str, Any]:
    settings = _settings(payload)
    rows = _rows(payload)
    try:
        if rows is None:
            rows = generate_ladder(settings)
        items = build_grid(rows, settings)
    except EngineError as e:
        log.error("grid failed: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"items": [asdict(r) for r in items]}


@app.post("/pl_rows")
def pl_rows(payload: dict[str, Any]) -> dict[str, Any]:
    rows = _rows(payload) or []
    try:
        fee = float(payload.get("fee", 0.002))
        exit_percents = [float(p) for p in payload.get("exit_percents") or DEFAULT_EXIT_PERCENTS]
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"invalid fee/exit_percents: {e}") from e
    try:
        items = get_pl_rows(rows, exit_percents)
    except EngineError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    out = []
    for r in items:
        res = evaluate_pl_row(r, fee)
        out.append({**asdict(r), "pl": res.pl, "pl_percent": res.pl_percent})
    return {"items": out}


@app.post("/export/{venue}")
def export(venue: str, payload: dict[str, Any]) -> dict[str, Any]:
    try:
        exporter = get_exporter(venue)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    settings = _settings(payload)
    rows = _rows(payload)
    try:
        if rows is None:
            rows = generate_ladder(settings)
    except EngineError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"venue": exporter.name, "text": export_orders(exporter, settings, rows)}


@app.post("/import")
def import_data(payload: dict[str, Any]) -> dict[str, Any]:
    settings = _settings(payload)
    try:
        snap = import_snapshot(payload.get("data"), settings)
    except ValueError as e:
        log.error("import failed: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {
        "pl_rows": [asdict(r) for r in snap.pl_rows],
        "order_rows": [_row_dict(r) for r in snap.order_rows],
    }
