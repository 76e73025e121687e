from __future__ import annotations

from martingale_calc.export.base import OrderExporter
from martingale_calc.export.binance_futures import BinanceFuturesExporter
from martingale_calc.export.bitfinex import BitfinexExporter

# Used only by the CLI / HTTP edge to turn a user-supplied name into an exporter.
EXPORTERS: dict[str, type[OrderExporter]] = {
    BitfinexExporter.name: BitfinexExporter,
    BinanceFuturesExporter.name: BinanceFuturesExporter,
}


def list_venues() -> list[str]:
    return sorted(EXPORTERS)


def get_exporter(name: str) -> OrderExporter:
    try:
        return EXPORTERS[name.strip().lower()]()
    except KeyError:
        raise KeyError(f"unknown export venue {name!r}; expected one of {list_venues()}") from None
