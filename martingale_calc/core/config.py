from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from martingale_calc.core.errors import InvalidSettings
from martingale_calc.core.types import Settings


class LoggingConfig(BaseModel):
    level: str = "INFO"


class LadderConfig(BaseModel):
    """Ladder settings as the settings form sends them (camelCase) or as written in YAML (snake_case)."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    symbol: str = "tBTCF0:USTF0"
    entry_price: float = Field(9000.0, alias="entryPrice", gt=0)
    entry_amount: float = Field(0.005, alias="entryAmount")
    price_percent: float = Field(-10.0, alias="pricePercent")
    x_price: float = Field(0.011, alias="xPrice")
    x_amount: float = Field(2.0, alias="xAmount")
    x_amount_after: int = Field(2, alias="xAmountAfter")
    x_position_amount: bool = Field(False, alias="xPositionAmount")
    leverage: float = Field(25.0, gt=0)
    min_margin: float = Field(0.0, alias="minMargin")
    fee: float = 0.00075  # fraction per side
    log: bool = True
    aff_code: str | None = Field(None, alias="affCode")

    def to_settings(self) -> Settings:
        return Settings(
            symbol=self.symbol,
            entry_price=self.entry_price,
            entry_amount=self.entry_amount,
            price_percent=self.price_percent,
            x_price=self.x_price,
            x_amount=self.x_amount,
            x_amount_after=self.x_amount_after,
            x_position_amount=self.x_position_amount,
            leverage=self.leverage,
            min_margin=self.min_margin,
            fee=self.fee,
            log=self.log,
            aff_code=self.aff_code,
        )


class GridConfig(BaseModel):
    max_rows: int = 1000
    exit_percents: list[float] = Field(default_factory=lambda: [1.0, 2.0, 3.0])
    pl_fee: float = 0.002


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    ladder: LadderConfig = Field(default_factory=LadderConfig)
    grid: GridConfig = Field(default_factory=GridConfig)


def settings_from_payload(payload: dict[str, Any]) -> Settings:
    try:
        return LadderConfig.model_validate(payload).to_settings()
    except ValidationError as e:
        raise InvalidSettings(str(e)) from e


def load_config(path: str) -> AppConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)
    data = yaml.safe_load(p.read_text()) or {}
    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise InvalidSettings(f"{path}: {e}") from e
