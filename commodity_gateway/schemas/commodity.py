from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CommodityMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    provider_function: str


class TimeSeriesPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    price: float


class NormalizedSeries(BaseModel):
    status: Literal["ok", "empty", "rate_limited", "unrecognized"]
    points: list[TimeSeriesPoint] = Field(default_factory=list)
    shapes: list[str] = Field(default_factory=list)
    skipped: int = 0
    notice: str | None = None


class CommodityQuote(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    display_name: str = Field(alias="displayName")
    current_price: float | None = Field(default=None, alias="currentPrice")
    change_1h_pct: float | None = Field(default=None, alias="change1hPct")
    change_4h_pct: float | None = Field(default=None, alias="change4hPct")
    change_24h_pct: float | None = Field(default=None, alias="change24hPct")


class CommodityQuotesResult(BaseModel):
    quotes: list[CommodityQuote] = Field(default_factory=list)
    error: str | None = None
    with_data: int = 0
