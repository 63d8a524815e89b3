from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

from commodity_gateway.schemas.commodity import CommodityQuote, TimeSeriesPoint
from commodity_gateway.services.commodity_catalog import COMMODITY_IDS
from commodity_gateway.services.quote_builder import build_commodity_quote

# (offset from now, multiplier of the random base price)
_MOCK_SHAPE = (
    (timedelta(hours=24), 0.95),
    (timedelta(hours=4), 0.98),
    (timedelta(hours=1), 1.01),
    (timedelta(0), 1.02),
)


def build_mock_series(
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> list[TimeSeriesPoint]:
    """Placeholder series used when live quotes are unavailable."""
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()
    base = 100 + rng.random() * 20
    return [
        TimeSeriesPoint(timestamp=now - offset, price=base * factor)
        for offset, factor in _MOCK_SHAPE
    ]


def build_mock_quotes(
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> list[CommodityQuote]:
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()
    return [build_commodity_quote(cid, build_mock_series(now, rng)) for cid in COMMODITY_IDS]
