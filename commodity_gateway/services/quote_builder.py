from __future__ import annotations

from datetime import timedelta
from types import MappingProxyType
from typing import Iterable, Mapping

from commodity_gateway.schemas.commodity import CommodityQuote, TimeSeriesPoint
from commodity_gateway.services.commodity_catalog import get_commodity_meta

# Provider data is daily, so the 1h/4h lookups land on the nearest prior day.
QUOTE_HORIZONS: Mapping[str, timedelta] = MappingProxyType(
    {
        "change_1h_pct": timedelta(hours=1),
        "change_4h_pct": timedelta(hours=4),
        "change_24h_pct": timedelta(hours=24),
    }
)


def compute_change_pct(current: float, reference: float | None) -> float | None:
    if reference is None or reference == 0:
        return None
    return (current - reference) / reference * 100


def find_closest_point(points: list[TimeSeriesPoint], target) -> TimeSeriesPoint | None:
    """Nearest point to ``target``; on a tie the earlier point in ``points`` wins."""
    best: TimeSeriesPoint | None = None
    best_diff: timedelta | None = None
    for point in points:
        diff = abs(point.timestamp - target)
        if best_diff is None or diff < best_diff:
            best = point
            best_diff = diff
    return best


def build_commodity_quote(
    commodity_id: str,
    points: Iterable[TimeSeriesPoint],
    horizons: Mapping[str, timedelta] = QUOTE_HORIZONS,
) -> CommodityQuote:
    meta = get_commodity_meta(commodity_id)
    ordered = sorted(points, key=lambda p: p.timestamp)
    if not ordered:
        return CommodityQuote(id=meta.id, display_name=meta.display_name)

    anchor = ordered[-1]
    # only observations before the anchor can serve as a reference
    candidates = [p for p in ordered if p.timestamp < anchor.timestamp]

    changes: dict[str, float | None] = {}
    for field_name, horizon in horizons.items():
        reference = find_closest_point(candidates, anchor.timestamp - horizon)
        changes[field_name] = compute_change_pct(
            anchor.price, reference.price if reference is not None else None
        )

    return CommodityQuote(
        id=meta.id,
        display_name=meta.display_name,
        current_price=anchor.price,
        **changes,
    )
