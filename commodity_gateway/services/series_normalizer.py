from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from commodity_gateway.schemas.commodity import NormalizedSeries, TimeSeriesPoint

RATE_LIMIT_KEYS = ("Note", "Information")
FLAT_LIST_KEY = "data"
FLAT_VALUE_KEYS = ("value", "close")
KEYED_SERIES_PREFIX = "Time Series"
CLOSE_ALIASES = ("4. close", "close", "5. adjusted close", "value")

# provider placeholders for "no observation on this date"
_MISSING_VALUES = {".", ""}


def _to_price(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if value in _MISSING_VALUES:
            return None
    try:
        price = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(price):
        return None
    return price


def _to_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def _first_present(record: dict, keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def parse_flat_record(record: Any) -> TimeSeriesPoint | None:
    """Shape A record: ``{"date": "2024-01-02", "value": "71.3"}``. None means skip."""
    if not isinstance(record, dict):
        return None
    timestamp = _to_timestamp(record.get("date"))
    if timestamp is None:
        return None
    price = _to_price(_first_present(record, FLAT_VALUE_KEYS))
    if price is None:
        return None
    return TimeSeriesPoint(timestamp=timestamp, price=price)


def parse_keyed_record(date_key: Any, record: Any) -> TimeSeriesPoint | None:
    """Shape B entry: ``"2024-01-02": {"4. close": "71.3", ...}``. None means skip."""
    if not isinstance(record, dict):
        return None
    timestamp = _to_timestamp(date_key)
    if timestamp is None:
        return None
    price = _to_price(_first_present(record, CLOSE_ALIASES))
    if price is None:
        return None
    return TimeSeriesPoint(timestamp=timestamp, price=price)


def rate_limit_notice(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    for key in RATE_LIMIT_KEYS:
        if key in payload:
            return str(payload[key])
    return None


def normalize_payload(payload: Any) -> NormalizedSeries:
    """Turn a raw provider payload into an ascending point series.

    Both known shapes are tried and their points merged; a payload that
    matches neither, or carries a rate-limit notice, yields an empty series
    with a status saying why. Malformed records are counted in ``skipped``.
    """
    if not isinstance(payload, dict):
        return NormalizedSeries(status="unrecognized")

    notice = rate_limit_notice(payload)
    if notice is not None:
        return NormalizedSeries(status="rate_limited", notice=notice)

    points: list[TimeSeriesPoint] = []
    shapes: list[str] = []
    skipped = 0

    flat = payload.get(FLAT_LIST_KEY)
    if isinstance(flat, list):
        shapes.append("flat_list")
        for record in flat:
            point = parse_flat_record(record)
            if point is None:
                skipped += 1
                continue
            points.append(point)

    for key, value in payload.items():
        if not isinstance(key, str) or not key.startswith(KEYED_SERIES_PREFIX):
            continue
        if not isinstance(value, dict):
            continue
        shapes.append("keyed_by_date")
        for date_key, record in value.items():
            point = parse_keyed_record(date_key, record)
            if point is None:
                skipped += 1
                continue
            points.append(point)

    if not shapes:
        return NormalizedSeries(status="unrecognized")

    points.sort(key=lambda p: p.timestamp)
    return NormalizedSeries(
        status="ok" if points else "empty",
        points=points,
        shapes=shapes,
        skipped=skipped,
    )
