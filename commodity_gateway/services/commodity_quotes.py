from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from typing import Any, Mapping

from commodity_gateway.schemas.commodity import CommodityQuote, CommodityQuotesResult, NormalizedSeries
from commodity_gateway.services.commodity_catalog import COMMODITY_IDS, get_commodity_meta
from commodity_gateway.services.quote_builder import QUOTE_HORIZONS, build_commodity_quote
from commodity_gateway.services.series_normalizer import normalize_payload

MISSING_API_KEY_ERROR = "Missing API key"


class CommodityQuoteService:
    """Fan-out/fan-in quote resolver over the fixed commodity set.

    Each symbol is fetched on its own worker; a failure there only empties
    that symbol's quote.
    """

    def __init__(
        self,
        *,
        provider_client,
        api_key: str,
        commodity_ids: tuple[str, ...] = COMMODITY_IDS,
        horizons: Mapping[str, timedelta] = QUOTE_HORIZONS,
        max_workers: int = len(COMMODITY_IDS),
    ) -> None:
        self.provider_client = provider_client
        self.api_key = api_key
        # unknown ids fail here rather than inside a worker
        self.commodity_ids = tuple(get_commodity_meta(cid).id for cid in commodity_ids)
        self.horizons = horizons
        self.max_workers = max(1, max_workers)
        self._lock = threading.Lock()

        self.requests = 0
        self.fetch_errors = 0
        self.resolve_errors = 0
        self.rate_limited = 0
        self.skipped_records = 0
        self.missing_api_key = 0
        self.last_batch_target = 0
        self.last_batch_with_data = 0

    def has_api_key(self) -> bool:
        return bool(str(self.api_key or "").strip())

    def _fetch_series(self, commodity_id: str) -> tuple[Any, NormalizedSeries]:
        meta = get_commodity_meta(commodity_id)
        try:
            raw = self.provider_client.fetch_series(meta.provider_function)
        except Exception as exc:
            with self._lock:
                self.fetch_errors += 1
            print(
                f"[COMMODITY][fetch_error] symbol={meta.id} error={type(exc).__name__}: {exc}",
                flush=True,
            )
            return None, NormalizedSeries(status="empty")

        try:
            series = normalize_payload(raw)
        except Exception as exc:
            with self._lock:
                self.resolve_errors += 1
            print(
                f"[COMMODITY][parse_error] symbol={meta.id} error={type(exc).__name__}: {exc}",
                flush=True,
            )
            return raw, NormalizedSeries(status="empty")

        with self._lock:
            self.skipped_records += series.skipped
            if series.status == "rate_limited":
                self.rate_limited += 1
        if series.status == "rate_limited":
            print(f"[COMMODITY][rate_limited] symbol={meta.id} notice={series.notice}", flush=True)
        elif series.status != "ok":
            print(f"[COMMODITY][no_data] symbol={meta.id} status={series.status}", flush=True)
        return raw, series

    def _build(self, commodity_id: str, series: NormalizedSeries) -> CommodityQuote:
        try:
            return build_commodity_quote(commodity_id, series.points, self.horizons)
        except Exception as exc:
            with self._lock:
                self.resolve_errors += 1
            print(
                f"[COMMODITY][build_error] symbol={commodity_id} error={type(exc).__name__}: {exc}",
                flush=True,
            )
            return build_commodity_quote(commodity_id, [], self.horizons)

    def _resolve(self, commodity_id: str) -> CommodityQuote:
        _, series = self._fetch_series(commodity_id)
        return self._build(commodity_id, series)

    def get_quote(self, commodity_id: str) -> CommodityQuote:
        meta = get_commodity_meta(commodity_id)
        if not self.has_api_key():
            return build_commodity_quote(meta.id, [], self.horizons)
        return self._resolve(meta.id)

    def get_quotes(self) -> CommodityQuotesResult:
        has_key = self.has_api_key()
        with self._lock:
            self.requests += 1
            if not has_key:
                self.missing_api_key += 1
        if not has_key:
            print("[COMMODITY][missing_api_key] fetch_skipped=1", flush=True)
            return CommodityQuotesResult(quotes=[], error=MISSING_API_KEY_ERROR)

        with ThreadPoolExecutor(
            max_workers=min(self.max_workers, max(len(self.commodity_ids), 1)),
            thread_name_prefix="commodity-fetch",
        ) as pool:
            # map() yields in submission order, i.e. canonical symbol order
            quotes = list(pool.map(self._resolve, self.commodity_ids))

        with_data = sum(1 for q in quotes if q.current_price is not None)
        with self._lock:
            self.last_batch_target = len(self.commodity_ids)
            self.last_batch_with_data = with_data

        print(
            "[COMMODITY][batch_resolve] "
            f"target_count={len(self.commodity_ids)} with_data={with_data} "
            f"fetch_errors={self.fetch_errors} rate_limited={self.rate_limited}",
            flush=True,
        )
        return CommodityQuotesResult(quotes=quotes, with_data=with_data)

    def inspect(self, commodity_id: str = "WTI") -> dict[str, Any]:
        """Single-symbol resolve that keeps the raw provider payload for debugging."""
        meta = get_commodity_meta(commodity_id)
        with self._lock:
            self.requests += 1
        raw, series = self._fetch_series(meta.id)
        quote = self._build(meta.id, series)
        print(
            f"[COMMODITY][inspect] symbol={meta.id} status={series.status} "
            f"points={len(series.points)} skipped={series.skipped}",
            flush=True,
        )
        return {
            "raw": raw,
            "parsed_points_count": len(series.points),
            "status": series.status,
            "shapes": series.shapes,
            "quote": quote,
        }

    def metrics(self) -> dict[str, int]:
        return {
            "requests": self.requests,
            "fetch_errors": self.fetch_errors,
            "resolve_errors": self.resolve_errors,
            "rate_limited": self.rate_limited,
            "skipped_records": self.skipped_records,
            "missing_api_key": self.missing_api_key,
            "batch_target_count": self.last_batch_target,
            "batch_with_data": self.last_batch_with_data,
        }
