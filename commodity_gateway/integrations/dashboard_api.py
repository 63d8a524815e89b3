from __future__ import annotations

from typing import Any, Callable, Optional

import requests
from pydantic import ValidationError

from commodity_gateway.schemas.commodity import CommodityQuote
from commodity_gateway.services.mock_series import build_mock_quotes


class CommodityDashboardClient:
    """Dashboard-side consumer of ``/v1/commodities`` with a mock fallback.

    The dashboard never shows a hard error: whenever the gateway cannot be
    reached or answers with something other than a quote list, placeholder
    quotes are synthesized locally instead.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[Any] = None,
        timeout_sec: float = 5.0,
        mock_factory: Optional[Callable[[], list[CommodityQuote]]] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests
        self.timeout_sec = timeout_sec
        self.mock_factory = mock_factory or build_mock_quotes
        self.last_source: str | None = None
        self.last_error: str | None = None

    def _fetch_live(self) -> list[CommodityQuote]:
        response = self.session.get(f"{self.base_url}/v1/commodities", timeout=self.timeout_sec)
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, list):
            detail = payload.get("error") if isinstance(payload, dict) else None
            raise ValueError(detail or "quote list expected")
        return [CommodityQuote.model_validate(row) for row in payload]

    def get_quotes(self) -> list[CommodityQuote]:
        try:
            quotes = self._fetch_live()
        except (requests.RequestException, ValueError, ValidationError) as exc:
            self.last_source = "mock"
            self.last_error = str(exc)
            print(f"[DASHBOARD][mock_fallback] reason={exc}", flush=True)
            return self.mock_factory()

        self.last_source = "api"
        self.last_error = None
        return quotes
