from __future__ import annotations

from typing import Any, Optional

import requests

from commodity_gateway.errors import ProviderPayloadError


class AlphaVantageClient:
    """Minimal Alpha Vantage commodity client returning the decoded JSON body."""

    DEFAULT_BASE_URL = "https://www.alphavantage.co/query"

    def __init__(
        self,
        api_key: str,
        session: Optional[Any] = None,
        base_url: Optional[str] = None,
        timeout_sec: float = 10.0,
        interval: str = "daily",
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url or self.DEFAULT_BASE_URL
        self.session = session or requests
        self.timeout_sec = timeout_sec
        self.interval = interval

    def build_params(self, function: str) -> dict[str, str]:
        return {
            "function": function,
            "interval": self.interval,
            "apikey": self.api_key,
            "datatype": "json",
        }

    def fetch_series(self, function: str) -> Any:
        response = self.session.get(
            self.base_url,
            params=self.build_params(function),
            timeout=self.timeout_sec,
        )
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderPayloadError(f"non-JSON body for function={function}") from exc
