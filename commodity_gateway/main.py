from __future__ import annotations

from fastapi import FastAPI

from commodity_gateway.api.routes import router
from commodity_gateway.config.settings import Settings, get_settings
from commodity_gateway.integrations.alpha_vantage import AlphaVantageClient
from commodity_gateway.services.commodity_quotes import CommodityQuoteService


def build_commodity_service(settings: Settings) -> CommodityQuoteService:
    client = AlphaVantageClient(
        api_key=settings.ALPHAVANTAGE_API_KEY,
        base_url=settings.ALPHAVANTAGE_BASE_URL,
        timeout_sec=settings.ALPHAVANTAGE_TIMEOUT_SEC,
    )
    return CommodityQuoteService(
        provider_client=client,
        api_key=settings.ALPHAVANTAGE_API_KEY,
        max_workers=settings.COMMODITY_FETCH_WORKERS,
    )


app = FastAPI(title="Commodity Quote Gateway", version="0.1.0")
app.include_router(router, prefix="/v1")

app.state.get_settings = get_settings
app.state.commodity_service = build_commodity_service(get_settings())
