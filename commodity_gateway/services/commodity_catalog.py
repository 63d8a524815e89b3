from __future__ import annotations

from types import MappingProxyType

from commodity_gateway.errors import UnknownCommodityError
from commodity_gateway.schemas.commodity import CommodityMeta

COMMODITY_IDS: tuple[str, ...] = ("WTI", "BRENT", "NATGAS", "GOLD", "SILVER", "COPPER", "WHEAT")

COMMODITY_META = MappingProxyType(
    {
        "WTI": CommodityMeta(id="WTI", display_name="WTI Crude", provider_function="WTI"),
        "BRENT": CommodityMeta(id="BRENT", display_name="Brent Crude", provider_function="BRENT"),
        "NATGAS": CommodityMeta(id="NATGAS", display_name="Natural Gas", provider_function="NATURAL_GAS"),
        "GOLD": CommodityMeta(id="GOLD", display_name="Gold", provider_function="GOLD"),
        "SILVER": CommodityMeta(id="SILVER", display_name="Silver", provider_function="SILVER"),
        "COPPER": CommodityMeta(id="COPPER", display_name="Copper", provider_function="COPPER"),
        "WHEAT": CommodityMeta(id="WHEAT", display_name="Wheat", provider_function="WHEAT"),
    }
)


def get_commodity_meta(commodity_id: str) -> CommodityMeta:
    key = str(commodity_id).strip().upper()
    meta = COMMODITY_META.get(key)
    if meta is None:
        raise UnknownCommodityError(commodity_id)
    return meta
