class UnknownCommodityError(KeyError):
    """Raised when a commodity id is not part of the supported set."""


class ProviderPayloadError(ValueError):
    """Raised when the market-data provider returns a body that is not JSON."""
