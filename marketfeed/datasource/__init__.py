from .base import MarketStatusSource
from .http_api import HttpMarketStatusSource, HttpMarketStatusSourceConfig

__all__ = [
    "MarketStatusSource",
    "HttpMarketStatusSource",
    "HttpMarketStatusSourceConfig",
]
