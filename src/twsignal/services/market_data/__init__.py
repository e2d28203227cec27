"""Market data service module."""

from .cache import InMemorySeriesCache, SeriesCache
from .directory import UNKNOWN_NAME, StockDirectory
from .models import CacheStats, RetryPolicy
from .service import MarketDataService
from .transports import (
    PriceTransport,
    YahooChartTransport,
    YFinanceTransport,
    build_transports,
)

__all__ = [
    "MarketDataService",
    "StockDirectory",
    "UNKNOWN_NAME",
    "SeriesCache",
    "InMemorySeriesCache",
    "CacheStats",
    "RetryPolicy",
    "PriceTransport",
    "YFinanceTransport",
    "YahooChartTransport",
    "build_transports",
]
