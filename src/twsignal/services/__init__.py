"""Service layer for business logic encapsulation."""

from .analysis import AnalysisService
from .market_data import MarketDataService, StockDirectory

__all__ = [
    "AnalysisService",
    "MarketDataService",
    "StockDirectory",
]
