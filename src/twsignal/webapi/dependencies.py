"""Request dependencies shared by the routers."""

from fastapi import HTTPException, Request

from ..services import AnalysisService
from ..services.market_data import SeriesCache


def get_analysis_service(request: Request) -> AnalysisService:
    """Analysis service attached to the running app."""
    return request.app.state.analysis_service


def get_series_cache(request: Request) -> SeriesCache:
    """Series cache of the running app's market data service."""
    cache = get_analysis_service(request).market_data.cache
    if cache is None:
        raise HTTPException(status_code=404, detail="Series cache is disabled")
    return cache
