"""Health check endpoint for the twsignal API."""

import time
from dataclasses import asdict

from fastapi import APIRouter, Depends

from .. import __version__
from ..config.logging import get_logger
from ..services import AnalysisService
from .dependencies import get_analysis_service
from .models.responses import HealthResponse, HealthStatus

logger = get_logger(__name__)
router = APIRouter()

# Track application start time for uptime calculation
_app_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Basic Health Check")
async def basic_health_check(
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Report application status, uptime and series cache counters.

    The price source is not probed; a failing source shows up as 503s on the
    analysis endpoints instead.
    """
    cache = service.market_data.cache
    health_status = HealthStatus(
        status="healthy",
        uptime_seconds=time.time() - _app_start_time,
        version=__version__,
        cache=asdict(cache.stats()) if cache is not None else None,
    )

    logger.debug("Health check completed", status=health_status.status)
    return HealthResponse(success=True, health=health_status)
