"""Series cache management endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Request

from ...config.logging import get_logger
from ...services.market_data import SeriesCache
from ..dependencies import get_series_cache
from ..models.responses import MessageResponse, StatusResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/cache")


@router.get(
    "/stats",
    response_model=StatusResponse,
    summary="Cache Statistics",
)
async def cache_stats(request: Request, cache: SeriesCache = Depends(get_series_cache)):
    request_id = getattr(request.state, "request_id", None)
    return StatusResponse.create(data=asdict(cache.stats()), request_id=request_id)


@router.delete(
    "/{code}",
    response_model=MessageResponse,
    summary="Invalidate Cached Series",
)
async def invalidate_code(
    code: str,
    request: Request,
    cache: SeriesCache = Depends(get_series_cache),
):
    request_id = getattr(request.state, "request_id", None)
    code = code.strip().upper()

    if not cache.invalidate(code):
        raise HTTPException(status_code=404, detail=f"{code} is not cached")

    logger.info("Cached series invalidated", code=code, request_id=request_id)
    return MessageResponse.create(
        message=f"Cache for {code} cleared", request_id=request_id
    )


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Clear Cache",
)
async def clear_cache(request: Request, cache: SeriesCache = Depends(get_series_cache)):
    request_id = getattr(request.state, "request_id", None)
    cache.clear()

    logger.info("Series cache cleared", request_id=request_id)
    return MessageResponse.create(message="Cache cleared", request_id=request_id)
