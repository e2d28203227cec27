"""Stock, sector and scan analysis endpoints."""

import asyncio

from fastapi import APIRouter, Depends, Request

from ...config.logging import get_logger
from ...services import AnalysisService
from ..dependencies import get_analysis_service
from ..models.requests import BatchAnalysisRequest, ScanRequest
from ..models.responses import StatusResponse

logger = get_logger(__name__)

router = APIRouter()

DISCONNECT_POLL_SECONDS = 1.0


async def watch_disconnect(
    request: Request,
    abort_event: asyncio.Event,
    interval: float = DISCONNECT_POLL_SECONDS,
) -> None:
    """Set ``abort_event`` once the client has gone away."""
    while not abort_event.is_set():
        if await request.is_disconnected():
            logger.info("Client disconnected, stopping batch", path=request.url.path)
            abort_event.set()
            return
        await asyncio.sleep(interval)


@router.get(
    "/analysis/{code}",
    response_model=StatusResponse,
    summary="Analyze Stock",
    description="Indicators, strategy, score and backtest for one stock code",
)
async def analyze_stock(
    code: str,
    request: Request,
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Analyze a single Taiwan stock.

    - **code**: Stock code without market suffix (e.g., 2330)

    Returns 422 when the stock has too little history and 503 when no price
    source answered.
    """
    request_id = getattr(request.state, "request_id", None)
    code = code.strip().upper()

    logger.info("Stock analysis requested", code=code, request_id=request_id)

    record = await service.analyze_stock(code)
    return StatusResponse.create(data=record.to_dict(), request_id=request_id)


@router.post(
    "/analysis/batch",
    response_model=StatusResponse,
    summary="Analyze Several Stocks",
    description="Analyze codes sequentially; failing codes are reported, not fatal",
)
async def analyze_batch(
    body: BatchAnalysisRequest,
    request: Request,
    service: AnalysisService = Depends(get_analysis_service),
):
    request_id = getattr(request.state, "request_id", None)

    logger.info(
        "Batch analysis requested", total=len(body.codes), request_id=request_id
    )

    outcome = await service.analyze_many(body.codes)
    return StatusResponse.create(
        data=outcome.to_dict(),
        message=f"Analyzed {len(outcome.records)} of {outcome.total} stocks",
        request_id=request_id,
    )


@router.get(
    "/sectors",
    response_model=StatusResponse,
    summary="List Sectors",
    description="Built-in sector watchlists",
)
async def list_sectors(
    request: Request,
    service: AnalysisService = Depends(get_analysis_service),
):
    request_id = getattr(request.state, "request_id", None)
    sectors = [sector.to_dict() for sector in service.list_sectors()]
    return StatusResponse.create(data={"sectors": sectors}, request_id=request_id)


@router.get(
    "/sectors/{sector_id}/analysis",
    response_model=StatusResponse,
    summary="Analyze Sector",
    description="Analyze every stock of a built-in sector",
)
async def analyze_sector(
    sector_id: str,
    request: Request,
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Analyze a sector watchlist.

    - **sector_id**: One of the ids returned by ``/sectors``

    Unknown sector ids return 404.
    """
    request_id = getattr(request.state, "request_id", None)

    logger.info("Sector analysis requested", sector=sector_id, request_id=request_id)

    outcome = await service.analyze_sector(sector_id)
    return StatusResponse.create(data=outcome.to_dict(), request_id=request_id)


@router.post(
    "/scan",
    response_model=StatusResponse,
    summary="Scan For Signals",
    description="Analyze a universe and keep stocks scoring at least min_score",
)
async def scan(
    body: ScanRequest,
    request: Request,
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Scan stocks and return matches ordered by score, best first.

    Without ``codes`` every listed and OTC common stock is scanned, which takes
    a long time at the configured request delay. The scan stops before the next
    stock when the client disconnects.
    """
    request_id = getattr(request.state, "request_id", None)

    logger.info(
        "Scan requested",
        codes=len(body.codes) if body.codes is not None else "universe",
        min_score=body.min_score,
        request_id=request_id,
    )

    abort_event = asyncio.Event()
    watcher = asyncio.create_task(watch_disconnect(request, abort_event))
    try:
        outcome = await service.scan_universe(
            codes=body.codes, min_score=body.min_score, abort_event=abort_event
        )
    finally:
        watcher.cancel()

    return StatusResponse.create(
        data=outcome.to_dict(),
        message=f"{len(outcome.records)} matches in {outcome.completed} stocks",
        request_id=request_id,
    )
